"""Search-grounded chat with Gemini."""

import logging
import os
from typing import Any

from google.genai import types

from models.generation_models import TextResult
from services.gemini.client_provider import GeminiClientProvider
from services.gemini.prompts import chat_system_prompt
from services.gemini.response_parser import extract_text, grounding_sources

CHAT_MODEL = os.getenv("GEMINI_TEXT_MODEL", "gemini-3.1-pro-preview")


class ChatAssistant:
    """Answer a single message with Google Search grounding.

    Every call opens a new chat, so no history carries over between messages.
    """

    def __init__(self, provider: GeminiClientProvider, model: str = CHAT_MODEL) -> None:
        if provider is None:
            raise ValueError("Gemini client provider is required.")
        self.provider = provider
        self.model = model

    def _chat_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=chat_system_prompt(),
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

    async def chat(self, message: str) -> TextResult:
        """Return the answer text plus any grounding citations."""
        if not message or not message.strip():
            raise ValueError("Chat message must not be empty.")
        client = self.provider.get()
        chat: Any = client.aio.chats.create(model=self.model, config=self._chat_config())
        try:
            response = await chat.send_message(message)
        except Exception as exc:
            logging.error("Gemini chat request failed: %s", exc)
            raise
        return TextResult(text=extract_text(response), sources=tuple(grounding_sources(response)))
