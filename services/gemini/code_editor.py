"""Code editing helper built on Gemini text generation.

The editor rewrites a whole file from an instruction. It never raises on a
bad model answer: an empty response or a provider failure leaves the caller
with the code it sent, so a returned value is not proof that anything
changed. A missing API key is still raised.
"""

import logging
import os
import time

from google.genai import types

from services.gemini.client_provider import GeminiClientProvider
from services.gemini.prompts import EXPLAIN_INSTRUCTION, FIX_INSTRUCTION, edit_code_prompt
from services.gemini.response_parser import extract_text, strip_code_fences

TEXT_MODEL = os.getenv("GEMINI_TEXT_MODEL", "gemini-3.1-pro-preview")
EDIT_TEMPERATURE = 0.2


class CodeEditor:
    """Edit, explain and fix source files."""

    def __init__(self, provider: GeminiClientProvider, model: str = TEXT_MODEL) -> None:
        if provider is None:
            raise ValueError("Gemini client provider is required.")
        self.provider = provider
        self.model = model

    async def edit_code(self, code: str, instruction: str, filename: str) -> str:
        """Return the edited file content, or ``code`` when no edit came back.

        Args:
            code: Current content of the file.
            instruction: What the user wants changed.
            filename: File name; its extension is passed along as the language.

        Returns:
            The updated code with any Markdown fences removed.
        """
        client = self.provider.get()
        start = time.time()

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=[edit_code_prompt(code, instruction, filename)],
                config=types.GenerateContentConfig(temperature=EDIT_TEMPERATURE),
            )
        except Exception as exc:
            logging.error("Gemini code edit failed for %s: %s", filename, exc)
            return code

        edited = strip_code_fences(extract_text(response))
        logging.info("Code edit latency for %s: %.3fs", filename, time.time() - start)
        return edited or code

    async def explain_code(self, code: str, filename: str) -> str:
        return await self.edit_code(code, EXPLAIN_INSTRUCTION, filename)

    async def fix_bugs(self, code: str, filename: str) -> str:
        return await self.edit_code(code, FIX_INSTRUCTION, filename)
