"""Free-text image analysis with Gemini vision."""

import logging
import os

from google.genai import types

from services.gemini.client_provider import GeminiClientProvider
from services.gemini.prompts import ANALYZE_PROMPT
from services.gemini.response_parser import extract_text
from utils.media_validation import decode_image_data_uri

VISION_MODEL = os.getenv("GEMINI_TEXT_MODEL", "gemini-3.1-pro-preview")


class ImageAnalyzer:
    """Describe the technical content of an uploaded image."""

    def __init__(self, provider: GeminiClientProvider, model: str = VISION_MODEL) -> None:
        if provider is None:
            raise ValueError("Gemini client provider is required.")
        self.provider = provider
        self.model = model

    async def analyze_image(self, image_data_uri: str, prompt: str = ANALYZE_PROMPT) -> str:
        """Send the raw image bytes and ``prompt``; return the model's analysis."""
        client = self.provider.get()
        image_bytes, mime_type = decode_image_data_uri(image_data_uri)
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    prompt or ANALYZE_PROMPT,
                ],
            )
        except Exception as exc:
            logging.error("Gemini image analysis failed: %s", exc)
            raise
        return extract_text(response)
