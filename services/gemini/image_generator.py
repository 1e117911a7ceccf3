"""Image generation with the Gemini image model."""

import logging
import os

from google.genai import types

from services.gemini.client_provider import GeminiClientProvider
from services.gemini.errors import NoResultProducedError
from services.gemini.response_parser import first_inline_part
from utils.media_validation import to_png_data_uri

IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-3-pro-image-preview")
DEFAULT_ASPECT_RATIO = "1:1"
DEFAULT_IMAGE_SIZE = "1K"


class ImageGenerator:
    """Generate one image per prompt."""

    def __init__(self, provider: GeminiClientProvider, model: str = IMAGE_MODEL) -> None:
        if provider is None:
            raise ValueError("Gemini client provider is required.")
        self.provider = provider
        self.model = model

    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
        image_size: str = DEFAULT_IMAGE_SIZE,
    ) -> str:
        """Return the generated image as a ``data:image/png;base64,`` URI.

        Raises:
            NoResultProducedError: If the response carries no image part.
        """
        client = self.provider.get()
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    image_config=types.ImageConfig(aspect_ratio=aspect_ratio, image_size=image_size),
                ),
            )
        except Exception as exc:
            logging.error("Gemini image generation failed: %s", exc)
            raise

        part = first_inline_part(response)
        if part is None or not part.inline_data.data:
            raise NoResultProducedError("No image generated")
        return to_png_data_uri(part.inline_data.data)
