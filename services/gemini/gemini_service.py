"""Facade tying every workspace capability to one shared Gemini client.

Each method maps one UI action onto a single provider call (video adds the
poll loop and download). Nothing here retries: a provider error reaches the
caller as raised, apart from code edits, which fall back to the original code.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from models.generation_models import (
    AnalysisTextResult,
    Capability,
    GenerationRequest,
    GenerationResult,
    ImageDataUriResult,
    TextResult,
    VideoUriResult,
)
from services.gemini.chat_assistant import ChatAssistant
from services.gemini.client_provider import GeminiClientProvider
from services.gemini.code_editor import CodeEditor
from services.gemini.image_analyzer import ImageAnalyzer
from services.gemini.image_generator import DEFAULT_ASPECT_RATIO as IMAGE_ASPECT_RATIO
from services.gemini.image_generator import DEFAULT_IMAGE_SIZE, ImageGenerator
from services.gemini.prompts import ANALYZE_PROMPT
from services.gemini.video_generator import DEFAULT_ASPECT_RATIO as VIDEO_ASPECT_RATIO
from services.gemini.video_generator import DEFAULT_RESOLUTION, VideoGenerator
from services.live.live_connector import LiveConnector
from services.live.live_session import LiveSession
from services.media_store import MediaStore


class GeminiService:
    """One method per workspace capability."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        client: Any = None,
        media_store: Optional[MediaStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        video_options: Optional[dict] = None,
    ) -> None:
        """Build the capability services around a shared client provider.

        Args:
            api_key: Gemini API key; ``GEMINI_API_KEY`` is used when omitted.
            client: Optional preconstructed ``genai.Client`` (or a stand-in).
            media_store: Store receiving downloaded videos.
            http_client: Optional HTTP client used for video downloads.
            video_options: Extra keyword arguments for ``VideoGenerator``
                (``poll_interval``, ``poll_max_attempts``, ``sleep``).
        """
        self.provider = GeminiClientProvider(api_key=api_key, client=client)
        self.media_store = media_store or MediaStore()
        self.code_editor = CodeEditor(self.provider)
        self.chat_assistant = ChatAssistant(self.provider)
        self.image_generator = ImageGenerator(self.provider)
        self.image_analyzer = ImageAnalyzer(self.provider)
        self.video_generator = VideoGenerator(
            self.provider, self.media_store, http_client=http_client, **(video_options or {})
        )
        self.live_connector = LiveConnector(self.provider)

    @property
    def configured(self) -> bool:
        return self.provider.configured

    async def edit_code(self, code: str, instruction: str, filename: str) -> str:
        return await self.code_editor.edit_code(code, instruction, filename)

    async def explain_code(self, code: str, filename: str) -> str:
        return await self.code_editor.explain_code(code, filename)

    async def fix_bugs(self, code: str, filename: str) -> str:
        return await self.code_editor.fix_bugs(code, filename)

    async def chat(self, message: str) -> TextResult:
        return await self.chat_assistant.chat(message)

    async def generate_image(
        self, prompt: str, aspect_ratio: str = IMAGE_ASPECT_RATIO, image_size: str = DEFAULT_IMAGE_SIZE
    ) -> str:
        return await self.image_generator.generate_image(prompt, aspect_ratio, image_size)

    async def generate_video(
        self,
        prompt: str,
        aspect_ratio: str = VIDEO_ASPECT_RATIO,
        resolution: str = DEFAULT_RESOLUTION,
        cancel: Optional[asyncio.Event] = None,
    ) -> str:
        return await self.video_generator.generate_video(prompt, aspect_ratio, resolution, cancel=cancel)

    async def analyze_image(self, image_data_uri: str, prompt: str = ANALYZE_PROMPT) -> str:
        return await self.image_analyzer.analyze_image(image_data_uri, prompt)

    def connect_live(self) -> LiveSession:
        """Return an unopened live session; use it as an async context manager."""
        return self.live_connector.connect()

    async def run(self, request: GenerationRequest, cancel: Optional[asyncio.Event] = None) -> GenerationResult:
        """Dispatch a generation request to its capability.

        Raises:
            ValueError: If a capability-specific field is missing.
        """
        capability = Capability(request.capability)
        if capability is Capability.EDIT:
            if request.code is None or not request.filename:
                raise ValueError("Edit requests need both code and filename.")
            text = await self.edit_code(request.code, request.prompt, request.filename)
            return TextResult(text=text)
        if capability is Capability.CHAT:
            return await self.chat(request.prompt)
        if capability is Capability.IMAGE:
            data_uri = await self.generate_image(
                request.prompt,
                request.aspect_ratio or IMAGE_ASPECT_RATIO,
                request.image_size or DEFAULT_IMAGE_SIZE,
            )
            return ImageDataUriResult(data_uri=data_uri)
        if capability is Capability.VIDEO:
            uri = await self.generate_video(
                request.prompt,
                request.aspect_ratio or VIDEO_ASPECT_RATIO,
                request.resolution or DEFAULT_RESOLUTION,
                cancel=cancel,
            )
            return VideoUriResult(uri=uri)
        if not request.image_data_uri:
            raise ValueError("Analyze requests need an image data URI.")
        text = await self.analyze_image(request.image_data_uri, request.prompt or ANALYZE_PROMPT)
        return AnalysisTextResult(text=text)

    async def aclose(self) -> None:
        """Release the provider client and any owned HTTP transport."""
        http_client = self.video_generator.http_client
        if http_client is not None:
            await http_client.aclose()
        await self.provider.aclose()
