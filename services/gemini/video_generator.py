"""Video generation with Veo: submit, poll, download."""

import asyncio
import logging
import os
import time
from typing import Optional

import httpx
from google.genai import types

from services.gemini.client_provider import GeminiClientProvider
from services.gemini.errors import NoResultProducedError
from services.gemini.video_poller import POLL_INTERVAL_S, POLL_MAX_ATTEMPTS, VideoOperationPoller
from services.media_store import MediaStore

VIDEO_MODEL = os.getenv("GEMINI_VIDEO_MODEL", "veo-3.1-fast-generate-preview")
DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_RESOLUTION = "720p"
DOWNLOAD_TIMEOUT_S = 120.0


class VideoGenerator:
    """Generate a single video and keep the result in the media store."""

    def __init__(
        self,
        provider: GeminiClientProvider,
        media_store: MediaStore,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        model: str = VIDEO_MODEL,
        poll_interval: float = POLL_INTERVAL_S,
        poll_max_attempts: Optional[int] = POLL_MAX_ATTEMPTS,
        sleep=asyncio.sleep,
    ) -> None:
        if provider is None:
            raise ValueError("Gemini client provider is required.")
        if media_store is None:
            raise ValueError("Media store is required for video results.")
        self.provider = provider
        self.media_store = media_store
        self.http_client = http_client
        self.model = model
        self.poll_interval = poll_interval
        self.poll_max_attempts = poll_max_attempts
        self._sleep = sleep

    async def generate_video(
        self,
        prompt: str,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
        resolution: str = DEFAULT_RESOLUTION,
        cancel: Optional[asyncio.Event] = None,
    ) -> str:
        """Return a local ``/media/<id>`` reference to the generated video.

        Raises:
            GenerationFailedError: The finished operation had no video.
            NoResultProducedError: The video download came back empty.
            PollTimeoutError: The operation did not finish within the attempt bound.
            PollCancelledError: ``cancel`` was set before the operation finished.
        """
        client = self.provider.get()
        start = time.time()
        try:
            operation = await client.aio.models.generate_videos(
                model=self.model,
                prompt=prompt,
                config=types.GenerateVideosConfig(
                    number_of_videos=1,
                    resolution=resolution,
                    aspect_ratio=aspect_ratio,
                ),
            )
        except Exception as exc:
            logging.error("Gemini video submission failed: %s", exc)
            raise

        poller = VideoOperationPoller(
            client,
            interval=self.poll_interval,
            max_attempts=self.poll_max_attempts,
            sleep=self._sleep,
        )
        _, state = await poller.wait_for_result(operation, cancel=cancel)

        content, content_type = await self._download(state.result_uri)
        if not content:
            raise NoResultProducedError("Video download was empty")
        asset = self.media_store.put(content, content_type)
        logging.info(
            "Video generation latency: %.3fs after %d status checks", time.time() - start, state.attempts
        )
        return MediaStore.url_for(asset)

    async def _download(self, uri: str) -> tuple[bytes, str]:
        """Fetch the finished video using the API key as the auth header."""
        headers = {"x-goog-api-key": self.provider.api_key}
        if self.http_client is not None:
            response = await self.http_client.get(uri, headers=headers)
        else:
            async with httpx.AsyncClient(follow_redirects=True, timeout=DOWNLOAD_TIMEOUT_S) as http:
                response = await http.get(uri, headers=headers)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "video/mp4").split(";", 1)[0]
        return response.content, content_type
