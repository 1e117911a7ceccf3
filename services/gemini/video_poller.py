"""Poll a long-running Gemini video operation until it settles.

The loop moves ``Submitted -> Polling -> Done | Failed``. It checks the
operation every ``interval`` seconds and stops for good on the first
completion, the first error, cancellation, or once ``max_attempts`` status
checks have been spent.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Awaitable, Callable, Optional

from models.generation_models import VideoOperationState
from services.gemini.errors import GenerationFailedError, PollCancelledError, PollTimeoutError
from services.gemini.response_parser import video_uri

POLL_INTERVAL_S = float(os.getenv("VIDEO_POLL_INTERVAL_S", "5"))
POLL_MAX_ATTEMPTS = int(os.getenv("VIDEO_POLL_MAX_ATTEMPTS", "120"))

LOGGER = logging.getLogger(__name__)


class VideoOperationPoller:
    """Re-fetch an operation on a fixed interval until it is done."""

    def __init__(
        self,
        client: Any,
        *,
        interval: float = POLL_INTERVAL_S,
        max_attempts: Optional[int] = POLL_MAX_ATTEMPTS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if client is None:
            raise ValueError("Gemini client is required for polling.")
        if interval < 0:
            raise ValueError("Poll interval must be non-negative.")
        self.client = client
        self.interval = interval
        self.max_attempts = max_attempts
        self._sleep = sleep

    async def wait_for_result(
        self,
        operation: Any,
        cancel: Optional[asyncio.Event] = None,
    ) -> tuple[Any, VideoOperationState]:
        """Poll ``operation`` and return it with its final state once it has a video URI.

        Args:
            operation: Operation handle returned by the video submission.
            cancel: Optional event; setting it stops the loop before the next check.

        Raises:
            GenerationFailedError: The operation finished with an error or without a video.
            PollTimeoutError: ``max_attempts`` checks passed without completion.
            PollCancelledError: ``cancel`` was set while polling.
        """
        state = VideoOperationState(done=bool(getattr(operation, "done", False)))
        while not state.done:
            if self.max_attempts is not None and state.attempts >= self.max_attempts:
                raise PollTimeoutError(
                    f"Video operation still running after {state.attempts} status checks"
                )
            await self._wait(cancel)
            operation = await self.client.aio.operations.get(operation)
            state.attempts += 1
            state.done = bool(getattr(operation, "done", False))
            LOGGER.debug("Video operation check %d: done=%s", state.attempts, state.done)

        error = getattr(operation, "error", None)
        if error:
            raise GenerationFailedError(f"Video generation failed: {error}")

        state.result_uri = video_uri(operation)
        if not state.result_uri:
            raise GenerationFailedError("Video generation failed")
        return operation, state

    async def _wait(self, cancel: Optional[asyncio.Event]) -> None:
        if cancel is None:
            await self._sleep(self.interval)
            return
        if cancel.is_set():
            raise PollCancelledError("Video polling was cancelled")
        sleeper = asyncio.ensure_future(self._sleep(self.interval))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, waiter):
                task.cancel()
            await asyncio.gather(sleeper, waiter, return_exceptions=True)
        if cancel.is_set():
            raise PollCancelledError("Video polling was cancelled")
