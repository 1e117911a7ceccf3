"""Pump captured audio into a live session and play back what comes out."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Protocol

import numpy as np

from services.gemini.errors import LiveSessionClosedError
from services.live.events import AudioFrameReceived, SessionClosed, SessionOpened, TranscriptDelta
from services.live.live_session import LiveSession
from services.live.pcm_codec import SAMPLE_RATE, pcm16_to_float

LOGGER = logging.getLogger(__name__)


class AudioSink(Protocol):
	"""Where decoded playback audio and session notices are delivered."""

	async def opened(self) -> None: ...

	async def play(self, samples: np.ndarray, sample_rate: int) -> None: ...

	async def transcript(self, delta: str, text: str) -> None: ...

	async def closed(self, reason: str) -> None: ...


class TranscriptBuffer:
	"""Running transcript built from space-separated partial texts."""

	def __init__(self) -> None:
		self.text = ""

	def append(self, delta: str) -> str:
		self.text = f"{self.text} {delta}" if self.text else delta
		return self.text

	def clear(self) -> None:
		self.text = ""


class LiveAudioBridge:
	"""Run the capture and playback paths of one live session.

	Frames are sent in capture order. Playback consumes events one at a time,
	so audio chunks are handed to the sink in arrival order without overlap.
	"""

	def __init__(self, session: LiveSession, sink: AudioSink, transcript: TranscriptBuffer | None = None) -> None:
		self.session = session
		self.sink = sink
		self.transcript = transcript if transcript is not None else TranscriptBuffer()
		self.frames_sent = 0

	async def run(self, frames: AsyncIterator[np.ndarray]) -> None:
		"""Stream until capture ends or the session closes, then close the session."""
		capture = asyncio.create_task(self._pump_capture(frames))
		playback = asyncio.create_task(self._pump_playback())
		try:
			done, _ = await asyncio.wait({capture, playback}, return_when=asyncio.FIRST_COMPLETED)
			for task in done:
				task.result()
		finally:
			for task in (capture, playback):
				if not task.done():
					task.cancel()
			await asyncio.gather(capture, playback, return_exceptions=True)
			await self.session.close("closed by client")
			await self.sink.closed(self.session.close_reason or "closed by client")

	async def _pump_capture(self, frames: AsyncIterator[np.ndarray]) -> None:
		async for samples in frames:
			if not self.session.is_open:
				break
			try:
				await self.session.send_frame(samples)
			except LiveSessionClosedError:
				break
			self.frames_sent += 1
		LOGGER.debug("Capture ended after %d frames", self.frames_sent)

	async def _pump_playback(self) -> None:
		async for event in self.session.events():
			if isinstance(event, SessionOpened):
				await self.sink.opened()
			elif isinstance(event, AudioFrameReceived):
				await self.sink.play(pcm16_to_float(event.data), SAMPLE_RATE)
			elif isinstance(event, TranscriptDelta):
				await self.sink.transcript(event.text, self.transcript.append(event.text))
			elif isinstance(event, SessionClosed):
				return
