"""Live voice toggle: owns one bridge run at a time."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import Any

from services.gemini.errors import LiveSessionBusyError
from services.live.audio_bridge import AudioSink, LiveAudioBridge, TranscriptBuffer
from services.live.live_connector import LiveConnector


class LiveVoiceController:
	"""Run live voice for one client.

	Toggling on is a call to ``run``; toggling off is the capture source
	ending (the browser sends ``live.stop`` or disconnects), which closes the
	session without draining pending audio. The capture source is acquired
	first and the session opened second; both are released on every exit
	path, including a failed or cancelled negotiation after the microphone
	was already granted.
	"""

	def __init__(self, connector: LiveConnector) -> None:
		if connector is None:
			raise ValueError("Live connector is required.")
		self.connector = connector
		self.transcript = TranscriptBuffer()
		self.is_active = False

	async def run(self, capture: Any, sink: AudioSink) -> None:
		"""Run the session in the calling task until it ends."""
		if self.is_active:
			raise LiveSessionBusyError("Live voice is already active.")
		self.is_active = True
		try:
			async with AsyncExitStack() as stack:
				frames = await stack.enter_async_context(capture)
				session = await stack.enter_async_context(self.connector.connect())
				await LiveAudioBridge(session, sink, self.transcript).run(frames)
		except Exception as exc:
			logging.error("Live voice session failed: %s", exc)
			raise
		finally:
			self.is_active = False
