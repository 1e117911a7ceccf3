"""Live audio session with an owned lifecycle and an event queue."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Callable, Optional

from google.genai import types

from services.gemini.errors import LiveSessionClosedError
from services.live.events import LiveEvent, SessionClosed, SessionOpened, events_from_message
from services.live.pcm_codec import PCM_MIME_TYPE, float_to_pcm16

EVENT_QUEUE_SIZE = 64

LOGGER = logging.getLogger(__name__)


class LiveSession:
	"""A bidirectional audio channel to the live model.

	The session enters the connection context on ``open()`` and leaves it on
	``close()`` or when the server side ends. Everything received is turned
	into events on a bounded queue; a slow consumer slows the reader down
	instead of dropping audio.
	"""

	def __init__(
		self,
		connect_cm: Any,
		*,
		queue_size: int = EVENT_QUEUE_SIZE,
		on_close: Optional[Callable[["LiveSession"], None]] = None,
	) -> None:
		self._connect_cm = connect_cm
		self._connection: Any = None
		self._events: asyncio.Queue[LiveEvent] = asyncio.Queue(maxsize=queue_size)
		self._receiver: Optional[asyncio.Task] = None
		self._on_close = on_close
		self._finished = False
		self.is_open = False
		self.close_reason: Optional[str] = None

	async def __aenter__(self) -> "LiveSession":
		return await self.open()

	async def __aexit__(self, exc_type, exc, tb) -> None:
		await self.close("closed by client")

	async def open(self) -> "LiveSession":
		"""Negotiate the session and start reading server messages."""
		if self.is_open or self._finished:
			raise RuntimeError("Live session can only be opened once.")
		try:
			self._connection = await self._connect_cm.__aenter__()
		except BaseException:
			# Cancelled or failed negotiation still gives the slot back
			self._finished = True
			self.close_reason = "negotiation failed"
			self._notify_closed()
			raise
		self.is_open = True
		await self._events.put(SessionOpened())
		self._receiver = asyncio.create_task(self._receive_loop())
		LOGGER.info("Live session opened")
		return self

	async def send_frame(self, samples) -> None:
		"""Quantize one captured frame and push it as realtime input."""
		if not self.is_open:
			raise LiveSessionClosedError("Live session is not open.")
		await self._connection.send_realtime_input(
			audio=types.Blob(data=float_to_pcm16(samples), mime_type=PCM_MIME_TYPE)
		)

	async def close(self, reason: str = "closed by client") -> None:
		"""Stop receiving and leave the connection; in-flight audio is not drained."""
		receiver = self._receiver
		if receiver is not None and receiver is not asyncio.current_task() and not receiver.done():
			receiver.cancel()
			try:
				await receiver
			except asyncio.CancelledError:
				pass
		await self._finish(reason)

	async def events(self) -> AsyncIterator[LiveEvent]:
		"""Yield events in arrival order, ending after ``SessionClosed``."""
		while True:
			event = await self._events.get()
			yield event
			if isinstance(event, SessionClosed):
				return

	async def _receive_loop(self) -> None:
		reason = "session ended by server"
		try:
			while self.is_open:
				# receive() ends after each model turn; keep reading turns until closed
				received = False
				async for message in self._connection.receive():
					received = True
					for event in events_from_message(message):
						await self._events.put(event)
				if not received:
					break
		except asyncio.CancelledError:
			raise
		except Exception as exc:
			LOGGER.error("Live session receive failed: %s", exc)
			reason = f"session error: {exc}"
		await self._finish(reason)

	async def _finish(self, reason: str) -> None:
		if self._finished:
			return
		self._finished = True
		self.is_open = False
		self.close_reason = reason
		try:
			if self._connection is not None:
				await self._connect_cm.__aexit__(None, None, None)
		except Exception as exc:
			LOGGER.error("Error while closing live connection: %s", exc)
		finally:
			self._notify_closed()
			# Undelivered events are discarded so the close marker always fits
			while self._events.full():
				self._events.get_nowait()
			self._events.put_nowait(SessionClosed(reason))
			LOGGER.info("Live session closed: %s", reason)

	def _notify_closed(self) -> None:
		if self._on_close is not None:
			self._on_close(self)
