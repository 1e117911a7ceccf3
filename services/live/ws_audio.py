"""Microphone and speaker endpoints backed by the browser websocket.

The browser captures at 16 kHz and sends each buffer as a binary frame of
little-endian float32 samples. Playback goes back the same way; lifecycle
and transcript notices are JSON text frames.
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Dict

import numpy as np
from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from services.live.pcm_codec import FRAME_SAMPLES, SAMPLE_RATE, samples_from_bytes, samples_to_bytes

STOP_MESSAGE = "live.stop"

LOGGER = logging.getLogger(__name__)


async def send_json(websocket: WebSocket, payload: Dict[str, Any]) -> None:
	await websocket.send_text(json.dumps(payload))


class WebSocketMicrophone:
	"""Capture source: entering it asks the browser to start its microphone."""

	def __init__(self, websocket: WebSocket) -> None:
		self.websocket = websocket

	async def __aenter__(self) -> AsyncIterator[np.ndarray]:
		await send_json(
			self.websocket,
			{"type": "live.capture.start", "sample_rate": SAMPLE_RATE, "frame_samples": FRAME_SAMPLES},
		)
		return self.frames()

	async def __aexit__(self, exc_type, exc, tb) -> None:
		try:
			await send_json(self.websocket, {"type": "live.capture.stop"})
		except (WebSocketDisconnect, RuntimeError):
			LOGGER.debug("Websocket gone before capture stop was sent")

	async def frames(self) -> AsyncIterator[np.ndarray]:
		"""Yield captured frames until the browser stops or disconnects."""
		while True:
			message = await self.websocket.receive()
			if message.get("type") == "websocket.disconnect":
				return
			raw = message.get("bytes")
			if raw is not None:
				try:
					yield samples_from_bytes(raw)
				except ValueError as exc:
					await send_json(self.websocket, {"type": "error", "detail": str(exc)})
				continue
			try:
				payload = json.loads(message.get("text") or "")
			except json.JSONDecodeError:
				await send_json(self.websocket, {"type": "error", "detail": "Payload must be JSON"})
				continue
			if not isinstance(payload, dict):
				await send_json(self.websocket, {"type": "error", "detail": "Payload must be a JSON object"})
				continue
			if payload.get("type") == STOP_MESSAGE:
				return


class WebSocketSpeaker:
	"""Audio sink that forwards playback and transcript to the browser."""

	def __init__(self, websocket: WebSocket) -> None:
		self.websocket = websocket

	async def opened(self) -> None:
		await send_json(self.websocket, {"type": "live.opened", "sample_rate": SAMPLE_RATE})

	async def play(self, samples: np.ndarray, sample_rate: int) -> None:
		await self.websocket.send_bytes(samples_to_bytes(samples))

	async def transcript(self, delta: str, text: str) -> None:
		await send_json(self.websocket, {"type": "live.transcript", "delta": delta, "text": text})

	async def closed(self, reason: str) -> None:
		try:
			await send_json(self.websocket, {"type": "live.closed", "reason": reason})
		except (WebSocketDisconnect, RuntimeError):
			LOGGER.debug("Websocket gone before live.closed was sent")
