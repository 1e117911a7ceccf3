"""WebSocket endpoint for live voice sessions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket
from starlette.websockets import WebSocketDisconnect

from services.gemini.errors import GeminiServiceError
from services.live.voice_controller import LiveVoiceController
from services.live.ws_audio import WebSocketMicrophone, WebSocketSpeaker, send_json

router = APIRouter()


@router.websocket("/ws/live")
async def live_voice_socket(websocket: WebSocket):
	"""Relay browser microphone audio to a live session and stream replies back."""
	await websocket.accept()
	service = getattr(websocket.app.state, "gemini_service", None)
	if service is None:
		await send_json(websocket, {"type": "error", "detail": "Gemini service unavailable"})
		await websocket.close()
		return

	controller = LiveVoiceController(service.live_connector)
	try:
		await controller.run(WebSocketMicrophone(websocket), WebSocketSpeaker(websocket))
	except WebSocketDisconnect:
		return
	except GeminiServiceError as exc:
		await send_json(websocket, {"type": "error", "detail": str(exc)})
	except Exception as exc:
		logging.error("Live voice websocket failed: %s", exc)
		try:
			await send_json(websocket, {"type": "error", "detail": "Live session failed"})
		except (WebSocketDisconnect, RuntimeError):
			return
	try:
		await websocket.close()
	except RuntimeError:
		pass
