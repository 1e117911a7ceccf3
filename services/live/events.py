"""Events emitted by a live session, in the order they arrive."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, List, Union


@dataclass(frozen=True)
class SessionOpened:
	pass


@dataclass(frozen=True)
class AudioFrameReceived:
	data: bytes


@dataclass(frozen=True)
class TranscriptDelta:
	text: str


@dataclass(frozen=True)
class SessionClosed:
	reason: str


LiveEvent = Union[SessionOpened, AudioFrameReceived, TranscriptDelta, SessionClosed]


def _payload_bytes(data: Any) -> bytes:
	if isinstance(data, str):
		return base64.b64decode(data)
	return bytes(data)


def events_from_message(message: Any) -> List[LiveEvent]:
	"""Translate one server message into zero or more live events.

	Inline audio parts become ``AudioFrameReceived``; text parts and output
	transcriptions become ``TranscriptDelta``.
	"""
	server_content = getattr(message, "server_content", None)
	if server_content is None:
		return []

	events: List[LiveEvent] = []
	model_turn = getattr(server_content, "model_turn", None)
	for part in getattr(model_turn, "parts", None) or []:
		inline_data = getattr(part, "inline_data", None)
		if inline_data is not None and getattr(inline_data, "data", None):
			events.append(AudioFrameReceived(_payload_bytes(inline_data.data)))
		text = getattr(part, "text", None)
		if text:
			events.append(TranscriptDelta(text))

	transcription = getattr(server_content, "output_transcription", None)
	transcript_text = getattr(transcription, "text", None)
	if transcript_text:
		events.append(TranscriptDelta(transcript_text))
	return events
