"""Open live voice sessions against the Gemini Live API."""

from __future__ import annotations

import os
from typing import Optional

from google.genai import types

from services.gemini.client_provider import GeminiClientProvider
from services.gemini.errors import LiveSessionBusyError
from services.gemini.prompts import live_system_prompt
from services.live.live_session import LiveSession

LIVE_MODEL = os.getenv("GEMINI_LIVE_MODEL", "gemini-2.5-flash-native-audio-preview-09-2025")
VOICE_NAME = "Zephyr"


def build_live_config() -> types.LiveConnectConfig:
	"""Return the audio-only session config with the fixed prebuilt voice."""
	return types.LiveConnectConfig(
		response_modalities=[types.Modality.AUDIO],
		speech_config=types.SpeechConfig(
			voice_config=types.VoiceConfig(
				prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=VOICE_NAME)
			)
		),
		system_instruction=live_system_prompt(),
		output_audio_transcription=types.AudioTranscriptionConfig(),
	)


class LiveConnector:
	"""Create live sessions, allowing only one open session at a time."""

	def __init__(self, provider: GeminiClientProvider, model: str = LIVE_MODEL) -> None:
		if provider is None:
			raise ValueError("Gemini client provider is required.")
		self.provider = provider
		self.model = model
		self._active: Optional[LiveSession] = None

	@property
	def active_session(self) -> Optional[LiveSession]:
		return self._active

	def connect(self) -> LiveSession:
		"""Return an unopened session; enter it (or call ``open()``) to connect.

		Raises:
			MissingCredentialError: No API key is configured.
			LiveSessionBusyError: Another session from this connector is still live.
		"""
		client = self.provider.get()
		if self._active is not None:
			raise LiveSessionBusyError("A live session is already active.")
		connect_cm = client.aio.live.connect(model=self.model, config=build_live_config())
		session = LiveSession(connect_cm, on_close=self._release)
		self._active = session
		return session

	def _release(self, session: LiveSession) -> None:
		if self._active is session:
			self._active = None
