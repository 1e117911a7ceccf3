"""Error taxonomy for the Gemini-backed workspace services.

Provider and network failures (``google.genai.errors.APIError``,
``httpx.HTTPError``) are not wrapped; they reach the caller as raised.
"""


class GeminiServiceError(Exception):
    """Base class for errors raised by the workspace services."""


class MissingCredentialError(GeminiServiceError):
    """Raised when no Gemini API key is configured."""


class NoResultProducedError(GeminiServiceError):
    """Raised when the provider answered but returned no usable media."""


class GenerationFailedError(GeminiServiceError):
    """Raised when a video operation completed without a result."""


class PollTimeoutError(GeminiServiceError):
    """Raised when a video operation exceeds the configured attempt bound."""


class PollCancelledError(GeminiServiceError):
    """Raised when a caller cancels an in-flight video poll."""


class LiveSessionBusyError(GeminiServiceError):
    """Raised when a live session is requested while another is still open."""


class LiveSessionClosedError(GeminiServiceError):
    """Raised when sending audio to a session that is no longer open."""
