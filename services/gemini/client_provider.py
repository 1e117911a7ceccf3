"""Lazily construct the authenticated Gemini client shared by every service."""

import logging
import os
from typing import Any, Optional

from google import genai

from services.gemini.errors import MissingCredentialError

API_KEY_ENV = "GEMINI_API_KEY"


class GeminiClientProvider:
    """Hand out a ``genai.Client`` once a credential is known.

    The credential is checked on every ``get()`` so that a missing key fails
    the individual call before any request is built.
    """

    def __init__(self, api_key: Optional[str] = None, client: Any = None) -> None:
        """Create the provider.

        Args:
            api_key: Gemini API key. Falls back to ``GEMINI_API_KEY`` when omitted.
            client: Optional preconstructed client, used instead of building one.
        """
        self._api_key = api_key if api_key is not None else os.getenv(API_KEY_ENV)
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def api_key(self) -> str:
        """Return the API key or raise if none is configured."""
        if not self._api_key:
            raise MissingCredentialError(f"{API_KEY_ENV} is not set")
        return self._api_key

    def get(self) -> Any:
        """Return the shared client, creating it on first use."""
        api_key = self.api_key
        if self._client is None:
            try:
                self._client = genai.Client(api_key=api_key)
            except Exception as exc:
                logging.error("Failed to initialize Gemini client: %s", exc)
                raise
        return self._client

    async def aclose(self) -> None:
        """Close the underlying client's async transport if it exposes one."""
        if self._client is None:
            return
        aio = getattr(self._client, "aio", None)
        aclose = getattr(aio, "aclose", None)
        if aclose is not None:
            await aclose()
