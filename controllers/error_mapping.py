"""Translate service errors into HTTP errors for the workspace UI."""

import logging

from fastapi import HTTPException, Request

from services.gemini.errors import (
    GenerationFailedError,
    LiveSessionBusyError,
    MissingCredentialError,
    NoResultProducedError,
    PollCancelledError,
    PollTimeoutError,
)
from services.gemini.gemini_service import GeminiService


def get_gemini_service(request: Request) -> GeminiService:
    """Retrieve the shared Gemini service from the app state."""
    service = getattr(request.app.state, "gemini_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Gemini service not initialized.")
    return service


def to_http_exception(exc: Exception, action: str) -> HTTPException:
    """Return the HTTPException matching ``exc``; unknown errors become 500."""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, ValueError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, MissingCredentialError):
        return HTTPException(status_code=503, detail=str(exc))
    if isinstance(exc, LiveSessionBusyError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, (NoResultProducedError, GenerationFailedError)):
        return HTTPException(status_code=502, detail=str(exc))
    if isinstance(exc, PollTimeoutError):
        return HTTPException(status_code=504, detail=str(exc))
    if isinstance(exc, PollCancelledError):
        return HTTPException(status_code=499, detail=str(exc))
    logging.error("%s failed: %s", action, exc)
    return HTTPException(status_code=500, detail=f"Failed to {action}.")
