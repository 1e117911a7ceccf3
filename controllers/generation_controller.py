"""Controller for chat and media generation requests."""

import asyncio
from typing import Any, Dict

from fastapi import HTTPException, Request
from fastapi.responses import Response

from controllers.error_mapping import get_gemini_service, to_http_exception
from models.generation_models import Capability, GenerationRequest

DISCONNECT_CHECK_INTERVAL_S = 1.0


async def _cancel_on_disconnect(request: Request, cancel: asyncio.Event, interval: float) -> None:
    while not cancel.is_set():
        if await request.is_disconnected():
            cancel.set()
            return
        await asyncio.sleep(interval)


async def run_generation(
    request: Request,
    generation: GenerationRequest,
    disconnect_check_interval: float = DISCONNECT_CHECK_INTERVAL_S,
) -> Dict[str, Any]:
    """Run one generation request and return its result as a dict.

    Video requests stop polling once the client has disconnected.

    Args:
        request: FastAPI Request (used to access the shared Gemini service).
        generation: The immutable request built by the route.
        disconnect_check_interval: Seconds between client disconnect checks.

    Returns:
        The result variant serialized with its ``kind``.

    Raises:
        HTTPException: Mapped from the service error taxonomy.
    """
    service = get_gemini_service(request)
    cancel = None
    watcher = None
    if generation.capability is Capability.VIDEO:
        cancel = asyncio.Event()
        watcher = asyncio.create_task(_cancel_on_disconnect(request, cancel, disconnect_check_interval))
    try:
        result = await service.run(generation, cancel=cancel)
    except Exception as exc:
        raise to_http_exception(exc, f"run {generation.capability.value} request") from exc
    finally:
        if watcher is not None:
            watcher.cancel()
            await asyncio.gather(watcher, return_exceptions=True)
    return result.to_dict()


async def get_media(request: Request, media_id: str) -> Response:
    """Return the stored bytes of a generated asset.

    Raises:
        HTTPException(404) if the asset is unknown.
    """
    service = get_gemini_service(request)
    try:
        asset = service.media_store.get(media_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Media not found") from exc
    return Response(content=asset.content, media_type=asset.content_type)
