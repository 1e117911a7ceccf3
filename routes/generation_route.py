"""FastAPI routes for grounded chat and media generation."""

from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from controllers.generation_controller import get_media, run_generation
from models.generation_models import Capability, GenerationRequest
from services.gemini.prompts import ANALYZE_PROMPT

router = APIRouter(tags=["generation"])


class ChatPayload(BaseModel):
    message: str = Field(min_length=1)


class ImagePayload(BaseModel):
    prompt: str = Field(min_length=1)
    aspect_ratio: str = "1:1"
    image_size: Literal["1K", "2K", "4K"] = "1K"


class VideoPayload(BaseModel):
    prompt: str = Field(min_length=1)
    aspect_ratio: Literal["16:9", "9:16"] = "16:9"


class AnalyzePayload(BaseModel):
    image_data_uri: str = Field(min_length=1)
    prompt: str = ANALYZE_PROMPT


@router.post("/api/chat", summary="Answer a message with search grounding")
async def chat_route(request: Request, payload: ChatPayload):
    """Return the answer text and its grounding sources."""
    generation = GenerationRequest(prompt=payload.message, capability=Capability.CHAT)
    try:
        return await run_generation(request, generation)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/api/media/image", summary="Generate an image")
async def generate_image_route(request: Request, payload: ImagePayload):
    generation = GenerationRequest(
        prompt=payload.prompt,
        capability=Capability.IMAGE,
        aspect_ratio=payload.aspect_ratio,
        image_size=payload.image_size,
    )
    try:
        return await run_generation(request, generation)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/api/media/video", summary="Generate a video")
async def generate_video_route(request: Request, payload: VideoPayload):
    """Submit a video job, wait for it, and return a local media reference."""
    generation = GenerationRequest(
        prompt=payload.prompt,
        capability=Capability.VIDEO,
        aspect_ratio=payload.aspect_ratio,
    )
    try:
        return await run_generation(request, generation)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/api/media/analyze", summary="Analyze an uploaded image")
async def analyze_image_route(request: Request, payload: AnalyzePayload):
    generation = GenerationRequest(
        prompt=payload.prompt,
        capability=Capability.ANALYZE,
        image_data_uri=payload.image_data_uri,
    )
    try:
        return await run_generation(request, generation)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.get("/media/{media_id}")
async def get_media_route(request: Request, media_id: str):
    """Return the bytes of a generated asset."""
    try:
        return await get_media(request, media_id)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))
