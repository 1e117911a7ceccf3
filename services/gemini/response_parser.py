"""Helpers to pull text, media and citations out of Gemini responses."""

from __future__ import annotations

import re
from typing import Any, List, Optional

from models.generation_models import GroundingSource

_FENCE_PATTERN = re.compile(r"```[a-z]*\n?|```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove every Markdown code fence marker and trim the result."""
    return _FENCE_PATTERN.sub("", text).strip()


def extract_text(response: Any) -> str:
    """Return the response text, or an empty string when there is none."""
    return getattr(response, "text", None) or ""


def _first_candidate(response: Any) -> Optional[Any]:
    candidates = getattr(response, "candidates", None) or []
    return candidates[0] if candidates else None


def first_inline_part(response: Any) -> Optional[Any]:
    """Return the first part of the first candidate carrying inline data."""
    candidate = _first_candidate(response)
    content = getattr(candidate, "content", None)
    for part in getattr(content, "parts", None) or []:
        if getattr(part, "inline_data", None) is not None:
            return part
    return None


def grounding_sources(response: Any) -> List[GroundingSource]:
    """Return the web citations attached to the first candidate."""
    candidate = _first_candidate(response)
    metadata = getattr(candidate, "grounding_metadata", None)
    sources = []
    for chunk in getattr(metadata, "grounding_chunks", None) or []:
        web = getattr(chunk, "web", None)
        if web is None:
            continue
        sources.append(GroundingSource(title=getattr(web, "title", None), uri=getattr(web, "uri", None)))
    return sources


def video_uri(operation: Any) -> Optional[str]:
    """Return the download URI of the first generated video, if any."""
    response = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(response, "generated_videos", None) or []
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None)
