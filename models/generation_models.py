"""Request and result types for generative workspace actions."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Capability(str, Enum):
    """Capabilities the workspace can request from the provider."""

    EDIT = "edit"
    CHAT = "chat"
    IMAGE = "image"
    VIDEO = "video"
    ANALYZE = "analyze"


@dataclass(frozen=True)
class GenerationRequest:
    """A single generation intent issued by the workspace UI.

    Attributes:
        prompt: Instruction for edits, the message for chat, the prompt for media.
        capability: Which provider capability serves the request.
        code: Current file content (edit only).
        filename: Name of the edited file, used to infer its language (edit only).
        image_data_uri: Image to analyze as a ``data:`` URI (analyze only).
        aspect_ratio: Requested aspect ratio (image and video).
        image_size: Image tier such as ``1K``, ``2K`` or ``4K`` (image only).
        resolution: Video resolution (video only).
    """

    prompt: str
    capability: Capability
    code: Optional[str] = None
    filename: Optional[str] = None
    image_data_uri: Optional[str] = None
    aspect_ratio: Optional[str] = None
    image_size: Optional[str] = None
    resolution: Optional[str] = None


@dataclass(frozen=True)
class GroundingSource:
    """A web citation returned alongside a grounded chat answer."""

    title: Optional[str]
    uri: Optional[str]


@dataclass(frozen=True)
class TextResult:
    text: str
    sources: Tuple[GroundingSource, ...] = ()
    kind: str = field(default="text", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ImageDataUriResult:
    data_uri: str
    kind: str = field(default="image", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class VideoUriResult:
    uri: str
    kind: str = field(default="video", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AnalysisTextResult:
    text: str
    kind: str = field(default="analysis", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


GenerationResult = TextResult | ImageDataUriResult | VideoUriResult | AnalysisTextResult


@dataclass
class VideoOperationState:
    """Progress of a video operation as observed by the poll loop.

    Only the poll loop mutates this; once ``done`` is set it never changes again.
    """

    done: bool = False
    result_uri: Optional[str] = None
    attempts: int = 0
