"""Simple in-memory store for generated media served back to the UI."""

from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Dict
from uuid import uuid4

MEDIA_URL_PREFIX = "/media/"


@dataclass
class MediaAsset:
    """Downloaded media bytes and their content type."""

    media_id: str
    content: bytes
    content_type: str
    created_at: float = field(default_factory=lambda: time.time())


class MediaStore:
    """Keep generated assets in process memory, addressable by id.

    Nothing is written to disk; assets live as long as the process does.
    """

    def __init__(self) -> None:
        self._assets: Dict[str, MediaAsset] = {}

    def put(self, content: bytes, content_type: str) -> MediaAsset:
        """Store ``content`` under a fresh id and return the asset."""
        if not content:
            raise ValueError("Media content must not be empty.")
        asset = MediaAsset(media_id=uuid4().hex, content=content, content_type=content_type)
        self._assets[asset.media_id] = asset
        return asset

    def get(self, media_id: str) -> MediaAsset:
        """Return an asset or raise KeyError if missing."""
        asset = self._assets.get(media_id)
        if asset is None:
            raise KeyError(f"Media {media_id} not found")
        return asset

    @staticmethod
    def url_for(asset: MediaAsset) -> str:
        return f"{MEDIA_URL_PREFIX}{asset.media_id}"
