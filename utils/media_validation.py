"""Validation helpers for image payloads exchanged with the workspace UI."""

import base64
import binascii
import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError

DEFAULT_IMAGE_MIME = "image/png"

ALLOWED_IMAGE_TYPES = {
    "image/png",
    "image/jpeg",
    "image/webp",
    "image/gif",
    "image/heic",
    "image/heif",
}


def split_data_uri(data_uri: str) -> Tuple[str | None, str]:
    """Split a ``data:`` URI into its MIME type and base64 payload.

    A bare base64 string (no comma) is returned with a ``None`` MIME type.
    """
    if not data_uri:
        raise ValueError("Image data is required.")
    if "," not in data_uri:
        return None, data_uri.strip()
    header, payload = data_uri.split(",", 1)
    mime = None
    if header.startswith("data:"):
        # Strip parameters such as ';base64'
        mime = header[len("data:"):].split(";", 1)[0].strip().lower() or None
    return mime, payload.strip()


def sniff_image_mime(raw: bytes) -> str:
    """Return the MIME type Pillow detects for ``raw`` image bytes."""
    try:
        with Image.open(io.BytesIO(raw)) as image:
            detected = Image.MIME.get(image.format or "")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError("Decoded bytes are not a supported image format") from exc
    return detected or DEFAULT_IMAGE_MIME


def decode_image_data_uri(data_uri: str) -> Tuple[bytes, str]:
    """Return the raw image bytes and MIME type carried by a data URI.

    When the URI declares no MIME type the bytes are sniffed with Pillow.

    Raises:
        ValueError: If the payload is not base64 or the MIME type is not an image.
    """
    mime, payload = split_data_uri(data_uri)
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image data is not valid base64.") from exc
    if not raw:
        raise ValueError("Image data is empty.")
    if mime is None:
        mime = sniff_image_mime(raw)
    if mime not in ALLOWED_IMAGE_TYPES:
        raise ValueError(f"Unsupported image content type: {mime}")
    return raw, mime


def to_png_data_uri(payload: bytes | str) -> str:
    """Wrap an image payload as a PNG data URI.

    Strings are taken to be base64 already and are passed through untouched.
    """
    if isinstance(payload, bytes):
        payload = base64.b64encode(payload).decode("utf-8")
    return f"data:image/png;base64,{payload}"
