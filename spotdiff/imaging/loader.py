"""Decode images into PixelBuffers for the engine.

Accepts raw bytes, ``data:`` URLs, bare base64 strings and file paths.
Anything that cannot be turned into readable RGBA pixels raises
``AnalysisError(SOURCE_UNREADABLE)``; the engine never sees a half-read image.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from spotdiff.engine.context import PixelBuffer
from spotdiff.engine.errors import AnalysisError, ErrorKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 20 * 1024 * 1024
DEFAULT_MAX_PIXELS = 40_000_000


def _unreadable(message: str) -> AnalysisError:
    return AnalysisError(ErrorKind.SOURCE_UNREADABLE, message)


def _source_bytes(source: bytes | str | Path) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)

    if isinstance(source, Path):
        try:
            return source.read_bytes()
        except OSError as e:
            raise _unreadable(f"Cannot read image file {source}: {e}") from e

    text = source.strip()
    if text.startswith("data:"):
        header, sep, payload = text.partition(",")
        if not sep or ";base64" not in header:
            raise _unreadable("Only base64-encoded data URLs are supported")
        text = payload
    elif text.startswith(("http://", "https://")):
        raise _unreadable("Remote image URLs are not fetched; send a data URL instead")

    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise _unreadable(f"Image payload is not valid base64: {e}") from e


def decode_image(
    source: bytes | str | Path,
    max_bytes: int = DEFAULT_MAX_BYTES,
    max_pixels: int = DEFAULT_MAX_PIXELS,
) -> PixelBuffer:
    """Decode one encoded image (PNG, JPEG, WebP, ...) to an RGBA PixelBuffer."""
    raw = _source_bytes(source)
    if not raw:
        raise _unreadable("Image payload is empty")
    if len(raw) > max_bytes:
        raise _unreadable(f"Image payload is {len(raw)} bytes, limit is {max_bytes}")

    try:
        with Image.open(io.BytesIO(raw)) as img:
            if img.width * img.height > max_pixels:
                raise _unreadable(
                    f"Image is {img.width}x{img.height}, limit is {max_pixels} pixels"
                )
            img.load()
            buffer = PixelBuffer.from_image(img)
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise _unreadable(f"Cannot decode image: {e}") from e

    logger.debug("Decoded %dx%d image (%d bytes)", buffer.width, buffer.height, len(raw))
    return buffer


def decode_pair(
    original: bytes | str | Path,
    modified: bytes | str | Path,
    max_bytes: int = DEFAULT_MAX_BYTES,
    max_pixels: int = DEFAULT_MAX_PIXELS,
) -> tuple[PixelBuffer, PixelBuffer]:
    return (
        decode_image(original, max_bytes, max_pixels),
        decode_image(modified, max_bytes, max_pixels),
    )


def encode_data_url(buffer: PixelBuffer) -> str:
    """Render a PixelBuffer as a PNG data URL."""
    img = Image.frombytes("RGBA", (buffer.width, buffer.height), buffer.data)
    out = io.BytesIO()
    img.save(out, format="PNG")
    return "data:image/png;base64," + base64.b64encode(out.getvalue()).decode("ascii")
