"""PNG encode/decode between bytes and RGBA numpy buffers."""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from pixelsnap.errors import DecodeError, SnapshotIOError


def decode_png(
    data: bytes, *, source: Path | str | None = None, identifier: str | None = None
) -> np.ndarray:
    """Decode image bytes to an ``(height, width, 4)`` uint8 RGBA array.

    *source* and *identifier* only label the raised error.
    Any image format Pillow understands is accepted; grayscale, RGB and
    palette images are normalized to RGBA.

    Raises:
        DecodeError: If *data* is empty or not a valid image.
    """
    if not data:
        raise DecodeError("empty image data", path=source, identifier=identifier)
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(
            f"cannot decode image: {exc}", path=source, identifier=identifier
        ) from exc
    return np.array(rgba, dtype=np.uint8)


def encode_png(pixels: np.ndarray) -> bytes:
    """Encode an RGBA uint8 array as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(buf, format="PNG")
    return buf.getvalue()


def load_png(path: Path | str) -> np.ndarray:
    """Read *path* and decode it to an RGBA array."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise SnapshotIOError("read file", p, exc) from exc
    return decode_png(data, source=p)
