"""Shared helpers for unit tests."""

from __future__ import annotations

import io
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import numpy as np
import pytest
from PIL import Image

from pixelsnap.fs import LocalFilesystem


def png_bytes(
    color: tuple[int, ...] = (0, 0, 0, 255),
    size: tuple[int, int] = (4, 4),
    mode: str = "RGBA",
    pixels: Mapping[tuple[int, int], tuple[int, ...]] | None = None,
) -> bytes:
    """Encode a solid-color image (with optional per-pixel overrides) as PNG."""
    img = Image.new(mode, size, color)
    for xy, value in (pixels or {}).items():
        img.putpixel(xy, value)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def half_changed_png(size: tuple[int, int] = (100, 100)) -> bytes:
    """Black image whose left half is white."""
    w, h = size
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[..., 3] = 255
    arr[:, : w // 2, :3] = 255
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()


class RecordingFilesystem(LocalFilesystem):
    """LocalFilesystem that records mkdir and write calls."""

    def __init__(self) -> None:
        self.mkdirs: list[Path] = []
        self.writes: list[Path] = []

    def ensure_dir(self, path: Path) -> None:
        if not Path(path).exists():
            self.mkdirs.append(Path(path))
        super().ensure_dir(path)

    def write_bytes(self, path: Path, data: bytes) -> None:
        self.writes.append(Path(path))
        super().write_bytes(path, data)


class FakePixelDiff:
    """Pixel-diff primitive returning a fixed count and recording its calls."""

    def __init__(self, result: int = 0) -> None:
        self.result = result
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self,
        img_a: np.ndarray,
        img_b: np.ndarray,
        output: np.ndarray | None,
        width: int,
        height: int,
        options: Mapping[str, Any],
    ) -> int:
        self.calls.append(
            {
                "img_a": img_a,
                "img_b": img_b,
                "output": output,
                "width": width,
                "height": height,
                "options": dict(options),
            }
        )
        return self.result


@pytest.fixture
def recording_fs() -> RecordingFilesystem:
    return RecordingFilesystem()


@pytest.fixture
def fake_diff() -> Callable[[int], FakePixelDiff]:
    return FakePixelDiff
