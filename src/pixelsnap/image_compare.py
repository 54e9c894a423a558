"""Pixel-level comparison of two image files on disk."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from pixelsnap.codec import encode_png, load_png
from pixelsnap.config import merge_diff_config
from pixelsnap.errors import DimensionMismatchError, SnapshotIOError
from pixelsnap.pixel_diff import pixel_diff


@dataclass(frozen=True)
class CompareResult:
    """Result of comparing two images pixel-by-pixel."""

    identical: bool
    diff_pixels: int
    total_pixels: int
    diff_ratio: float
    diff_image: Path | None


def compare_images(
    path_a: Path,
    path_b: Path,
    threshold: float = 0.0,
    diff_output: Path | None = None,
    diff_config: Mapping[str, Any] | None = None,
) -> CompareResult:
    """Compare two images pixel-by-pixel.

    Args:
        path_a: Path to the first (expected) image.
        path_b: Path to the second (actual) image.
        threshold: Maximum diff ratio (%) to still count as identical.
        diff_output: If set, write a diff visualization PNG here.
        diff_config: Per-pixel options merged over the default diff config.

    Returns:
        CompareResult with comparison details.

    Raises:
        DimensionMismatchError: If the two images have different dimensions.
        SnapshotIOError: If either path cannot be read or the diff cannot be written.
        DecodeError: If either file is not a valid image.
    """
    arr_a = load_png(path_a)
    arr_b = load_png(path_b)

    if arr_a.shape != arr_b.shape:
        raise DimensionMismatchError(
            (arr_a.shape[1], arr_a.shape[0]), (arr_b.shape[1], arr_b.shape[0]), path=path_b
        )

    height, width = arr_a.shape[:2]
    output = np.zeros_like(arr_a) if diff_output else None
    diff_pixels = pixel_diff(arr_a, arr_b, output, width, height, merge_diff_config(diff_config))
    total_pixels = width * height
    diff_ratio = diff_pixels / total_pixels * 100.0 if total_pixels else 0.0
    identical = diff_ratio <= threshold

    diff_image: Path | None = None
    if output is not None and diff_output and diff_pixels > 0:
        try:
            diff_output.write_bytes(encode_png(output))
        except OSError as exc:
            raise SnapshotIOError("write file", diff_output, exc) from exc
        diff_image = diff_output

    return CompareResult(
        identical=identical,
        diff_pixels=diff_pixels,
        total_pixels=total_pixels,
        diff_ratio=diff_ratio,
        diff_image=diff_image,
    )
