"""Default pixel-difference primitive.

The comparator only depends on the :class:`PixelDiff` call shape, so a
different algorithm can be plugged in without touching snapshot handling.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import numpy as np

from pixelsnap.errors import ConfigError, DimensionMismatchError

_GRAY_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)


class PixelDiff(Protocol):
    def __call__(
        self,
        img_a: np.ndarray,
        img_b: np.ndarray,
        output: np.ndarray | None,
        width: int,
        height: int,
        options: Mapping[str, Any],
    ) -> int: ...


def _check_shape(arr: np.ndarray, width: int, height: int) -> None:
    if arr.shape[:2] != (height, width):
        raise DimensionMismatchError((width, height), (arr.shape[1], arr.shape[0]))


def _threshold_option(options: Mapping[str, Any]) -> float:
    raw = options.get("threshold", 0.0)
    if isinstance(raw, bool):
        raise ConfigError(f"invalid threshold {raw!r}, expected a number in [0, 1]")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid threshold {raw!r}, expected a number in [0, 1]") from None
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"threshold {value} out of range [0, 1]")
    return value


def _color_option(options: Mapping[str, Any]) -> tuple[int, ...]:
    raw = options.get("diff_color", (255, 0, 0, 255))
    if isinstance(raw, str):
        raw = raw.split(",")
    try:
        color = tuple(int(c) for c in raw)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid diff_color {raw!r}, expected R,G,B[,A]") from None
    if len(color) not in (3, 4) or any(not 0 <= c <= 255 for c in color):
        raise ConfigError(f"invalid diff_color {raw!r}, expected R,G,B[,A] in 0-255")
    return color if len(color) == 4 else (*color, 255)


def diff_mask(
    img_a: np.ndarray, img_b: np.ndarray, threshold: float, include_alpha: bool = True
) -> np.ndarray:
    """Return a boolean ``(h, w)`` mask of pixels whose channel delta exceeds *threshold*.

    The delta is the largest absolute per-channel difference scaled to [0, 1].
    """
    channels = 4 if include_alpha else 3
    a = img_a[..., :channels].astype(np.int16)
    b = img_b[..., :channels].astype(np.int16)
    delta = np.abs(a - b).max(axis=2) / 255.0
    return delta > threshold


def validate_options(options: Mapping[str, Any]) -> None:
    """Raise ConfigError if a recognized option has an unusable value."""
    _threshold_option(options)
    _color_option(options)


def pixel_diff(
    img_a: np.ndarray,
    img_b: np.ndarray,
    output: np.ndarray | None,
    width: int,
    height: int,
    options: Mapping[str, Any],
) -> int:
    """Count differing pixels between two RGBA buffers.

    Args:
        img_a: Expected image, uint8 array of shape (height, width, 4).
        img_b: Received image, same shape.
        output: If set, filled with a visualization: *img_a* as faded
            grayscale with differing pixels painted ``diff_color``.
        width: Image width in pixels.
        height: Image height in pixels.
        options: Diff configuration. Recognized keys are ``threshold``,
            ``include_alpha`` and ``diff_color``; others are ignored.

    Returns:
        Number of differing pixels.

    Raises:
        DimensionMismatchError: If a buffer does not match width/height.
        ConfigError: If ``threshold`` or ``diff_color`` is invalid.
    """
    _check_shape(img_a, width, height)
    _check_shape(img_b, width, height)
    threshold = _threshold_option(options)
    color = _color_option(options)
    include_alpha = bool(options.get("include_alpha", True))

    mask = diff_mask(img_a, img_b, threshold, include_alpha)
    count = int(np.count_nonzero(mask))

    if output is not None:
        _check_shape(output, width, height)
        gray = (img_a[..., :3].astype(np.float32) @ _GRAY_WEIGHTS).astype(np.uint8)
        # fade towards white so painted pixels stand out
        faded = (255 - (255 - gray.astype(np.uint16)) // 4).astype(np.uint8)
        output[..., 0] = faded
        output[..., 1] = faded
        output[..., 2] = faded
        output[..., 3] = 255
        output[mask] = color
    return count
