"""Tests for the default pixel-difference primitive."""

from __future__ import annotations

import numpy as np
import pytest

from pixelsnap.errors import ConfigError, DimensionMismatchError
from pixelsnap.pixel_diff import diff_mask, pixel_diff, validate_options


def _solid(color: tuple[int, int, int, int], w: int = 4, h: int = 4) -> np.ndarray:
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[...] = color
    return arr


class TestCount:
    def test_identical(self) -> None:
        a = _solid((10, 20, 30, 255))
        assert pixel_diff(a, a.copy(), None, 4, 4, {"threshold": 0.0}) == 0

    def test_all_differ(self) -> None:
        a = _solid((0, 0, 0, 255))
        b = _solid((255, 255, 255, 255))
        assert pixel_diff(a, b, None, 4, 4, {"threshold": 0.01}) == 16

    def test_single_pixel(self) -> None:
        a = _solid((0, 0, 0, 255))
        b = a.copy()
        b[1, 2] = (0, 200, 0, 255)
        assert pixel_diff(a, b, None, 4, 4, {"threshold": 0.01}) == 1


class TestThreshold:
    def test_small_delta_within_threshold(self) -> None:
        a = _solid((100, 100, 100, 255))
        b = _solid((102, 100, 100, 255))
        assert pixel_diff(a, b, None, 4, 4, {"threshold": 0.01}) == 0

    def test_delta_above_threshold(self) -> None:
        a = _solid((100, 100, 100, 255))
        b = _solid((110, 100, 100, 255))
        assert pixel_diff(a, b, None, 4, 4, {"threshold": 0.01}) == 16

    def test_missing_threshold_is_exact(self) -> None:
        a = _solid((100, 100, 100, 255))
        b = _solid((101, 100, 100, 255))
        assert pixel_diff(a, b, None, 4, 4, {}) == 16


class TestAlpha:
    def test_alpha_counted_by_default(self) -> None:
        a = _solid((0, 0, 0, 255))
        b = _solid((0, 0, 0, 0))
        assert pixel_diff(a, b, None, 4, 4, {"threshold": 0.01}) == 16

    def test_alpha_ignored(self) -> None:
        a = _solid((0, 0, 0, 255))
        b = _solid((0, 0, 0, 0))
        assert pixel_diff(a, b, None, 4, 4, {"threshold": 0.01, "include_alpha": False}) == 0


class TestOutput:
    def test_diff_pixels_painted(self) -> None:
        a = _solid((0, 0, 0, 255))
        b = a.copy()
        b[0, 0] = (255, 255, 255, 255)
        out = np.zeros_like(a)
        pixel_diff(a, b, out, 4, 4, {"threshold": 0.01})
        assert tuple(out[0, 0]) == (255, 0, 0, 255)
        assert tuple(out[3, 3]) != (255, 0, 0, 255)
        assert out[3, 3, 3] == 255

    def test_custom_diff_color(self) -> None:
        a = _solid((0, 0, 0, 255))
        b = _solid((255, 255, 255, 255))
        out = np.zeros_like(a)
        pixel_diff(a, b, out, 4, 4, {"threshold": 0.0, "diff_color": (0, 255, 0, 255)})
        assert tuple(out[2, 2]) == (0, 255, 0, 255)

    def test_unknown_options_ignored(self) -> None:
        a = _solid((0, 0, 0, 255))
        assert pixel_diff(a, a.copy(), None, 4, 4, {"threshold": 0.1, "foo": "bar"}) == 0


class TestShape:
    def test_wrong_declared_size(self) -> None:
        a = _solid((0, 0, 0, 255))
        with pytest.raises(DimensionMismatchError):
            pixel_diff(a, a.copy(), None, 8, 4, {})

    def test_mask_shape(self) -> None:
        a = _solid((0, 0, 0, 255), w=3, h=2)
        assert diff_mask(a, a, 0.0).shape == (2, 3)


class TestOptionValidation:
    @pytest.mark.parametrize("bad", ["abc", None, True, -0.1, 1.5])
    def test_bad_threshold(self, bad: object) -> None:
        a = _solid((0, 0, 0, 255))
        with pytest.raises(ConfigError, match="threshold"):
            pixel_diff(a, a.copy(), None, 4, 4, {"threshold": bad})

    def test_numeric_string_threshold(self) -> None:
        a = _solid((100, 100, 100, 255))
        b = _solid((102, 100, 100, 255))
        assert pixel_diff(a, b, None, 4, 4, {"threshold": "0.1"}) == 0

    @pytest.mark.parametrize("bad", ["red", (0, 0), (0, 0, 0, 0, 0), (0, 0, 300), 5])
    def test_bad_diff_color(self, bad: object) -> None:
        a = _solid((0, 0, 0, 255))
        b = _solid((255, 255, 255, 255))
        with pytest.raises(ConfigError, match="diff_color"):
            pixel_diff(a, b, np.zeros_like(a), 4, 4, {"diff_color": bad})

    def test_rgb_color_gets_opaque_alpha(self) -> None:
        a = _solid((0, 0, 0, 255))
        b = _solid((255, 255, 255, 255))
        out = np.zeros_like(a)
        pixel_diff(a, b, out, 4, 4, {"diff_color": "0, 0, 255"})
        assert tuple(out[0, 0]) == (0, 0, 255, 255)

    def test_validated_without_output(self) -> None:
        a = _solid((0, 0, 0, 255))
        with pytest.raises(ConfigError):
            pixel_diff(a, a.copy(), None, 4, 4, {"diff_color": "red"})

    def test_validate_options(self) -> None:
        validate_options({"threshold": 0.5, "diff_color": (1, 2, 3), "foo": "bar"})
        with pytest.raises(ValueError):
            validate_options({"threshold": 2})
