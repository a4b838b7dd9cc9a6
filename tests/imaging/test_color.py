"""
Tests for color difference and blend modes
"""

import numpy as np
import pytest

from core.enums import BlendMode
from imaging.color import (
    TRANSPARENT,
    Color,
    as_color,
    blend_pixels,
    color_difference,
    color_difference_map,
    get_color_blend,
)


class TestColor:
    """Test the Color value type"""

    def test_clamped(self):
        assert Color(300, -20, 128, 999).clamped() == Color(255, 0, 128, 255)

    def test_default_alpha_is_opaque(self):
        assert Color(1, 2, 3).a == 255

    def test_from_pixel(self):
        pixel = np.array([10, 20, 30, 40], dtype=np.uint8)
        assert Color.from_pixel(pixel) == Color(10, 20, 30, 40)

    def test_as_color_accepts_rgb_tuple(self):
        assert as_color((1, 2, 3)) == Color(1, 2, 3, 255)

    def test_as_color_rejects_wrong_length(self):
        with pytest.raises(ValueError):
            as_color((1, 2))


class TestColorDifference:
    """Test the background difference metric"""

    def test_identical_colors(self):
        assert color_difference((10, 20, 30), (10, 20, 30)) == 0

    def test_mean_absolute_difference(self):
        # (255 + 255 + 0) // 3
        assert color_difference((255, 0, 0), (0, 255, 0)) == 170

    def test_transparent_never_differs(self):
        assert color_difference((255, 255, 255, 0), (0, 0, 0)) == 0
        assert color_difference((0, 0, 0), TRANSPARENT) == 0

    def test_map_matches_scalar(self, random_image):
        reference = Color(100, 50, 200)
        diff = color_difference_map(random_image, reference)

        assert diff.shape == random_image.shape[:2]
        for y, x in [(0, 0), (5, 17), (29, 39)]:
            assert diff[y, x] == color_difference(Color.from_pixel(random_image[y, x]), reference)


class TestBlend:
    """Test blend-mode compositing"""

    UNDER = Color(200, 100, 50)
    OVER = Color(100, 100, 100)

    @pytest.mark.parametrize("mode", list(BlendMode))
    def test_zero_amount_returns_underlying(self, mode):
        assert get_color_blend(self.UNDER, self.OVER, mode, 0) == self.UNDER

    @pytest.mark.parametrize("mode", list(BlendMode))
    def test_transparent_overlay_has_no_effect(self, mode):
        over = Color(100, 100, 100, 0)
        assert get_color_blend(self.UNDER, over, mode, 100) == self.UNDER

    def test_alpha_full_amount_returns_overlay(self):
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.ALPHA, 100) == Color(100, 100, 100)

    def test_multiply(self):
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.MULTIPLY, 100) == Color(78, 39, 19)

    def test_additive_clamps(self):
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.ADDITIVE, 100) == Color(255, 200, 150)

    def test_darken(self):
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.DARKEN, 100) == Color(100, 0, 0)

    def test_difference_clamps_at_zero(self):
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.DIFFERENCE, 100) == Color(0, 0, 50)

    def test_distance(self):
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.DISTANCE, 100) == Color(0, 0, 100)

    def test_root_multiply(self):
        # trunc(sqrt(200) * sqrt(100)) = 141
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.ROOT_MULTIPLY, 100) == Color(141, 100, 70)

    def test_divide_is_xor_formula(self):
        under, over = Color(5, 0, 0), Color(3, 0, 0)
        expected = 5 ^ (2 * 3) ^ 4
        assert get_color_blend(under, over, BlendMode.DIVIDE, 100).r == expected

    def test_reverse_divide(self):
        # trunc(200 / 255 * 100) = 78
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.REVERSE_DIVIDE, 100).r == 78

    def test_saturate(self):
        # trunc(100 * (200 - 100) / 16) = 625, clamped
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.SATURATE, 100).r == 255

    def test_half_amount_truncates_towards_zero(self):
        # 200 + trunc((100 - 200) * 50 / 100) = 150
        assert get_color_blend(self.UNDER, self.OVER, BlendMode.ALPHA, 50).r == 150

    def test_keeps_underlying_alpha(self):
        under = Color(10, 10, 10, 77)
        assert get_color_blend(under, self.OVER, BlendMode.ALPHA, 100).a == 77

    def test_accepts_mode_string(self):
        assert get_color_blend(self.UNDER, self.OVER, "multiply", 100) == Color(78, 39, 19)

    def test_vectorized_matches_scalar(self, random_image):
        over = np.flipud(random_image).copy()
        blended = blend_pixels(random_image, over, BlendMode.MULTIPLY, 60)

        for y, x in [(0, 0), (12, 7), (29, 39)]:
            expected = get_color_blend(
                Color.from_pixel(random_image[y, x]),
                Color.from_pixel(over[y, x]),
                BlendMode.MULTIPLY,
                60,
            )
            assert Color.from_pixel(blended[y, x]) == expected
