"""
Tests for color parsing, OKLCH conversion and the depth gradient.
"""

import pytest

from bonsai.color import DARK_BROWN, RGB, depth_gradient, lighten, oklch_to_rgb, parse_hex_color


class TestParseHexColor:
    """Tests for hex color parsing."""

    def test_bare_hex(self) -> None:
        assert parse_hex_color("654321") == RGB(0x65, 0x43, 0x21)

    def test_hash_prefix(self) -> None:
        assert parse_hex_color("#654321") == DARK_BROWN

    def test_surrounding_whitespace(self) -> None:
        assert parse_hex_color("  ff0000 ") == RGB(255, 0, 0)

    @pytest.mark.parametrize("text", ["zzzzzz", "12345", "#1234567", "not a color"])
    def test_invalid(self, text: str) -> None:
        """Malformed colors raise ValueError."""
        with pytest.raises(ValueError):
            parse_hex_color(text)


class TestOklch:
    """Tests for OKLCH to sRGB conversion."""

    def test_white(self) -> None:
        assert oklch_to_rgb(1.0, 0.0, 0.0) == RGB(255, 255, 255)

    def test_black(self) -> None:
        assert oklch_to_rgb(0.0, 0.0, 0.3) == RGB(0, 0, 0)

    def test_gray_is_neutral(self) -> None:
        """Zero chroma gives equal channels at any hue."""
        r, g, b = oklch_to_rgb(0.6, 0.0, 0.77)
        assert r == g == b

    def test_channels_stay_in_range(self) -> None:
        """Out-of-gamut colors are clipped into 8 bits."""
        for i in range(24):
            color = oklch_to_rgb(0.7, 0.37, i / 24)
            assert all(0 <= c <= 255 for c in color)

    def test_leaf_green(self) -> None:
        """The leaf hue reads as green."""
        r, g, b = oklch_to_rgb(0.55, 0.15, 0.39)
        assert g > r and g > b

    def test_hue_wraps(self) -> None:
        """Hue is periodic in turns."""
        assert oklch_to_rgb(0.7, 0.1, 0.25) == oklch_to_rgb(0.7, 0.1, 1.25)


class TestGradient:
    """Tests for the depth-lightening gradient."""

    def test_trunk_keeps_base(self) -> None:
        assert depth_gradient(DARK_BROWN, 0, 6) == DARK_BROWN

    def test_deepest_gets_full_lightening(self) -> None:
        assert depth_gradient(DARK_BROWN, 6, 6) == RGB(0x65 + 150, 0x43 + 150, 0x21 + 150)

    def test_linear_midpoint(self) -> None:
        assert depth_gradient(RGB(0, 0, 0), 2, 4) == RGB(75, 75, 75)

    def test_saturates(self) -> None:
        """Channels clamp at 255."""
        assert depth_gradient(RGB(200, 10, 255), 4, 4) == RGB(255, 160, 255)

    def test_zero_max_depth(self) -> None:
        """A trunk-only tree does not divide by zero."""
        assert depth_gradient(DARK_BROWN, 0, 0) == DARK_BROWN

    def test_custom_range(self) -> None:
        assert depth_gradient(RGB(0, 0, 0), 3, 3, lighten_range=40) == RGB(40, 40, 40)

    def test_monotonic(self) -> None:
        """Deeper branches are never darker."""
        colors = [depth_gradient(DARK_BROWN, d, 8) for d in range(9)]
        for a, b in zip(colors, colors[1:]):
            assert b.r >= a.r and b.g >= a.g and b.b >= a.b

    def test_lighten_negative_is_noop(self) -> None:
        assert lighten(DARK_BROWN, -20) == DARK_BROWN
