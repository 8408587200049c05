"""
Color helpers: RGB values, hex parsing and OKLCH conversion.

OKLCH is used for the vivid random branch hues and for leaf greens,
since equal steps in hue there look equally bright. Hue is expressed in
turns ([0, 1) covers the full wheel).
"""

import math
from typing import NamedTuple

import numpy as np
from matplotlib.colors import to_rgb


class RGB(NamedTuple):
    """An opaque 8-bit sRGB color."""

    r: int
    g: int
    b: int


DARK_BROWN = RGB(0x65, 0x43, 0x21)


def parse_hex_color(text: str) -> RGB:
    """
    Parse a color such as "654321", "#654321", "#abc" or a named color.

    Raises:
        ValueError: If the text is not a color matplotlib understands.
    """
    s = text.strip()
    if s and not s.startswith("#") and all(c in "0123456789abcdefABCDEF" for c in s):
        s = "#" + s
    try:
        r, g, b = to_rgb(s)
    except ValueError as err:
        raise ValueError(f"Invalid color: {text!r}") from err
    return RGB(round(r * 255), round(g * 255), round(b * 255))


# =============================================================================
# OKLCH -> sRGB
# =============================================================================

# OKLab (l', m', s') -> LMS cubed roots, then LMS -> linear sRGB
_OKLAB_TO_LMS = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ]
)
_LMS_TO_LINEAR_SRGB = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ]
)


def _srgb_encode(c: np.ndarray) -> np.ndarray:
    """Linear light to sRGB transfer curve."""
    c = np.clip(c, 0.0, 1.0)
    return np.where(c <= 0.0031308, 12.92 * c, 1.055 * np.power(c, 1 / 2.4) - 0.055)


def oklch_to_rgb(lightness: float, chroma: float, hue: float) -> RGB:
    """
    Convert an OKLCH color to 8-bit sRGB.

    Args:
        lightness: Perceptual lightness in [0, 1]
        chroma: Colorfulness, roughly [0, 0.37] for displayable colors
        hue: Hue angle in turns

    Out-of-gamut results are clipped per channel.
    """
    theta = 2 * math.pi * hue
    lab = np.array([lightness, chroma * math.cos(theta), chroma * math.sin(theta)])
    lms = (_OKLAB_TO_LMS @ lab) ** 3
    rgb = _srgb_encode(_LMS_TO_LINEAR_SRGB @ lms)
    r, g, b = np.rint(rgb * 255).astype(int)
    return RGB(int(r), int(g), int(b))


# =============================================================================
# GRADIENTS
# =============================================================================


def lighten(base: RGB, amount: int) -> RGB:
    """Add `amount` to every channel, saturating at 255."""
    amount = max(0, amount)
    return RGB(
        min(255, base.r + amount),
        min(255, base.g + amount),
        min(255, base.b + amount),
    )


def depth_gradient(base: RGB, depth: int, max_depth: int, lighten_range: int = 150) -> RGB:
    """
    Color for a branch at `depth` in a depth-lightening gradient.

    The trunk (depth 0) gets `base`; deeper branches are lightened
    linearly, reaching `lighten_range` at `max_depth`.
    """
    amount = round(lighten_range * depth / max(1, max_depth))
    return lighten(base, amount)
