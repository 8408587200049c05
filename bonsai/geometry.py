"""
2D geometry helpers for tree generation and rendering.

Coordinates are in screen space: x grows to the right, y grows downward.
Angles are measured from the horizontal and increase counter-clockwise as
seen on screen, so a direction of angle a is (cos a, -sin a).
"""

import math
from typing import NamedTuple


class Point(NamedTuple):
    """An immutable 2D point (or vector) in continuous pixel coordinates."""

    x: float
    y: float


# =============================================================================
# VECTOR UTILITIES
# =============================================================================


def left_normal(angle: float) -> Point:
    """Unit vector perpendicular to `angle`, on its counter-clockwise side."""
    return Point(-math.sin(angle), -math.cos(angle))


def advance(p: Point, angle: float, dist: float) -> Point:
    """Move `dist` from `p` along `angle`."""
    return Point(p.x + dist * math.cos(angle), p.y - dist * math.sin(angle))


def vec_lerp(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation between two points."""
    return Point(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))


def vec_mag(v: Point) -> float:
    """Magnitude of a vector."""
    return math.hypot(v.x, v.y)


def unit_perpendicular(a: Point, b: Point) -> Point:
    """
    Unit vector perpendicular to the segment a -> b.

    Returns (0, 0) for a zero-length segment.
    """
    dx, dy = b.x - a.x, b.y - a.y
    m = math.hypot(dx, dy)
    if m < 1e-9:
        return Point(0.0, 0.0)
    return Point(-dy / m, dx / m)


# =============================================================================
# NOISE FUNCTION
# =============================================================================


def position_noise(x: float, y: float) -> float:
    """
    Deterministic hash noise of a position.

    Returns a value in [0, 1) that depends only on (x, y), so it can
    perturb geometry without consuming draws from the random source.
    """
    n = math.sin(x * 12.9898 + y * 78.233) * 43758.5453
    return n - math.floor(n)
