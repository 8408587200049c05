"""
Configuration and type definitions for tree generation and drawing.

This module defines the generation parameters, the draw mode and the
color policies consumed by the renderer.

Generation parameters:
    max_depth: Number of branch generations below the trunk
    spread: Multiplier on every branch angle offset
    trunk_width_pct: Trunk base width as a percentage of canvas width
    trunk_height_pct: Trunk length as a percentage of canvas height

Color policies are tagged variants (FixedColor, RandomHue, DepthGradient),
each carrying its own parameters.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from bonsai.color import DARK_BROWN, RGB, depth_gradient, oklch_to_rgb

if TYPE_CHECKING:
    from bonsai.generator import Branch
    from bonsai.rng import RandomSource
    from bonsai.surface import NRGBASurface, RGBASurface


# Branches shorter than this (in pixels) get no children
MIN_BRANCH_LENGTH = 2.0


@dataclass(frozen=True)
class TreeParams:
    """
    Shape parameters for one generated tree.

    Trunk sizes are percentages of the canvas so the same parameters
    produce the same silhouette at any resolution.
    """

    max_depth: int = 6
    spread: float = 1.0
    trunk_width_pct: float = 7.0
    trunk_height_pct: float = 35.0

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("max_depth must be nonnegative")
        if self.spread <= 0:
            raise ValueError("spread must be positive")
        if self.trunk_width_pct <= 0 or self.trunk_height_pct <= 0:
            raise ValueError("Trunk percentages must be positive")

    @classmethod
    def bonsai(cls) -> "TreeParams":
        """Default compact, wide-crowned tree."""
        return cls()

    @classmethod
    def willow(cls) -> "TreeParams":
        """Tall trunk with a wide, loose crown."""
        return cls(max_depth=7, spread=1.4, trunk_width_pct=5.0, trunk_height_pct=40.0)

    @classmethod
    def sapling(cls) -> "TreeParams":
        """Young tree: few generations, thin narrow trunk."""
        return cls(max_depth=3, spread=0.8, trunk_width_pct=3.0, trunk_height_pct=30.0)


class DrawMode(enum.Enum):
    """How branches are painted."""

    LINE = "line"  # 1px anti-aliased centerlines, straight alpha
    POLYGON = "polygon"  # filled tapered trapezoids, premultiplied alpha

    def new_surface(self, width: int, height: int) -> NRGBASurface | RGBASurface:
        """Allocate a transparent surface with the alpha model this mode writes."""
        from bonsai.surface import NRGBASurface, RGBASurface

        if self is DrawMode.LINE:
            return NRGBASurface(width, height)
        return RGBASurface(width, height)


# =============================================================================
# COLOR POLICIES
# =============================================================================


@dataclass(frozen=True)
class FixedColor:
    """Every branch painted the same color."""

    rgb: RGB = DARK_BROWN

    def color_for(self, branch: Branch, max_depth: int, rand: RandomSource) -> RGB:
        return self.rgb


@dataclass(frozen=True)
class RandomHue:
    """Each branch gets its own hue, drawn uniformly from the OKLCH wheel."""

    lightness: float = 0.7
    chroma: float = 0.2

    def __post_init__(self) -> None:
        if not 0.0 <= self.lightness <= 1.0:
            raise ValueError("lightness must be in [0, 1]")
        if self.chroma < 0:
            raise ValueError("chroma must be nonnegative")

    def color_for(self, branch: Branch, max_depth: int, rand: RandomSource) -> RGB:
        return oklch_to_rgb(self.lightness, self.chroma, rand.float64())


@dataclass(frozen=True)
class DepthGradient:
    """
    Trunk in a dark base color, lightening with depth.

    At max_depth every channel has been raised by `lighten` (saturating
    at 255).
    """

    base: RGB = DARK_BROWN
    lighten: int = 150

    def __post_init__(self) -> None:
        if not 0 <= self.lighten <= 255:
            raise ValueError("lighten must be in [0, 255]")

    def color_for(self, branch: Branch, max_depth: int, rand: RandomSource) -> RGB:
        return depth_gradient(self.base, branch.depth, max_depth, self.lighten)


ColorPolicy = Union[FixedColor, RandomHue, DepthGradient]


@dataclass(frozen=True)
class LeafStyle:
    """
    Leaf decoration settings.

    Attributes:
        size: Multiplier on the automatic leaf size
        density: Leaves per qualifying branch; 0 picks counts from the
            canvas resolution
    """

    size: float = 1.0
    density: int = 0

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("Leaf size must be positive")
        if self.density < 0:
            raise ValueError("Leaf density must be nonnegative")


@dataclass(frozen=True)
class RenderStyle:
    """Everything the renderer needs besides the geometry."""

    mode: DrawMode = DrawMode.POLYGON
    color: ColorPolicy = field(default_factory=DepthGradient)
    leaves: LeafStyle | None = None
