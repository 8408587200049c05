"""
Leaf decoration for the outermost branch generations.

Leaves are small green triangles scattered along the last two branch
layers. How many and how big depends on the canvas resolution, so a
thumbnail stays readable and a large render stays lush:

    width < 200:   half size, one leaf per branch (every other terminal)
    width > 800:   1.5x size, 4 per terminal / 3 per penultimate branch
    otherwise:     normal size, 3 per terminal / 2 per penultimate branch

A LeafStyle density > 0 replaces the automatic counts.
"""

import math
from dataclasses import dataclass

from bonsai.color import RGB, oklch_to_rgb
from bonsai.config import LeafStyle
from bonsai.generator import Branch, Canvas
from bonsai.geometry import Point, advance, position_noise, vec_lerp
from bonsai.rng import RandomSource


SMALL_WIDTH = 200
LARGE_WIDTH = 800


@dataclass(frozen=True)
class LeafTier:
    """Resolution-dependent leaf sizing and counts."""

    scale: float
    terminal: int
    penultimate: int
    sparse_terminal: bool = False


def leaf_tier(width: int, style: LeafStyle) -> LeafTier:
    """Pick leaf size and counts for a canvas `width` pixels wide."""
    if width < SMALL_WIDTH:
        tier = LeafTier(scale=0.5, terminal=1, penultimate=1, sparse_terminal=True)
    elif width > LARGE_WIDTH:
        tier = LeafTier(scale=1.5, terminal=4, penultimate=3)
    else:
        tier = LeafTier(scale=1.0, terminal=3, penultimate=2)
    if style.density > 0:
        tier = LeafTier(scale=tier.scale, terminal=style.density, penultimate=style.density)
    return tier


def bears_leaves(branch: Branch, max_depth: int) -> bool:
    """
    Whether a branch is in the leafy layers.

    Those are depths max_depth - 1 and max_depth, never the trunk, so a
    trunk-only tree has no leaves.
    """
    return branch.depth >= max(1, max_depth - 1)


@dataclass(frozen=True)
class Leaf:
    """One leaf triangle."""

    center: Point
    rotation: float
    size: float
    rgb: RGB

    def triangle(self) -> list[Point]:
        """Tip along the rotation, two base corners swept back."""
        return [
            advance(self.center, self.rotation, self.size),
            advance(self.center, self.rotation + 2.4, 0.6 * self.size),
            advance(self.center, self.rotation - 2.4, 0.6 * self.size),
        ]


def leaf_color(rand: RandomSource) -> RGB:
    """A green with a little random variation in lightness, chroma and hue."""
    lightness = 0.55 + 0.1 * (rand.float64() - 0.5)
    chroma = 0.15 + 0.06 * (rand.float64() - 0.5)
    hue = 0.39 + 0.04 * (rand.float64() - 0.5)
    return oklch_to_rgb(lightness, chroma, hue)


def make_leaf(branch: Branch, terminal: bool, scale: float, rand: RandomSource) -> Leaf:
    """
    Place one leaf on `branch`.

    The position is biased toward the branch tip, more strongly on
    terminal branches. Size follows the branch's end width with a
    jitter hashed from the leaf position.
    """
    r = rand.float64()
    t = 1 - 0.4 * r * r if terminal else 1 - 0.7 * r
    center = vec_lerp(branch.start, branch.end, t)
    rotation = 2 * math.pi * rand.float64()
    jitter = position_noise(center.x, center.y)
    size = max(1.5, 2.5 * branch.end_width) * scale * (0.8 + 0.4 * jitter)
    return Leaf(center=center, rotation=rotation, size=size, rgb=leaf_color(rand))


def place_leaves(canvas: Canvas, style: LeafStyle) -> list[Leaf]:
    """
    Generate all leaves for a canvas, drawing from its random source.

    Returns:
        Leaves in branch order
    """
    max_depth = canvas.max_depth
    tier = leaf_tier(canvas.width, style)
    scale = tier.scale * style.size
    leaves: list[Leaf] = []
    terminal_seen = 0
    for branch in canvas.branches:
        if not bears_leaves(branch, max_depth):
            continue
        terminal = branch.depth >= max_depth
        if terminal:
            count = tier.terminal
            if tier.sparse_terminal and terminal_seen % 2 == 1:
                count = 0
            terminal_seen += 1
        else:
            count = tier.penultimate
        for _ in range(count):
            leaves.append(make_leaf(branch, terminal, scale, canvas.rand))
    return leaves
