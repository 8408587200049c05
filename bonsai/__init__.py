"""
tbonsai Tree Module

Procedural tree generation and anti-aliased rasterization into pixel
surfaces.

Modules:
    config: Generation parameters, draw modes, color policies
    geometry: Points and 2D vector helpers
    rng: Seeded random source
    generator: Breadth-first branch synthesis
    color: RGB, hex parsing, OKLCH conversion, depth gradient
    surface: Straight and premultiplied alpha pixel buffers
    raster: Coverage rasterizer and Wu lines
    leaves: Leaf placement on the outer branch layers
    draw: Per-frame tree renderer
    options: Validated render options
    preview: matplotlib preview of a surface
"""

from bonsai.color import RGB, oklch_to_rgb, parse_hex_color
from bonsai.config import (
    ColorPolicy,
    DepthGradient,
    DrawMode,
    FixedColor,
    LeafStyle,
    RandomHue,
    RenderStyle,
    TreeParams,
)
from bonsai.draw import branch_outline, draw_tree
from bonsai.generator import Branch, BranchType, Canvas, generate_tree
from bonsai.geometry import Point
from bonsai.leaves import Leaf, place_leaves
from bonsai.options import RenderOptions
from bonsai.raster import Rasterizer, draw_aa_line, fill_polygon
from bonsai.rng import RandomSource
from bonsai.surface import NRGBASurface, RGBASurface

__all__ = [
    # Config
    "ColorPolicy",
    "DepthGradient",
    "DrawMode",
    "FixedColor",
    "LeafStyle",
    "RandomHue",
    "RenderStyle",
    "TreeParams",
    "RenderOptions",
    # Generation
    "Branch",
    "BranchType",
    "Canvas",
    "Point",
    "RandomSource",
    "generate_tree",
    # Drawing
    "Leaf",
    "NRGBASurface",
    "RGBASurface",
    "Rasterizer",
    "branch_outline",
    "draw_aa_line",
    "draw_tree",
    "fill_polygon",
    "place_leaves",
    # Color
    "RGB",
    "oklch_to_rgb",
    "parse_hex_color",
]
