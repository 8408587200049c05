"""
Tree renderer.

draw_tree paints a generated Canvas onto a caller-owned surface. The
draw mode and color policy are resolved once per frame; branches are
painted in generation order (trunk first) and leaves last so they sit
on top.
"""

from collections.abc import Callable

from bonsai.color import RGB
from bonsai.config import DrawMode, RenderStyle
from bonsai.generator import Branch, Canvas
from bonsai.geometry import Point, unit_perpendicular
from bonsai.leaves import place_leaves
from bonsai.raster import Rasterizer, draw_aa_line, fill_polygon
from bonsai.surface import Surface


def branch_outline(branch: Branch) -> list[Point] | None:
    """
    The four corners of a branch's tapered trapezoid.

    Corners run start-side, end-side, end-side, start-side. The trunk's
    base is flat (horizontal); all other ends are perpendicular to the
    branch. Returns None for a zero-length branch.
    """
    perp = unit_perpendicular(branch.start, branch.end)
    if perp == (0.0, 0.0):
        return None
    hs = branch.start_width / 2
    he = branch.end_width / 2
    s, e = branch.start, branch.end
    if branch.is_trunk:
        s1, s2 = Point(s.x + hs, s.y), Point(s.x - hs, s.y)
    else:
        s1 = Point(s.x + perp.x * hs, s.y + perp.y * hs)
        s2 = Point(s.x - perp.x * hs, s.y - perp.y * hs)
    e1 = Point(e.x + perp.x * he, e.y + perp.y * he)
    e2 = Point(e.x - perp.x * he, e.y - perp.y * he)
    return [s1, e1, e2, s2]


def draw_branch_line(surface: Surface, branch: Branch, rgb: RGB, rast: Rasterizer) -> None:
    if branch.start == branch.end:
        return
    draw_aa_line(surface, branch.start.x, branch.start.y, branch.end.x, branch.end.y, rgb)


def draw_branch_polygon(surface: Surface, branch: Branch, rgb: RGB, rast: Rasterizer) -> None:
    outline = branch_outline(branch)
    if outline is None:
        return
    fill_polygon(surface, rast, outline, rgb)


BRANCH_DRAWERS: dict[DrawMode, Callable[[Surface, Branch, RGB, Rasterizer], None]] = {
    DrawMode.LINE: draw_branch_line,
    DrawMode.POLYGON: draw_branch_polygon,
}


def draw_tree(surface: Surface, canvas: Canvas, style: RenderStyle | None = None) -> None:
    """
    Paint the canvas's branches (and leaves, if enabled) onto `surface`.

    Args:
        surface: Destination; NRGBASurface for line mode, RGBASurface
            for polygon mode (see DrawMode.new_surface)
        canvas: Generated tree; its random source supplies per-branch
            hues and leaf placement
        style: Draw mode, color policy and leaf settings
    """
    if style is None:
        style = RenderStyle()

    draw_branch = BRANCH_DRAWERS[style.mode]
    color_for = style.color.color_for
    # One rasterizer for the whole frame, reset per shape
    rast = Rasterizer(surface.width, surface.height)

    for branch in canvas.branches:
        rgb = color_for(branch, canvas.max_depth, canvas.rand)
        draw_branch(surface, branch, rgb, rast)

    if style.leaves is not None:
        for leaf in place_leaves(canvas, style.leaves):
            fill_polygon(surface, rast, leaf.triangle(), leaf.rgb)
