"""
Anti-aliased scan conversion.

Rasterizer computes exact per-pixel area coverage of closed polygons
with the non-zero winding rule. Each edge deposits signed area and cover
into an accumulation buffer; a running sum along each row then turns
those deposits into coverage. Pixel (x, y) covers the unit square
[x, x+1) x [y, y+1).

draw_aa_line draws 1px lines with Wu's algorithm, using the same pixel
convention (pixel centers at half-integers).
"""

import math

import numpy as np

from bonsai.color import RGB
from bonsai.geometry import Point
from bonsai.surface import Surface


class Rasterizer:
    """
    Reusable coverage rasterizer for a w x h region.

    Call reset() to reuse the instance for a new region instead of
    allocating a new one per shape.
    """

    def __init__(self, width: int, height: int) -> None:
        self.reset(width, height)

    def reset(self, width: int, height: int) -> None:
        """Clear the path and resize the region."""
        self.width = width
        self.height = height
        # Two spare columns take deposits at and right of x == width
        buf = getattr(self, "_buf", None)
        if buf is None or buf.shape[0] < height or buf.shape[1] < width + 2:
            rows = max(height, buf.shape[0] if buf is not None else 0)
            cols = max(width + 2, buf.shape[1] if buf is not None else 0)
            self._buf = np.zeros((rows, cols), dtype=np.float64)
        self._acc = self._buf[:height, : width + 2]
        self._acc.fill(0.0)
        self._first: Point | None = None
        self._pen: Point | None = None

    def move_to(self, x: float, y: float) -> None:
        """Start a new subpath, closing the previous one."""
        self.close_path()
        self._first = self._pen = Point(x, y)

    def line_to(self, x: float, y: float) -> None:
        if self._pen is None:
            self.move_to(x, y)
            return
        p = Point(x, y)
        self._edge(self._pen, p)
        self._pen = p

    def close_path(self) -> None:
        if self._pen is not None and self._first is not None and self._pen != self._first:
            self._edge(self._pen, self._first)
        self._pen = self._first

    def polygon(self, points: list[Point], dx: float = 0.0, dy: float = 0.0) -> None:
        """Add a closed polygon, translated by (-dx, -dy)."""
        if not points:
            return
        self.move_to(points[0].x - dx, points[0].y - dy)
        for p in points[1:]:
            self.line_to(p.x - dx, p.y - dy)
        self.close_path()

    def coverage(self) -> np.ndarray:
        """Per-pixel coverage in [0, 1], shape (height, width)."""
        self.close_path()
        acc = np.cumsum(self._acc, axis=1)[:, : self.width]
        return np.minimum(np.abs(acc), 1.0)

    def _edge(self, p0: Point, p1: Point) -> None:
        """Deposit one directed edge into the accumulation buffer."""
        if abs(p0.y - p1.y) <= 1e-9:
            return
        if p0.y < p1.y:
            sign = 1.0
        else:
            sign = -1.0
            p0, p1 = p1, p0
        dxdy = (p1.x - p0.x) / (p1.y - p0.y)
        x = p0.x
        if p0.y < 0:
            x -= p0.y * dxdy
        y_lo = max(0, int(math.floor(p0.y)))
        y_hi = min(self.height, int(math.ceil(p1.y)))
        acc = self._acc
        for y in range(y_lo, y_hi):
            dy = min(y + 1.0, p1.y) - max(float(y), p0.y)
            xnext = x + dxdy * dy
            d = dy * sign
            x0, x1 = (x, xnext) if x < xnext else (xnext, x)
            x0floor = math.floor(x0)
            x0i = int(x0floor)
            x1ceil = math.ceil(x1)
            x1i = int(x1ceil)
            row = acc[y]
            if x1i <= x0i + 1:
                xmf = 0.5 * (x + xnext) - x0floor
                _deposit(row, x0i, x0i + 1, d - d * xmf)
                _deposit(row, x0i + 1, x0i + 2, d * xmf)
            else:
                s = 1.0 / (x1 - x0)
                x0f = x0 - x0floor
                a0 = 0.5 * s * (1.0 - x0f) * (1.0 - x0f)
                x1f = x1 - x1ceil + 1.0
                am = 0.5 * s * x1f * x1f
                _deposit(row, x0i, x0i + 1, d * a0)
                if x1i == x0i + 2:
                    _deposit(row, x0i + 1, x0i + 2, d * (1.0 - a0 - am))
                else:
                    a1 = s * (1.5 - x0f)
                    _deposit(row, x0i + 1, x0i + 2, d * (a1 - a0))
                    _deposit(row, x0i + 2, x1i - 1, d * s)
                    a2 = a1 + (x1i - x0i - 3) * s
                    _deposit(row, x1i - 1, x1i, d * (1.0 - a2 - am))
                _deposit(row, x1i, x1i + 1, d * am)
            x = xnext


def _deposit(row: np.ndarray, lo: int, hi: int, value: float) -> None:
    """
    Add `value` to row[lo:hi], folding out-of-range columns onto the ends.

    Columns left of 0 land on column 0 and columns past the last spare
    column land on it, so the running row sum over the visible columns
    is unchanged.
    """
    if lo >= hi:
        return
    last = row.shape[0] - 1
    if lo < 0:
        row[0] += value * (min(hi, 0) - lo)
        lo = 0
    if hi > last + 1:
        row[last] += value * (hi - max(lo, last + 1))
        hi = last + 1
    if lo < hi:
        row[lo:hi] += value


def fill_polygon(surface: Surface, rast: Rasterizer, points: list[Point], rgb: RGB) -> None:
    """
    Fill a polygon on `surface`, scoping the work to its bounding box.

    The box is the polygon's extent plus a 1px margin, clamped to the
    surface. Polygons entirely off the surface write nothing.
    """
    min_x = min(p.x for p in points)
    max_x = max(p.x for p in points)
    min_y = min(p.y for p in points)
    max_y = max(p.y for p in points)

    x0 = max(0.0, min_x - 1)
    y0 = max(0.0, min_y - 1)
    x1 = min(float(surface.width), max_x + 1)
    y1 = min(float(surface.height), max_y + 1)
    if x0 >= x1 or y0 >= y1:
        return  # Completely offscreen

    x0i, y0i = int(math.floor(x0)), int(math.floor(y0))
    x1i, y1i = int(math.ceil(x1)), int(math.ceil(y1))
    rast.reset(x1i - x0i, y1i - y0i)
    rast.polygon(points, dx=x0i, dy=y0i)
    surface.composite(x0i, y0i, rast.coverage(), rgb)


# =============================================================================
# WU LINES
# =============================================================================


def _fpart(v: float) -> float:
    return v - math.floor(v)


def _rfpart(v: float) -> float:
    return 1.0 - _fpart(v)


def draw_aa_line(surface: Surface, x0: float, y0: float, x1: float, y1: float, rgb: RGB) -> None:
    """
    Draw an anti-aliased 1px line with Wu's algorithm.

    Pixels outside the surface are skipped.
    """
    # Shift so pixel centers sit on integers
    x0, y0, x1, y1 = x0 - 0.5, y0 - 0.5, x1 - 0.5, y1 - 0.5
    steep = abs(y1 - y0) > abs(x1 - x0)
    if steep:
        x0, y0, x1, y1 = y0, x0, y1, x1
    if x0 > x1:
        x0, x1, y0, y1 = x1, x0, y1, y0

    def plot(a: int, b: int, c: float) -> None:
        if steep:
            surface.blend_pixel(b, a, c, rgb)
        else:
            surface.blend_pixel(a, b, c, rgb)

    dx = x1 - x0
    gradient = (y1 - y0) / dx if dx > 1e-12 else 1.0

    # First endpoint
    xend = math.floor(x0 + 0.5)
    yend = y0 + gradient * (xend - x0)
    xgap = _rfpart(x0 + 0.5)
    xpx1 = int(xend)
    ypx1 = int(math.floor(yend))
    plot(xpx1, ypx1, _rfpart(yend) * xgap)
    plot(xpx1, ypx1 + 1, _fpart(yend) * xgap)
    intery = yend + gradient

    # Second endpoint
    xend = math.floor(x1 + 0.5)
    yend = y1 + gradient * (xend - x1)
    xgap = _fpart(x1 + 0.5)
    xpx2 = int(xend)
    ypx2 = int(math.floor(yend))
    if xpx2 == xpx1:
        return
    plot(xpx2, ypx2, _rfpart(yend) * xgap)
    plot(xpx2, ypx2 + 1, _fpart(yend) * xgap)

    for x in range(xpx1 + 1, xpx2):
        iy = int(math.floor(intery))
        plot(x, iy, _rfpart(intery))
        plot(x, iy + 1, _fpart(intery))
        intery += gradient
