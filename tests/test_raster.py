"""
Tests for the coverage rasterizer and anti-aliased lines.

Coverage must equal the exact area of each pixel inside the shape, so
simple shapes have closed-form expected values.
"""

import numpy as np
import pytest

from bonsai.color import RGB
from bonsai.geometry import Point
from bonsai.raster import Rasterizer, draw_aa_line, fill_polygon
from bonsai.surface import NRGBASurface, RGBASurface

RED = RGB(255, 0, 0)


def square(x0: float, y0: float, x1: float, y1: float) -> list[Point]:
    return [Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1)]


def rasterize(points: list[Point], width: int = 4, height: int = 4) -> np.ndarray:
    rast = Rasterizer(width, height)
    rast.polygon(points)
    return rast.coverage()


def supersampled(points: list[Point], width: int, height: int, n: int = 64) -> np.ndarray:
    """Reference coverage of a triangle from n x n samples per pixel."""
    offsets = (np.arange(n) + 0.5) / n
    xs = (np.arange(width)[:, None] + offsets).ravel()
    ys = (np.arange(height)[:, None] + offsets).ravel()
    sx, sy = np.meshgrid(xs, ys)
    crosses = []
    for a, b in zip(points, points[1:] + points[:1]):
        crosses.append((b.x - a.x) * (sy - a.y) - (b.y - a.y) * (sx - a.x))
    crosses = np.stack(crosses)
    inside = np.all(crosses >= 0, axis=0) | np.all(crosses <= 0, axis=0)
    return inside.reshape(height, n, width, n).mean(axis=(1, 3))


class TestCoverage:
    """Tests for area coverage accumulation."""

    def test_pixel_aligned_square(self) -> None:
        """A pixel-aligned square covers its pixels fully and nothing else."""
        cov = rasterize(square(1, 1, 3, 3))
        expected = np.zeros((4, 4))
        expected[1:3, 1:3] = 1.0
        np.testing.assert_allclose(cov, expected, atol=1e-12)

    def test_half_pixel_offset_square(self) -> None:
        """A unit square centered on a pixel corner splits into quarters."""
        cov = rasterize(square(0.5, 0.5, 1.5, 1.5))
        expected = np.zeros((4, 4))
        expected[0:2, 0:2] = 0.25
        np.testing.assert_allclose(cov, expected, atol=1e-12)

    def test_total_coverage_is_area(self) -> None:
        """Coverage of a triangle sums to its area."""
        tri = [Point(1, 1), Point(9, 2), Point(4, 8)]
        cov = rasterize(tri, 10, 10)
        assert cov.sum() == pytest.approx(26.5)
        assert cov.max() <= 1.0
        assert cov.min() >= 0.0

    def test_winding_direction_irrelevant(self) -> None:
        """Clockwise and counter-clockwise outlines give the same coverage."""
        tri = [Point(0.3, 0.2), Point(7.7, 3.1), Point(2.2, 6.9)]
        np.testing.assert_allclose(
            rasterize(tri, 8, 8), rasterize(list(reversed(tri)), 8, 8), atol=1e-12
        )

    def test_shallow_edge_spanning_many_pixels(self) -> None:
        """A thin sliver crossing many columns keeps its exact area."""
        sliver = [Point(0.5, 1.0), Point(11.5, 2.0), Point(0.5, 2.0)]
        cov = rasterize(sliver, 12, 4)
        assert cov.sum() == pytest.approx(5.5)

    def test_left_overflow_folds_onto_edge(self) -> None:
        """Geometry left of the region still covers pixels to its right."""
        cov = rasterize(square(-2, 0, 2, 2))
        expected = np.zeros((4, 4))
        expected[0:2, 0:2] = 1.0
        np.testing.assert_allclose(cov, expected, atol=1e-12)

    def test_shape_entirely_left_is_empty(self) -> None:
        """A shape wholly left of the region covers nothing."""
        cov = rasterize(square(-3, 0, -1, 2))
        assert np.all(cov == 0.0)

    def test_diagonal_edge_crossing_left_side(self) -> None:
        """An edge leaving the region mid-row keeps exact coverage inside."""
        tri = [Point(2.86, 5.96), Point(-4.22, 5.02), Point(-0.42, -1.09)]
        cov = rasterize(tri, 10, 10)
        np.testing.assert_allclose(cov, supersampled(tri, 10, 10), atol=0.05)
        np.testing.assert_allclose(cov[5, :3], [165 / 255, 199 / 255, 143 / 255], atol=0.01)

    def test_diagonal_edge_crossing_right_side(self) -> None:
        tri = [Point(7.3, 1.2), Point(13.6, 4.7), Point(6.1, 8.9)]
        np.testing.assert_allclose(rasterize(tri, 10, 10), supersampled(tri, 10, 10), atol=0.05)

    def test_random_triangles_crossing_every_side(self) -> None:
        """Triangles overhanging the region match a supersampled reference."""
        rng = np.random.default_rng(0)
        for _ in range(30):
            tri = [Point(float(x), float(y)) for x, y in rng.uniform(-6.0, 16.0, size=(3, 2))]
            np.testing.assert_allclose(
                rasterize(tri, 10, 10), supersampled(tri, 10, 10), atol=0.05
            )

    def test_vertical_clipping(self) -> None:
        """Rows above and below the region are dropped."""
        cov = rasterize(square(1, -5, 2, 10))
        expected = np.zeros((4, 4))
        expected[:, 1] = 1.0
        np.testing.assert_allclose(cov, expected, atol=1e-12)

    def test_reset_clears_and_resizes(self) -> None:
        """Reset reuses the rasterizer for a new region."""
        rast = Rasterizer(8, 8)
        rast.polygon(square(0, 0, 8, 8))
        assert rast.coverage().sum() == pytest.approx(64.0)
        rast.reset(3, 2)
        assert rast.coverage().shape == (2, 3)
        assert np.all(rast.coverage() == 0.0)
        rast.polygon(square(0, 0, 1, 1))
        assert rast.coverage().sum() == pytest.approx(1.0)

    def test_translation(self) -> None:
        """Polygon offsets move the shape into the local region."""
        rast = Rasterizer(2, 2)
        rast.polygon(square(10, 20, 11, 21), dx=10, dy=20)
        cov = rast.coverage()
        assert cov[0, 0] == pytest.approx(1.0)
        assert cov.sum() == pytest.approx(1.0)


class TestFillPolygon:
    """Tests for bounding-box scoped fills."""

    def test_fill_writes_color(self) -> None:
        """A fully covered pixel takes the fill color."""
        surface = RGBASurface(10, 10)
        fill_polygon(surface, Rasterizer(10, 10), square(2, 2, 6, 6), RED)
        assert tuple(surface.pix[3, 3]) == (255, 0, 0, 255)
        assert tuple(surface.pix[8, 8]) == (0, 0, 0, 0)

    def test_offscreen_polygon_writes_nothing(self) -> None:
        """A polygon entirely at x < 0 leaves the surface untouched."""
        surface = RGBASurface(10, 10)
        fill_polygon(surface, Rasterizer(10, 10), square(-30, 2, -10, 6), RED)
        assert not surface.pix.any()

    def test_barely_offscreen_polygon_writes_nothing(self) -> None:
        """A polygon within the 1px margin but left of x=0 paints nothing."""
        surface = RGBASurface(10, 10)
        fill_polygon(surface, Rasterizer(10, 10), square(-0.8, 2, -0.2, 6), RED)
        assert not surface.pix.any()

    def test_fill_crossing_left_edge(self) -> None:
        """Alpha near the left edge follows the exact covered area."""
        surface = RGBASurface(10, 10)
        tri = [Point(2.86, 5.96), Point(-4.22, 5.02), Point(-0.42, -1.09)]
        fill_polygon(surface, Rasterizer(10, 10), tri, RED)
        alpha = surface.alpha()[5, :3].astype(int)
        assert np.all(np.abs(alpha - [165, 199, 143]) <= 2)

    def test_partially_offscreen_polygon_is_clipped(self) -> None:
        """Only the in-bounds part is painted."""
        surface = RGBASurface(10, 10)
        fill_polygon(surface, Rasterizer(10, 10), square(6, 6, 14, 14), RED)
        assert surface.painted_mask().sum() == 16


class TestAALine:
    """Tests for Wu line drawing."""

    def test_horizontal_line_on_pixel_centers(self) -> None:
        """A line through pixel centers paints one solid row."""
        surface = NRGBASurface(10, 5)
        draw_aa_line(surface, 0.5, 2.5, 9.5, 2.5, RED)
        alpha = surface.alpha()
        assert np.all(alpha[2, 1:9] == 255)
        assert not alpha[1].any()
        assert not alpha[3].any()

    def test_vertical_line(self) -> None:
        """Steep lines step along y."""
        surface = NRGBASurface(5, 10)
        draw_aa_line(surface, 3.5, 0.5, 3.5, 9.5, RED)
        alpha = surface.alpha()
        assert np.all(alpha[1:9, 3] == 255)
        assert not alpha[:, 2].any()
        assert not alpha[:, 4].any()

    def test_straddling_line_splits_intensity(self) -> None:
        """A line between two pixel rows paints both at about half alpha."""
        surface = NRGBASurface(10, 5)
        draw_aa_line(surface, 0.5, 2.0, 9.5, 2.0, RED)
        alpha = surface.alpha()
        assert np.all(np.abs(alpha[1, 2:8].astype(int) - 128) <= 1)
        assert np.all(np.abs(alpha[2, 2:8].astype(int) - 128) <= 1)

    def test_straight_alpha_keeps_color(self) -> None:
        """Partially covered pixels keep the full color in straight alpha."""
        surface = NRGBASurface(10, 5)
        draw_aa_line(surface, 0.5, 2.0, 9.5, 2.0, RED)
        assert tuple(surface.pix[1, 4, :3]) == (255, 0, 0)

    def test_offscreen_line_writes_nothing(self) -> None:
        """Lines outside the surface are dropped without error."""
        surface = NRGBASurface(10, 10)
        draw_aa_line(surface, -20, -5, -3, -15, RED)
        draw_aa_line(surface, 12, 2, 30, 8, RED)
        assert not surface.pix.any()

    def test_degenerate_line(self) -> None:
        """A zero-length line does not raise."""
        surface = NRGBASurface(4, 4)
        draw_aa_line(surface, 1.5, 1.5, 1.5, 1.5, RED)
        assert surface.alpha().max() <= 255
