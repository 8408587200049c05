"""
Caller-owned pixel surfaces.

Both surfaces wrap an (height, width, 4) uint8 numpy array, indexed
[y, x, channel]. They differ in how color relates to alpha:

    NRGBASurface: straight (non-premultiplied) alpha, written by line mode
    RGBASurface:  premultiplied alpha, written by polygon mode

Writes are "source over destination" with the source alpha given by a
coverage value in [0, 1]; zero coverage leaves the pixel untouched.
"""

import numpy as np

from bonsai.color import RGB


class Surface:
    """Common storage and bounds handling."""

    def __init__(self, width: int, height: int) -> None:
        self.pix = np.zeros((height, width, 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self.pix.shape[1]

    @property
    def height(self) -> int:
        return self.pix.shape[0]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def alpha(self) -> np.ndarray:
        """Alpha channel as a (height, width) uint8 view."""
        return self.pix[..., 3]

    def painted_mask(self) -> np.ndarray:
        """Boolean mask of pixels with any alpha."""
        return self.pix[..., 3] > 0

    def composite(self, x0: int, y0: int, coverage: np.ndarray, rgb: RGB) -> None:
        """
        Paint `rgb` over the region at (x0, y0) with per-pixel coverage.

        The coverage block is clipped to the surface.
        """
        h, w = coverage.shape
        x1, y1 = min(self.width, x0 + w), min(self.height, y0 + h)
        cx, cy = max(0, -x0), max(0, -y0)
        x0, y0 = max(0, x0), max(0, y0)
        if x0 >= x1 or y0 >= y1:
            return
        cov = coverage[cy : cy + (y1 - y0), cx : cx + (x1 - x0)]
        region = self.pix[y0:y1, x0:x1]
        region[...] = self._over(region, cov, rgb)

    def blend_pixel(self, x: int, y: int, coverage: float, rgb: RGB) -> None:
        """Paint a single pixel; out-of-bounds writes are dropped."""
        if coverage <= 0 or not self.in_bounds(x, y):
            return
        region = self.pix[y : y + 1, x : x + 1]
        region[...] = self._over(region, np.array([[min(1.0, coverage)]]), rgb)

    def _over(self, dst: np.ndarray, cov: np.ndarray, rgb: RGB) -> np.ndarray:
        raise NotImplementedError


class NRGBASurface(Surface):
    """Straight-alpha surface: color channels are not scaled by alpha."""

    def _over(self, dst: np.ndarray, cov: np.ndarray, rgb: RGB) -> np.ndarray:
        src = np.array(rgb, dtype=np.float64) / 255.0
        d = dst.astype(np.float64) / 255.0
        sa = cov[..., None]
        da = d[..., 3:4]
        out_a = sa + da * (1 - sa)
        out_rgb = np.where(
            out_a > 0,
            (src * sa + d[..., :3] * da * (1 - sa)) / np.maximum(out_a, 1e-12),
            d[..., :3],
        )
        out = np.concatenate([out_rgb, out_a], axis=-1)
        return np.rint(out * 255).astype(np.uint8)

    def to_premultiplied(self) -> "RGBASurface":
        """Copy into a premultiplied surface, e.g. for display."""
        out = RGBASurface(self.width, self.height)
        a = self.pix[..., 3:4].astype(np.float64) / 255.0
        out.pix[..., :3] = np.rint(self.pix[..., :3] * a).astype(np.uint8)
        out.pix[..., 3] = self.pix[..., 3]
        return out


class RGBASurface(Surface):
    """Premultiplied-alpha surface, so overlapping shapes blend at shared edges."""

    def _over(self, dst: np.ndarray, cov: np.ndarray, rgb: RGB) -> np.ndarray:
        src = np.array([*rgb, 255], dtype=np.float64)
        sa = cov[..., None]
        out = src * sa + dst.astype(np.float64) * (1 - sa)
        return np.rint(out).astype(np.uint8)
