"""
Seeded random source shared by generation and drawing.

Every random decision in a frame is drawn from one RandomSource, in a
fixed order, so a non-zero seed reproduces a frame exactly.
"""

import numpy as np


class RandomSource:
    """
    Stream of uniform draws backed by a numpy Generator.

    Args:
        seed: Non-zero for a reproducible stream; 0 (or None) draws
            fresh entropy from the operating system.
    """

    def __init__(self, seed: int | None = 0) -> None:
        self.seed = seed or 0
        self._gen = np.random.default_rng(seed or None)

    def float64(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._gen.random())

    def uint64(self) -> int:
        """Uniform unsigned 64-bit integer, e.g. to seed another source."""
        return int(self._gen.integers(0, 2**64, dtype=np.uint64))
