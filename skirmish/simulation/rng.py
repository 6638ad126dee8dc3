"""RandomSource — the random draws the simulation core depends on.

The engine seeds a ``numpy.random.Generator``, which satisfies this
protocol directly.  Tests can pass any object with the same two
methods to script exact draw sequences.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Subset of ``numpy.random.Generator`` used by the simulation."""

    def integers(self, low: int, high: int | None = None) -> int:
        """Return a uniform integer in ``[low, high)``."""
        ...

    def random(self) -> float:
        """Return a uniform float in ``[0.0, 1.0)``."""
        ...


def make_rng(seed: int | None) -> np.random.Generator:
    """Build the master generator for a run.

    Args:
        seed: Seed for reproducible runs, or None for OS entropy.
    """
    return np.random.default_rng(seed)


def draw_step(rng: RandomSource) -> int:
    """Return a uniform displacement from ``{-1, 0, 1}``."""
    return int(rng.integers(-1, 2))
