"""Utility math functions for gcodestats."""

from __future__ import annotations

import numpy as np


def hypot3d(
    a: tuple[float, float, float],
    b: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> float:
    """Euclidean distance between points *a* and *b*."""
    return float(np.linalg.norm(np.subtract(b, a)))


def span(low: float | None, high: float | None) -> float:
    """Return ``high - low``, or 0.0 when the axis was never sampled."""
    if low is None or high is None:
        return 0.0
    return high - low
