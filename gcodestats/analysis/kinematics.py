"""Trapezoidal velocity model used to estimate move durations."""

from __future__ import annotations

import math

from gcodestats.utils.math_helpers import hypot3d


def transition_distance(v_start: float, v_end: float, acceleration: float) -> float:
    """Distance needed to change speed from *v_start* to *v_end*.

    From v² = v0² + 2·a·s, so s = |v² − v0²| / (2·a).
    """
    return abs(v_end * v_end - v_start * v_start) / (2.0 * acceleration)


def move_duration(
    start: tuple[float, float, float],
    end: tuple[float, float, float],
    v_start: float,
    v_end: float,
    acceleration: float,
) -> float:
    """Estimate how long a controlled move takes, in seconds.

    Parameters
    ----------
    start, end:
        Positions (mm) before and after the move.
    v_start:
        Speed of the previous controlled move (mm/s).
    v_end:
        Target speed of this move (mm/s).
    acceleration:
        Constant acceleration (mm/s²).

    Returns
    -------
    The ramp time between the two speeds plus the cruise time at *v_end*
    for the rest of the distance.  When the ramp does not fit in the
    move, or either speed is zero, only the rest-to-rest time over the
    ramp distance, sqrt(2·s/a), is counted.
    """
    travel = hypot3d(start, end)
    ramp = transition_distance(v_start, v_end, acceleration)

    if ramp <= travel and v_start > 0.0 and v_end > 0.0:
        return 2.0 * ramp / (v_start + v_end) + (travel - ramp) / v_end
    return math.sqrt(2.0 * ramp / acceleration)
