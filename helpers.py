from __future__ import annotations

"""Small numeric helpers shared by the models."""

import math


def bound(x: float, lo: float, hi: float) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    ``round()`` uses banker's rounding; ratings and contract amounts always
    round .5 upward.
    """
    return int(math.floor(float(x) + 0.5))


def safe_div(n: float, d: float, default: float = 0.0) -> float:
    try:
        if d == 0:
            return float(default)
        return float(n) / float(d)
    except (TypeError, ValueError, ZeroDivisionError):
        return float(default)
