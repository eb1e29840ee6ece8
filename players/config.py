from __future__ import annotations

"""Tuning parameters for player generation."""

from typing import Dict, Tuple

# ---------------------------------------------------------------------------
# Body-type profiles
# ---------------------------------------------------------------------------

# Offsets added to the base rating, in ratings.config.RATING_KEYS order
# (hgt, stre, spd, jmp, endu, ins, dnk, ft, fg, tp, blk, stl, drb, pss, reb).
# Each row sums to ~150.
PROFILE_OFFSETS: Dict[str, Tuple[int, ...]] = {
    "balanced": (10, 10, 10, 10, 10, 10, 10, 10, 10, 25, 10, 10, 10, 10, 10),
    "point": (-30, -10, 40, 15, 0, 0, 0, 10, 15, 15, 0, 20, 40, 40, 0),
    "wing": (10, 10, 15, 15, 0, 0, 25, 15, 15, 20, 0, 10, 15, 0, 15),
    "big": (50, 35, -10, -10, 0, 35, 35, 0, -10, -15, 30, 0, -10, -10, 35),
}
DEFAULT_PROFILE: str = "balanced"

BASE_RATING_SIGMA: float = 5.0
RATING_SIGMA: float = 10.0

# ---------------------------------------------------------------------------
# Body measurements
# ---------------------------------------------------------------------------

MIN_HGT_IN: int = 69  # 5'9"
MAX_HGT_IN: int = 89  # 7'5"
MIN_WEIGHT_LB: int = 150
MAX_WEIGHT_LB: int = 290

# Multiplicative jitter on height/weight: gauss(1, BODY_JITTER_SIGMA).
BODY_JITTER_SIGMA: float = 0.02

DEFAULT_NATIONALITY: str = "USA"

# ---------------------------------------------------------------------------
# Record defaults
# ---------------------------------------------------------------------------

HEALTHY: str = "Healthy"

# Placeholder roster slot until the roster is auto-sorted.
DEFAULT_ROSTER_ORDER: int = 666
