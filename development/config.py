from __future__ import annotations

"""Tuning parameters for year-over-year player development.

Notes
-----
- The base change is shared by all 14 skill dimensions in a year; each
  dimension multiplies it by its own gauss(DIM_NOISE_MU, DIM_NOISE_SIGMA).
- Height never develops.
"""

from typing import Tuple

# ---------------------------------------------------------------------------
# Breakout jumps
# ---------------------------------------------------------------------------

# random() > BREAKOUT_ROLL and age < BREAKOUT_MAX_AGE => pot += BREAKOUT_POT.
BREAKOUT_ROLL: float = 0.985
BREAKOUT_MAX_AGE: int = 22
BREAKOUT_POT: int = 10

# ---------------------------------------------------------------------------
# Base change
# ---------------------------------------------------------------------------

# sigma = (pot - ovr) / VARIANCE_DIVISOR
VARIANCE_DIVISOR: float = 10.0

# Mean of the base gauss is randint(lo, hi), both inclusive.
BASE_MEAN_RANGE: Tuple[int, int] = (-1, 2)

BASE_CHANGE_MIN: float = -5.0
BASE_CHANGE_MAX: float = 30.0

# base + pot never exceeds this.
POT_CEILING: int = 95

# Positive changes only: base *= 1 + (pot - ovr) / GROWTH_GAP_DIVISOR
GROWTH_GAP_DIVISOR: float = 8.0

# ---------------------------------------------------------------------------
# Age curve
# ---------------------------------------------------------------------------

# Past this age growth is divided by VETERAN_DIVISOR.
VETERAN_AGE: int = 23
VETERAN_DIVISOR: float = 3.0

# Each threshold passed subtracts DECLINE_STEP (cumulative).
DECLINE_AGES: Tuple[int, ...] = (29, 31, 33)
DECLINE_STEP: float = 1.0

# Past this age pot is pinned to ovr.
POT_LOCK_AGE: int = 28

# ---------------------------------------------------------------------------
# Coaching
# ---------------------------------------------------------------------------

# Linear: rank 1 => COACHING_BEST, rank RANK_MAX => COACHING_BEST - COACHING_SPAN.
COACHING_BEST: float = 1.25
COACHING_SPAN: float = 0.5
DEFAULT_COACHING_RANK: float = 15.5
COACHING_EXPENSE_ITEM: str = "coaching"

# ---------------------------------------------------------------------------
# Per-dimension noise and potential drift
# ---------------------------------------------------------------------------

DIM_NOISE_MU: float = 1.0
DIM_NOISE_SIGMA: float = 2.0

# pot += POT_DRIFT_MU + round(gauss(0, POT_DRIFT_SIGMA))
POT_DRIFT_MU: int = -2
POT_DRIFT_SIGMA: float = 2.0
