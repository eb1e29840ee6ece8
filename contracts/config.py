from __future__ import annotations

"""Tunable configuration for demanded contracts and free-agent mood.

Money is in thousands of dollars throughout the core; display layers divide
by DISPLAY_UNIT to show millions.
"""

from typing import Tuple

# ---------------------------------------------------------------------------
# Contract amount
# ---------------------------------------------------------------------------

MIN_CONTRACT: int = 500
MAX_CONTRACT: int = 20000

# Finalized amounts are multiples of this ($50k).
CONTRACT_ROUNDING: int = 50

# amount_scale = ((2*ovr + pot) * AMOUNT_VALUE_MULT - AMOUNT_VALUE_OFFSET) / (RAW_HI - RAW_LO)
# maps a roughly 120..210 composite onto 0..1 of the [MIN, MAX] band.
AMOUNT_VALUE_MULT: float = 0.85
AMOUNT_VALUE_OFFSET: float = 110.0
AMOUNT_RAW_RANGE: Tuple[float, float] = (120.0, 210.0)

AMOUNT_JITTER_SIGMA: float = 0.1

# ---------------------------------------------------------------------------
# Contract length
# ---------------------------------------------------------------------------

# High-potential players want short deals: years = BASE - round((pot-ovr)/DIVISOR).
BASE_YEARS: int = 5
POT_SURPLUS_DIVISOR: float = 4.0
MIN_YEARS: int = 2

# Bad players can only ask for short deals: (pot below, max years), checked in order.
LOW_POT_YEAR_CAPS: Tuple[Tuple[int, int], ...] = (
    (40, 1),
    (50, 2),
    (60, 3),
)

# ---------------------------------------------------------------------------
# Free-agent mood
# ---------------------------------------------------------------------------

# Below this ovr+pot a player can't afford to be choosy: mood is 0 everywhere.
MOOD_MIN_OVR_POT: int = 80
MOOD_SCALE: float = 100.0

# Base mood composition (per team, clamped to [0, 1]).
BASE_MOOD_HYPE_W: float = 0.5
BASE_MOOD_FACILITIES_W: float = 0.1
BASE_MOOD_POP_W: float = 0.2
BASE_MOOD_POP_SCALE: float = 10.0
BASE_MOOD_NOISE_MU: float = -0.1
BASE_MOOD_NOISE_SIGMA: float = 0.3

FACILITIES_EXPENSE_ITEM: str = "facilities"

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

DISPLAY_UNIT: float = 1000.0
