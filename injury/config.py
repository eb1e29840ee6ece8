from __future__ import annotations

"""Tuning parameters for injury duration."""

# ---------------------------------------------------------------------------
# Health staff
# ---------------------------------------------------------------------------

# health_factor = HEALTH_FACTOR_BEST + HEALTH_FACTOR_SPAN * (rank - 1) / (RANK_MAX - 1)
# Rank 1 (most spent on health) heals fastest.
HEALTH_FACTOR_BEST: float = 0.5
HEALTH_FACTOR_SPAN: float = 0.5

HEALTH_EXPENSE_ITEM: str = "health"

# ---------------------------------------------------------------------------
# Duration noise
# ---------------------------------------------------------------------------

DURATION_MULT_MIN: float = 0.25
DURATION_MULT_MAX: float = 1.75
