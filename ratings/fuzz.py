from __future__ import annotations

"""Scouting noise ("fuzz") added to displayed ratings.

Fuzz is persisted per ratings row and is never applied to the true values
used by the simulation; only display paths call ``apply_fuzz``.
"""

import config
from helpers import bound, round_half_up
from random_source import RandomSource

from . import config as cfg


def gen_fuzz(scouting_rank: float, *, rng: RandomSource) -> float:
    """Draw a fuzz term for a team's scouting rank (1 best .. 30 worst).

    Draws: one gauss.
    """
    t = (float(scouting_rank) - 1.0) / float(config.RANK_MAX - 1)
    cutoff = cfg.FUZZ_CUTOFF_MIN + cfg.FUZZ_CUTOFF_RANGE * t
    sigma = cfg.FUZZ_SIGMA_MIN + cfg.FUZZ_SIGMA_RANGE * t

    fuzz = rng.gauss(0.0, sigma)
    return float(bound(fuzz, -cutoff, cutoff))


def apply_fuzz(value: float, fuzz: float) -> int:
    return round_half_up(bound(float(value) + float(fuzz), cfg.MIN_RATING, cfg.MAX_RATING))
