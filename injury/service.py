from __future__ import annotations

"""Injury draws.

Random draw order: type ``uniform``, then duration ``uniform``.
"""

import logging
from bisect import bisect_left

import config as league_config
from helpers import round_half_up
from players.types import InjuryState
from random_source import RandomSource

from . import catalog
from . import config


logger = logging.getLogger(__name__)


def health_factor(health_rank: float) -> float:
    t = (float(health_rank) - 1.0) / float(league_config.RANK_MAX - 1)
    return config.HEALTH_FACTOR_BEST + config.HEALTH_FACTOR_SPAN * t


def pick_injury_type(roll: float) -> catalog.InjuryType:
    """First catalog entry whose cumulative weight is >= ``roll``."""
    i = bisect_left(catalog.CUMULATIVE_WEIGHTS, roll)
    if i >= len(catalog.INJURY_TYPES):
        i = len(catalog.INJURY_TYPES) - 1
    return catalog.INJURY_TYPES[i]


def injury(health_rank: float, *, rng: RandomSource) -> InjuryState:
    """Draw an injury and its length in games for a team's health rank."""
    kind = pick_injury_type(rng.uniform(0.0, catalog.TOTAL_WEIGHT))
    games = round_half_up(
        health_factor(health_rank) * rng.uniform(config.DURATION_MULT_MIN, config.DURATION_MULT_MAX) * kind.games
    )
    logger.debug("INJURY_DRAWN type=%s games=%s health_rank=%s", kind.label, games, health_rank)
    return InjuryState(type=kind.label, games_remaining=max(0, int(games)))
