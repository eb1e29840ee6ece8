from __future__ import annotations

"""Development engine.

Both entry points mutate the player's *current* ratings row in place; callers
append a new row first (``players.generation.add_ratings_row``) when a new
season should keep history.

Random draw order for ``develop``, per simulated year:

1. breakout roll (``random``)
2. base mean (``randint``), base change (``gauss``)
3. one ``gauss`` per skill dimension, ``stre`` .. ``reb``
4. potential drift (``gauss``)
"""

import logging

import config
from contracts.terms import gen_contract, set_contract
from helpers import bound, round_half_up
from league_context import LeagueContext
from players.types import Player, RatingsRow
from random_source import RandomSource
from ratings.config import SKILL_RATING_KEYS
from ratings.derive import limit_rating, ovr, skills

from . import config as cfg


logger = logging.getLogger(__name__)


def player_age(player: Player, *, ctx: LeagueContext) -> int:
    return int(ctx.season) - int(player.born.year)


def coaching_multiplier(coaching_rank: float) -> float:
    """1.25 for the best-ranked coaching staff down to 0.75 for the worst."""
    t = (float(coaching_rank) - 1.0) / float(config.RANK_MAX - 1)
    return cfg.COACHING_BEST - cfg.COACHING_SPAN * t


def _age_adjusted(base_change: float, age: int) -> float:
    if age > cfg.VETERAN_AGE:
        base_change /= cfg.VETERAN_DIVISOR
    for threshold in cfg.DECLINE_AGES:
        if age > threshold:
            base_change -= cfg.DECLINE_STEP
    return base_change


def _lock_pot(row: RatingsRow, age: int) -> None:
    if row.ovr > row.pot or age > cfg.POT_LOCK_AGE:
        row.pot = row.ovr


def base_change(row: RatingsRow, age: int, coaching_rank: float, *, rng: RandomSource) -> float:
    """Shared rating change for one year, before per-dimension noise."""
    sigma = (row.pot - row.ovr) / cfg.VARIANCE_DIVISOR
    lo, hi = cfg.BASE_MEAN_RANGE
    change = rng.gauss(rng.randint(lo, hi), sigma)

    change = bound(change, cfg.BASE_CHANGE_MIN, cfg.BASE_CHANGE_MAX)
    if change + row.pot > cfg.POT_CEILING:
        change = cfg.POT_CEILING - row.pot

    # Gap amplification is for growth only, never regression.
    if change > 0:
        change *= 1.0 + (row.pot - row.ovr) / cfg.GROWTH_GAP_DIVISOR

    change = _age_adjusted(change, age)
    return change * coaching_multiplier(coaching_rank)


def develop(
    player: Player,
    years: int = 1,
    generate: bool = False,
    coaching_rank: float = cfg.DEFAULT_COACHING_RANK,
    *,
    ctx: LeagueContext,
    rng: RandomSource,
) -> Player:
    """Age ``player`` by ``years`` and evolve the current ratings row.

    ``generate`` is for players created for a new league: the birth year is
    moved back so the player is ``years`` older than when generated.
    """
    row = player.current_ratings
    age = player_age(player, ctx=ctx)
    start_ovr, start_pot = row.ovr, row.pot

    for _ in range(int(years)):
        age += 1

        if rng.random() > cfg.BREAKOUT_ROLL and age < cfg.BREAKOUT_MAX_AGE:
            row.pot += cfg.BREAKOUT_POT

        change = base_change(row, age, coaching_rank, rng=rng)

        for key in SKILL_RATING_KEYS:
            noise = rng.gauss(cfg.DIM_NOISE_MU, cfg.DIM_NOISE_SIGMA)
            setattr(row, key, limit_rating(getattr(row, key) + noise * change))

        row.ovr = ovr(row)
        row.pot += cfg.POT_DRIFT_MU + round_half_up(rng.gauss(0.0, cfg.POT_DRIFT_SIGMA))
        _lock_pot(row, age)

        row.skills = skills(row)

    # Also applied outside the loop so years=0 still leaves pot >= ovr.
    _lock_pot(row, age)

    if generate:
        player.born.year = int(player.born.year) - int(years)

    logger.debug(
        "PLAYER_DEVELOPED pid=%s years=%s age=%s ovr=%s->%s pot=%s->%s",
        player.pid,
        years,
        age,
        start_ovr,
        row.ovr,
        start_pot,
        row.pot,
    )
    return player


def bonus(
    player: Player,
    amount: int,
    randomize_exp: bool = False,
    *,
    ctx: LeagueContext,
    rng: RandomSource,
) -> Player:
    """Shift every skill rating and pot by ``amount``, then re-sign.

    Only used when seeding a new league; regular seasons go through
    ``develop``. Draws: the contract draws of ``gen_contract``.
    """
    row = player.current_ratings
    age = player_age(player, ctx=ctx)

    for key in SKILL_RATING_KEYS + ("pot",):
        setattr(row, key, limit_rating(getattr(row, key) + amount))

    row.ovr = ovr(row)
    _lock_pot(row, age)
    row.skills = skills(row)

    set_contract(player, gen_contract(row, randomize_exp, ctx=ctx, rng=rng), True, ctx=ctx)
    return player
