from __future__ import annotations

"""Player generation and row appends.

``generate`` builds a complete, persistable player record. The draw order is
fixed so a seeded ``RandomSource`` reproduces the same player:

1. base rating gauss
2. 15 per-dimension gausses (``hgt`` .. ``reb``)
3. fuzz gauss
4. height gauss, weight gauss
5. identity name draws
6. contract gauss
7. identity face draws
"""

import logging
from typing import List, Optional

from contracts.terms import gen_contract, set_contract
from helpers import round_half_up
from league_context import LeagueContext
from random_source import RandomSource
from ratings import config as rcfg
from ratings.derive import limit_rating, ovr, position, skills
from ratings.fuzz import gen_fuzz

from . import config as cfg
from .errors import STATS_ROW_DUPLICATE, PlayerModelError
from .identity import DefaultIdentityService, IdentityService
from .types import Born, DraftInfo, InjuryState, Player, RatingsRow, StatsRow


logger = logging.getLogger(__name__)

_DEFAULT_IDENTITY = DefaultIdentityService()


def _profile_offsets(profile: str) -> List[int]:
    key = str(profile or "").strip().lower()
    offsets = cfg.PROFILE_OFFSETS.get(key)
    if offsets is None:
        logger.warning("PLAYER_PROFILE_UNKNOWN profile=%r; using %s", profile, cfg.DEFAULT_PROFILE)
        offsets = cfg.PROFILE_OFFSETS[cfg.DEFAULT_PROFILE]
    return list(offsets)


def gen_ratings(
    profile: str,
    base_rating: float,
    pot: int,
    season: int,
    scouting_rank: float,
    *,
    rng: RandomSource,
) -> RatingsRow:
    """Initial ratings row for a new player.

    ``pot`` is assigned verbatim; ``ovr`` and ``skills`` are derived.
    """
    offsets = _profile_offsets(profile)
    base = rng.gauss(base_rating, cfg.BASE_RATING_SIGMA)

    values = {}
    for key, offset in zip(rcfg.RATING_KEYS, offsets):
        values[key] = limit_rating(rng.gauss(offset + base, cfg.RATING_SIGMA))

    row = RatingsRow(season=int(season), **values)
    row.ovr = ovr(row)
    row.pot = int(pot)
    row.skills = skills(row)
    row.fuzz = gen_fuzz(scouting_rank, rng=rng)
    return row


def add_stats_row(player: Player, *, ctx: LeagueContext, playoffs: bool = False) -> Player:
    """Append an empty stats row for (current season, player.tid, playoffs).

    A row is keyed by (season, tid, playoffs), so callers add one when a player
    changes teams, a new season starts, or the team makes the playoffs. Update
    ``player.tid`` before calling this on a trade.
    """
    row = StatsRow(season=int(ctx.season), tid=int(player.tid), playoffs=bool(playoffs))
    for existing in player.stats:
        if existing.key == row.key:
            raise PlayerModelError(
                STATS_ROW_DUPLICATE,
                f"player already has a stats row for season={row.season} tid={row.tid} playoffs={row.playoffs}",
                {"pid": player.pid, "key": list(row.key)},
            )
    player.stats.append(row)
    if row.tid not in player.stats_tids:
        player.stats_tids.append(row.tid)
    return player


def add_ratings_row(player: Player, scouting_rank: float, *, ctx: LeagueContext, rng: RandomSource) -> Player:
    """Append a copy of the current ratings for the new season.

    The fuzz term is averaged with a fresh draw so scouting noise drifts
    instead of resetting. Draws: one gauss.
    """
    row = player.current_ratings.copy()
    row.season = int(ctx.season)
    row.fuzz = (row.fuzz + gen_fuzz(scouting_rank, rng=rng)) / 2.0
    player.ratings.append(row)
    return player


def generate(
    tid: int,
    age: int,
    profile: str,
    base_rating: float,
    pot: int,
    draft_year: int,
    new_league: bool,
    scouting_rank: float,
    *,
    ctx: LeagueContext,
    rng: RandomSource,
    identity: Optional[IdentityService] = None,
) -> Player:
    """Generate a new player.

    ``tid`` is a real team id for new-league seed players, or a negative
    sentinel (usually ``PLAYER_UNDRAFTED``) for draft prospects.
    """
    identity = identity or _DEFAULT_IDENTITY

    ratings_season = ctx.starting_season if new_league else draft_year
    pr = gen_ratings(profile, base_rating, pot, ratings_season, scouting_rank, rng=rng)

    hgt = round_half_up(
        rng.gauss(1.0, cfg.BODY_JITTER_SIGMA) * (pr.hgt * (cfg.MAX_HGT_IN - cfg.MIN_HGT_IN) / 100.0 + cfg.MIN_HGT_IN)
    )
    weight = round_half_up(
        rng.gauss(1.0, cfg.BODY_JITTER_SIGMA)
        * ((pr.hgt + 0.5 * pr.stre) * (cfg.MAX_WEIGHT_LB - cfg.MIN_WEIGHT_LB) / 150.0 + cfg.MIN_WEIGHT_LB)
    )

    nationality = cfg.DEFAULT_NATIONALITY
    name = identity.name(nationality, rng=rng)

    player = Player(
        tid=int(tid),
        name=name,
        born=Born(year=int(ctx.season) - int(age), loc=nationality),
        hgt=hgt,
        weight=weight,
        pos=position(pr),
        ratings=[pr],
        contract=gen_contract(pr, ctx=ctx, rng=rng),
        draft=DraftInfo(year=int(draft_year), pot=int(pot), ovr=pr.ovr, skills=list(pr.skills)),
        college="",
        free_agent_mood=[0.0] * int(ctx.num_teams),
        injury=InjuryState(type=cfg.HEALTHY, games_remaining=0),
        roster_order=cfg.DEFAULT_ROSTER_ORDER,
    )
    set_contract(player, player.contract, False, ctx=ctx)
    player.face = identity.face(rng=rng)

    # Only seed players for a new league have a real team at creation.
    if player.tid >= 0:
        add_stats_row(player, ctx=ctx, playoffs=False)

    logger.debug(
        "PLAYER_GENERATED tid=%s age=%s profile=%s ovr=%s pot=%s pos=%s",
        player.tid,
        age,
        profile,
        pr.ovr,
        pr.pot,
        player.pos,
    )
    return player
