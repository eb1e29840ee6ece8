from __future__ import annotations

"""contracts/free_agency.py

Moving players into the free-agent pool.

``add_to_free_agents`` is the only path that puts a player on
``PLAYER_FREE_AGENT``: it is also where the demanded contract and per-team
mood vector are (re)computed.
"""

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional, Sequence

import config
from helpers import bound
from league_context import PLAYER_FREE_AGENT, LeagueContext, Phase
from players.errors import MOOD_LENGTH_MISMATCH, PlayerModelError
from players.types import Contract, Player
from random_source import RandomSource
from teams.finances import get_ranks_last_three
from teams.types import Team

from . import config as cfg
from .terms import gen_contract, set_contract

if TYPE_CHECKING:
    from league_repo import LeagueRepo


logger = logging.getLogger(__name__)


def gen_base_moods(teams: Sequence[Team], *, ctx: LeagueContext, rng: RandomSource) -> List[float]:
    """Base mood (0..1) of any free agent towards each team, in tid order.

    Built from the team's latest hype and population plus its facilities
    spending rank. Draws: one gauss per team.
    """
    ordered = sorted(teams, key=lambda t: int(t.tid))
    facilities_ranks = get_ranks_last_three(ordered, cfg.FACILITIES_EXPENSE_ITEM)
    rank_span = float(config.RANK_MAX - 1)

    moods: List[float] = []
    for team in ordered:
        latest = team.latest_season
        hype = float(latest.hype) if latest is not None else 0.0
        pop = float(latest.pop) if latest is not None else 0.0
        facilities_rank = float(facilities_ranks.get(int(team.tid), config.RANK_MAX))

        mood = cfg.BASE_MOOD_HYPE_W * (1.0 - hype)
        mood += cfg.BASE_MOOD_FACILITIES_W * (1.0 - (facilities_rank - 1.0) / rank_span)
        mood += cfg.BASE_MOOD_POP_W * (1.0 - pop / cfg.BASE_MOOD_POP_SCALE)
        mood += rng.gauss(cfg.BASE_MOOD_NOISE_MU, cfg.BASE_MOOD_NOISE_SIGMA)
        moods.append(float(bound(mood, 0.0, 1.0)))

    if len(moods) != int(ctx.num_teams):
        logger.warning("BASE_MOODS_TEAM_COUNT teams=%s num_teams=%s", len(moods), ctx.num_teams)
    return moods


def add_to_free_agents(
    player: Player,
    base_moods: Sequence[float],
    *,
    ctx: LeagueContext,
    rng: RandomSource,
    phase: Optional[int] = None,
    repo: Optional["LeagueRepo"] = None,
) -> Player:
    """Make ``player`` a free agent with a fresh demand and mood vector.

    ``phase`` defaults to ``ctx.phase``. After the trade deadline a new deal
    can no longer cover the current season, so the demanded expiration moves
    out one year.

    Draws: the ``gen_contract`` gauss.
    """
    if len(base_moods) != int(ctx.num_teams):
        raise PlayerModelError(
            MOOD_LENGTH_MISMATCH,
            f"base mood vector has {len(base_moods)} entries for a {ctx.num_teams}-team league",
            {"pid": player.pid, "len": len(base_moods), "num_teams": int(ctx.num_teams)},
        )
    phase = int(ctx.phase if phase is None else phase)

    pr = player.current_ratings
    demand = gen_contract(pr, ctx=ctx, rng=rng)
    if phase > Phase.AFTER_TRADE_DEADLINE:
        demand = Contract(amount=demand.amount, exp=demand.exp + 1)

    value = int(pr.ovr) + int(pr.pot)
    if value < cfg.MOOD_MIN_OVR_POT:
        mood = [0.0 for _ in base_moods]
    else:
        mood = [float(m) * value / cfg.MOOD_SCALE for m in base_moods]

    # The caller's record only changes once the write (if any) has succeeded.
    if repo is not None:
        staged = replace(player, tid=PLAYER_FREE_AGENT, free_agent_mood=list(mood))
        set_contract(staged, demand, False, ctx=ctx)
        with repo.transaction():
            repo.put_player(staged)
        player.pid = staged.pid

    set_contract(player, demand, False, ctx=ctx)
    player.free_agent_mood = mood
    player.tid = PLAYER_FREE_AGENT

    logger.debug(
        "PLAYER_TO_FREE_AGENCY pid=%s amount=%s exp=%s phase=%s",
        player.pid,
        player.contract.amount,
        player.contract.exp,
        phase,
    )
    return player


def release(player: Player, *, repo: "LeagueRepo", ctx: LeagueContext, rng: RandomSource) -> Player:
    """Cut ``player`` from their team.

    The old contract is kept in the released-players ledger (the team still
    owes it), then the player goes through ``add_to_free_agents`` in the
    current phase. All writes share one transaction.
    """
    old_tid = int(player.tid)
    owed = player.contract
    with repo.transaction():
        repo.add_released_player(player.pid, old_tid, owed)
        base_moods = gen_base_moods(repo.list_teams(), ctx=ctx, rng=rng)
        add_to_free_agents(player, base_moods, ctx=ctx, rng=rng, phase=ctx.phase, repo=repo)

    logger.info(
        "PLAYER_RELEASED pid=%s from_tid=%s owed_amount=%s owed_exp=%s",
        player.pid,
        old_tid,
        owed.amount,
        owed.exp,
    )
    return player
