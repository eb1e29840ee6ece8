from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, HTTPException, Request

import config
from analytics.player_filter import FilterOptions, filter_players
from app.schemas.players import DevelopPlayerRequest, FilterPlayersRequest, GeneratePlayerRequest, InjuryRequest
from contracts import release
from development import develop
from development.config import COACHING_EXPENSE_ITEM
from injury import injury
from injury.config import HEALTH_EXPENSE_ITEM
from league_context import LeagueContext
from league_repo import LeagueRepo
from players.errors import PLAYER_NOT_FOUND, PlayerModelError
from players.generation import add_ratings_row, generate
from players.types import Player
from random_source import RandomSource
from ratings.config import RATING_KEYS, SCOUTING_EXPENSE_ITEM
from teams import TeamDirectory, get_rank_last_three
from teams.finances import DEFAULT_RANK

router = APIRouter()
logger = logging.getLogger(__name__)


# Default view returned by the write endpoints.
PLAYER_VIEW = FilterOptions(
    attributes=("pid", "name", "tid", "abbrev", "age", "pos", "hgt_ft", "hgt_in", "weight", "contract", "injury", "draft"),
    ratings=("season", "ovr", "pot", "skills") + RATING_KEYS,
)


def _db_path() -> str:
    db_path = os.environ.get(config.ENV_DB_PATH)
    if not db_path:
        raise HTTPException(status_code=500, detail=f"{config.ENV_DB_PATH} is not configured.")
    return db_path


def _rng(request: Request) -> RandomSource:
    rng = getattr(request.app.state, "rng", None)
    if rng is None:
        rng = RandomSource()
        request.app.state.rng = rng
    return rng


def _league(repo: LeagueRepo) -> Tuple[LeagueContext, TeamDirectory]:
    ctx = repo.get_league_context() or LeagueContext(season=config.DEFAULT_STARTING_SEASON)
    return ctx, TeamDirectory(repo.list_teams())


def _team_rank(teams: TeamDirectory, tid: int, item: str) -> float:
    if tid < 0:
        return DEFAULT_RANK
    return get_rank_last_three(teams.teams(), tid, item)


def _http_error(e: PlayerModelError) -> HTTPException:
    status = 404 if e.code == PLAYER_NOT_FOUND else 400
    return HTTPException(status_code=status, detail={"code": e.code, "message": e.message, "details": e.details})


def _view(player: Player, ctx: LeagueContext, teams: TeamDirectory) -> Dict[str, Any]:
    return filter_players(player, PLAYER_VIEW, ctx=ctx, teams=teams)


@router.post("/api/players/generate")
async def api_generate_player(req: GeneratePlayerRequest, request: Request):
    """Generate a player and persist it."""
    try:
        with LeagueRepo(_db_path()) as repo:
            repo.init_db()
            ctx, teams = _league(repo)
            player = generate(
                req.tid,
                req.age,
                req.profile,
                req.base_rating,
                req.pot,
                req.draft_year if req.draft_year is not None else ctx.season,
                req.new_league,
                req.scouting_rank if req.scouting_rank is not None else DEFAULT_RANK,
                ctx=ctx,
                rng=_rng(request),
            )
            repo.put_player(player)
            return _view(player, ctx, teams)
    except PlayerModelError as e:
        raise _http_error(e)


@router.get("/api/players/{pid}")
async def api_get_player(pid: int, season: Optional[int] = None):
    """Current view of one player; ``season`` selects a past season's ratings."""
    try:
        with LeagueRepo(_db_path()) as repo:
            repo.init_db()
            ctx, teams = _league(repo)
            player = repo.get_player(pid)
            if season is None:
                return _view(player, ctx, teams)
            options = FilterOptions(
                season=season,
                attributes=PLAYER_VIEW.attributes,
                ratings=PLAYER_VIEW.ratings,
            )
            return filter_players(player, options, ctx=ctx, teams=teams)
    except PlayerModelError as e:
        raise _http_error(e)


@router.post("/api/players/filter")
async def api_filter_players(req: FilterPlayersRequest):
    """Run the player filter over stored players."""
    try:
        options = FilterOptions(
            season=req.season,
            tid=req.tid,
            attributes=tuple(req.attributes),
            ratings=tuple(req.ratings),
            stats=tuple(req.stats),
            totals=req.totals,
            playoffs=req.playoffs,
            show_players_without_stats=req.show_players_without_stats,
            show_current_season_rookies=req.show_current_season_rookies,
            apply_rating_noise=req.apply_rating_noise,
            use_last_season_if_empty=req.use_last_season_if_empty,
            num_games_remaining=req.num_games_remaining,
        )
        with LeagueRepo(_db_path()) as repo:
            repo.init_db()
            ctx, teams = _league(repo)
            players = repo.list_players(tid=req.roster_tid)
        rows = filter_players(players, options, ctx=ctx, teams=teams)
        return {"count": len(rows), "players": rows}
    except PlayerModelError as e:
        raise _http_error(e)


@router.post("/api/players/{pid}/develop")
async def api_develop_player(pid: int, req: DevelopPlayerRequest, request: Request):
    """Develop a player (optionally starting a new ratings row) and persist."""
    try:
        with LeagueRepo(_db_path()) as repo:
            repo.init_db()
            ctx, teams = _league(repo)
            player = repo.get_player(pid)
            rng = _rng(request)
            if req.new_season_row:
                add_ratings_row(player, _team_rank(teams, player.tid, SCOUTING_EXPENSE_ITEM), ctx=ctx, rng=rng)
            coaching_rank = req.coaching_rank
            if coaching_rank is None:
                coaching_rank = _team_rank(teams, player.tid, COACHING_EXPENSE_ITEM)
            develop(player, req.years, False, coaching_rank, ctx=ctx, rng=rng)
            repo.put_player(player)
            return _view(player, ctx, teams)
    except PlayerModelError as e:
        raise _http_error(e)


@router.post("/api/players/{pid}/release")
async def api_release_player(pid: int, request: Request):
    """Release a player to free agency; the old contract stays on the team's books."""
    try:
        with LeagueRepo(_db_path()) as repo:
            repo.init_db()
            ctx, teams = _league(repo)
            player = repo.get_player(pid)
            old_tid = player.tid
            release(player, repo=repo, ctx=ctx, rng=_rng(request))
            out = _view(player, ctx, teams)
            out["released_from_tid"] = old_tid
            out["free_agent_mood"] = list(player.free_agent_mood)
            return out
    except PlayerModelError as e:
        raise _http_error(e)


@router.post("/api/players/{pid}/injury")
async def api_injure_player(pid: int, req: InjuryRequest, request: Request):
    """Draw an injury for a player and persist it."""
    try:
        with LeagueRepo(_db_path()) as repo:
            repo.init_db()
            ctx, teams = _league(repo)
            player = repo.get_player(pid)
            health_rank = req.health_rank
            if health_rank is None:
                health_rank = _team_rank(teams, player.tid, HEALTH_EXPENSE_ITEM)
            player.injury = injury(health_rank, rng=_rng(request))
            repo.put_player(player)
            return {"pid": player.pid, "injury": player.injury.to_row()}
    except PlayerModelError as e:
        raise _http_error(e)
