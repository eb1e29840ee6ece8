from __future__ import annotations

"""Player filter: project player records into display-ready views.

Given one player or a list, ``filter_players`` decides which players are
included for the requested season/team and builds, for each, a plain dict
holding the requested attributes at the top level plus ``stats`` /
``stats_playoffs`` / ``career_stats`` / ``career_stats_playoffs`` and
``ratings`` when those field groups were requested.

Inclusion is gated on stats only: a player is returned when a regular-season
row matched, or when inclusion is forced (``show_players_without_stats``, no
stat fields requested, or a rookie drafted this season with
``show_current_season_rookies``).

The engine is read-only; nested records are copied into the output.
"""

import copy
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from contracts.config import DISPLAY_UNIT
from league_context import LeagueContext
from players.config import HEALTHY
from players.types import Player, RatingsRow
from ratings.fuzz import apply_fuzz
from teams.directory import TeamDirectory

from .fields import NOISE_EXEMPT_RATINGS, AttributeField, RatingField
from .stats import select_all_seasons, select_single_season, shape_career, shape_row
from .types import FilteredPlayer, FilterOptions, ShapedRatings


logger = logging.getLogger(__name__)

AttributeProjection = Callable[[Player, FilterOptions, LeagueContext, TeamDirectory], Any]


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


def _plain(value: Any) -> Any:
    if hasattr(value, "to_row"):
        return value.to_row()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return copy.deepcopy(value)


def _stored(name: str) -> AttributeProjection:
    def project(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> Any:
        return _plain(getattr(p, name))

    return project


def _age(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> int:
    return int(ctx.season) - int(p.born.year)


def _hgt_ft(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> int:
    return int(p.hgt) // 12


def _hgt_in(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> int:
    return int(p.hgt) - 12 * (int(p.hgt) // 12)


def _contract(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> Dict[str, Any]:
    return {"amount": p.contract.amount / DISPLAY_UNIT, "exp": int(p.contract.exp)}


def _cash_owed(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> float:
    amount = float(p.contract.amount)
    seasons_left = 1 + int(p.contract.exp) - int(ctx.season)
    played_share = 1.0 - float(options.num_games_remaining) / float(ctx.num_games)
    return (seasons_left * amount - played_share * amount) / DISPLAY_UNIT


def _abbrev(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> Optional[str]:
    return teams.abbrev(p.tid)


def _team_region(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> str:
    return teams.region(p.tid)


def _team_name(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> Optional[str]:
    return teams.name(p.tid)


def _salaries(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> List[Dict[str, Any]]:
    return [{"season": int(s.season), "amount": s.amount / DISPLAY_UNIT} for s in p.salaries]


def _salaries_total(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> float:
    return sum(s.amount for s in p.salaries) / DISPLAY_UNIT


def _draft(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> Dict[str, Any]:
    draft = p.draft.to_row()
    draft["age"] = int(p.draft.year) - int(p.born.year)
    if options.apply_rating_noise and p.ratings:
        fuzz = p.ratings[0].fuzz
        draft["ovr"] = apply_fuzz(draft["ovr"], fuzz)
        draft["pot"] = apply_fuzz(draft["pot"], fuzz)
    return draft


def _injury(p: Player, options: FilterOptions, ctx: LeagueContext, teams: TeamDirectory) -> Dict[str, Any]:
    # Current injury means nothing for a past season.
    if options.season is not None and int(options.season) < int(ctx.season):
        return {"type": HEALTHY, "games_remaining": 0}
    return p.injury.to_row()


ATTRIBUTE_PROJECTIONS: Dict[AttributeField, AttributeProjection] = {
    AttributeField.PID: _stored("pid"),
    AttributeField.TID: _stored("tid"),
    AttributeField.NAME: _stored("name"),
    AttributeField.BORN: _stored("born"),
    AttributeField.HGT: _stored("hgt"),
    AttributeField.WEIGHT: _stored("weight"),
    AttributeField.POS: _stored("pos"),
    AttributeField.COLLEGE: _stored("college"),
    AttributeField.FACE: _stored("face"),
    AttributeField.STATS_TIDS: _stored("stats_tids"),
    AttributeField.FREE_AGENT_MOOD: _stored("free_agent_mood"),
    AttributeField.AWARDS: _stored("awards"),
    AttributeField.RETIRED_YEAR: _stored("retired_year"),
    AttributeField.YEARS_FREE_AGENT: _stored("years_free_agent"),
    AttributeField.ROSTER_ORDER: _stored("roster_order"),
    AttributeField.AGE: _age,
    AttributeField.HGT_FT: _hgt_ft,
    AttributeField.HGT_IN: _hgt_in,
    AttributeField.CONTRACT: _contract,
    AttributeField.CASH_OWED: _cash_owed,
    AttributeField.ABBREV: _abbrev,
    AttributeField.TEAM_REGION: _team_region,
    AttributeField.TEAM_NAME: _team_name,
    AttributeField.SALARIES: _salaries,
    AttributeField.SALARIES_TOTAL: _salaries_total,
    AttributeField.DRAFT: _draft,
    AttributeField.INJURY: _injury,
}


def project_attributes(
    player: Player,
    options: FilterOptions,
    *,
    ctx: LeagueContext,
    teams: TeamDirectory,
) -> Dict[str, Any]:
    return {f.value: ATTRIBUTE_PROJECTIONS[f](player, options, ctx, teams) for f in options.attributes}


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------


def _season_team(player: Player, season: int) -> Optional[int]:
    """Team of the last regular-season stats row in ``season``."""
    tid = None
    for row in player.stats:
        if int(row.season) == int(season) and not row.playoffs:
            tid = int(row.tid)
    return tid


def project_ratings_row(
    player: Player,
    row: RatingsRow,
    fields: Sequence[RatingField],
    *,
    noise: bool,
    teams: TeamDirectory,
) -> ShapedRatings:
    out: ShapedRatings = {}
    for field in fields:
        if field is RatingField.AGE:
            out[field.value] = int(row.season) - int(player.born.year)
        elif field is RatingField.ABBREV:
            tid = _season_team(player, row.season)
            out[field.value] = teams.abbrev(tid) if tid is not None and tid >= 0 else None
        elif field is RatingField.SKILLS:
            out[field.value] = list(row.skills)
        else:
            value = getattr(row, field.value)
            if noise and field not in NOISE_EXEMPT_RATINGS:
                value = apply_fuzz(value, row.fuzz)
            out[field.value] = value
    return out


def project_ratings(player: Player, options: FilterOptions, *, teams: TeamDirectory) -> Any:
    """Single season: the first row for that season, or None. Otherwise every row."""
    noise = bool(options.apply_rating_noise)
    if options.single_season:
        for row in player.ratings:
            if int(row.season) == int(options.season):
                return project_ratings_row(player, row, options.ratings, noise=noise, teams=teams)
        return None
    return [project_ratings_row(player, row, options.ratings, noise=noise, teams=teams) for row in player.ratings]


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


def project_stats(player: Player, options: FilterOptions, *, ctx: LeagueContext, teams: TeamDirectory) -> Optional[Dict[str, Any]]:
    """Stats part of the output, or None when the player is not included."""
    fields = options.stats
    out: Dict[str, Any] = {}

    if options.single_season:
        season = int(options.season)
        fallback = int(ctx.season) - 1 if options.use_last_season_if_empty else None
        regular, post = select_single_season(
            player,
            season,
            tid=options.tid,
            playoffs=options.playoffs,
            fallback_season=fallback,
        )
        rookie = (
            options.show_current_season_rookies
            and int(player.draft.year) == int(ctx.season)
            and season == int(ctx.season)
        )
        if not (rookie or regular is not None or options.force_include):
            return None

        row_tid = options.tid if options.tid is not None else player.tid
        out["stats"] = shape_row(player, regular, fields, totals=options.totals, season=season, tid=row_tid, teams=teams)
        if options.playoffs:
            out["stats_playoffs"] = (
                shape_row(player, post, fields, totals=options.totals, season=season, tid=row_tid, teams=teams)
                if post is not None
                else None
            )
        return out

    regular_rows, post_rows = select_all_seasons(player, playoffs=options.playoffs)
    if not (regular_rows or options.force_include):
        return None

    shape = dict(totals=options.totals, season=None, tid=None, teams=teams)
    out["stats"] = [shape_row(player, r, fields, **shape) for r in regular_rows]
    if options.playoffs:
        out["stats_playoffs"] = [shape_row(player, r, fields, **shape) for r in post_rows]
    out["career_stats"] = shape_career(player, regular_rows, fields, totals=options.totals, teams=teams)
    if options.playoffs:
        out["career_stats_playoffs"] = shape_career(player, post_rows, fields, totals=options.totals, teams=teams)
    return out


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def filter_player(
    player: Player,
    options: FilterOptions,
    *,
    ctx: LeagueContext,
    teams: TeamDirectory,
) -> Optional[FilteredPlayer]:
    # Rows appended after construction are not checked by Player itself.
    player.check_stats_rows()

    stats: Dict[str, Any] = {}
    if options.stats:
        shaped = project_stats(player, options, ctx=ctx, teams=teams)
        if shaped is None:
            return None
        stats = shaped

    out = project_attributes(player, options, ctx=ctx, teams=teams)
    out.update(stats)
    if options.ratings:
        ratings = project_ratings(player, options, teams=teams)
        if ratings is not None:
            out["ratings"] = ratings
    return out


def filter_players(
    players: Union[Player, Sequence[Player]],
    options: FilterOptions,
    *,
    ctx: LeagueContext,
    teams: Optional[TeamDirectory] = None,
) -> Any:
    """Filter one player (dict or None) or a list (list, excluded players dropped)."""
    teams = teams if teams is not None else TeamDirectory()

    if isinstance(players, Player):
        return filter_player(players, options, ctx=ctx, teams=teams)

    out = []
    for p in players:
        fp = filter_player(p, options, ctx=ctx, teams=teams)
        if fp is not None:
            out.append(fp)
    logger.debug("PLAYER_FILTER season=%s tid=%s in=%s out=%s", options.season, options.tid, len(players), len(out))
    return out
