from __future__ import annotations

"""Stats selection and shaping for the player filter.

Selection works on raw ``StatsRow`` season totals; shaping turns one set of
totals into the requested fields (per-game unless totals were asked for).
Nothing here mutates the player record.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from helpers import safe_div
from players.types import COUNTING_STAT_FIELDS, Player, StatsRow
from teams.directory import TeamDirectory

from .fields import CONTEXT_STATS, PERCENTAGE_STATS, UNDIVIDED_STATS, StatField
from .types import ShapedStats


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def find_season_row(
    player: Player,
    season: int,
    *,
    playoffs: bool,
    tid: Optional[int] = None,
) -> Optional[StatsRow]:
    """First row for (season, playoffs[, tid]) in record order.

    With no ``tid`` and several teams in one season this is whichever team
    the player was on first; rows are not merged.
    """
    for row in player.stats:
        if int(row.season) != int(season) or bool(row.playoffs) != bool(playoffs):
            continue
        if tid is not None and int(row.tid) != int(tid):
            continue
        return row
    return None


def select_single_season(
    player: Player,
    season: int,
    *,
    tid: Optional[int],
    playoffs: bool,
    fallback_season: Optional[int] = None,
) -> Tuple[Optional[StatsRow], Optional[StatsRow]]:
    """(regular, playoff) rows for one season.

    ``fallback_season`` is tried, without the team filter, when the requested
    season has no regular-season row.
    """
    regular = find_season_row(player, season, playoffs=False, tid=tid)
    post = find_season_row(player, season, playoffs=True, tid=tid) if playoffs else None

    if regular is None and fallback_season is not None:
        regular = find_season_row(player, fallback_season, playoffs=False)
        if playoffs:
            post = find_season_row(player, fallback_season, playoffs=True) or post

    return regular, post


def select_all_seasons(player: Player, *, playoffs: bool) -> Tuple[List[StatsRow], List[StatsRow]]:
    regular = [s for s in player.stats if not s.playoffs]
    post = [s for s in player.stats if s.playoffs] if playoffs else []
    return regular, post


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def career_totals(rows: Sequence[StatsRow]) -> Dict[str, float]:
    """Sum every counting field across ``rows``; an empty list gives zeros."""
    totals: Dict[str, float] = {k: 0 for k in COUNTING_STAT_FIELDS}
    for row in rows:
        for k in COUNTING_STAT_FIELDS:
            totals[k] += getattr(row, k) or 0
    return totals


def career_per(rows: Sequence[StatsRow]) -> float:
    """Minutes-weighted mean PER; 0.0 with no career minutes or games."""
    minutes = sum(float(r.min or 0.0) for r in rows)
    games = sum(int(r.gp or 0) for r in rows)
    if minutes <= 0 or games <= 0:
        return 0.0
    weighted = sum(float(r.per or 0.0) * float(r.min or 0.0) for r in rows)
    return weighted / minutes


# ---------------------------------------------------------------------------
# Shaping
# ---------------------------------------------------------------------------


def _context_value(
    field: StatField,
    player: Player,
    season: Optional[int],
    tid: Optional[int],
    teams: TeamDirectory,
) -> Any:
    if field is StatField.SEASON:
        return season
    if field is StatField.AGE:
        return None if season is None else int(season) - int(player.born.year)
    return teams.abbrev(tid)


def shape_stats(
    player: Player,
    source: Optional[Mapping[str, Any]],
    fields: Sequence[StatField],
    *,
    totals: bool,
    season: Optional[int],
    tid: Optional[int],
    teams: TeamDirectory,
) -> ShapedStats:
    """Project one set of raw totals onto ``fields``.

    A missing source or a zero-game source yields an explicit zero record;
    ``season``/``age``/``abbrev`` still describe the row.
    """
    out: ShapedStats = {}
    gp = int(source.get("gp") or 0) if source else 0

    for field in fields:
        if field in CONTEXT_STATS:
            out[field.value] = _context_value(field, player, season, tid, teams)
            continue
        if gp <= 0:
            out[field.value] = 0
            continue

        if field in PERCENTAGE_STATS:
            made_key, att_key = PERCENTAGE_STATS[field]
            out[field.value] = 100.0 * safe_div(source.get(made_key) or 0, source.get(att_key) or 0, 0.0)
        elif field in UNDIVIDED_STATS:
            out[field.value] = source.get(field.value) or 0
        elif totals:
            out[field.value] = source.get(field.value) or 0
        else:
            out[field.value] = (source.get(field.value) or 0) / gp
    return out


def shape_row(
    player: Player,
    row: Optional[StatsRow],
    fields: Sequence[StatField],
    *,
    totals: bool,
    season: Optional[int],
    tid: Optional[int],
    teams: TeamDirectory,
) -> Dict[str, Any]:
    """``shape_stats`` for a stored row; the row's own season/tid win when present."""
    if row is not None:
        season, tid = int(row.season), int(row.tid)
    return shape_stats(
        player,
        row.to_row() if row is not None else None,
        fields,
        totals=totals,
        season=season,
        tid=tid,
        teams=teams,
    )


def shape_career(
    player: Player,
    rows: Sequence[StatsRow],
    fields: Sequence[StatField],
    *,
    totals: bool,
    teams: TeamDirectory,
) -> Dict[str, Any]:
    out = shape_stats(
        player,
        career_totals(rows),
        fields,
        totals=totals,
        season=None,
        tid=None,
        teams=teams,
    )
    if StatField.PER in fields:
        out[StatField.PER.value] = career_per(rows)
    return out
