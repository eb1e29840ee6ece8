from __future__ import annotations

"""league_context.py

Explicit league state passed into every core function.

The season, phase and league size are never read from module globals; callers
build a ``LeagueContext`` (usually from the store's meta table) and hand it
down. Tests inject arbitrary seasons the same way.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, Dict, Mapping

import config


# ---------------------------------------------------------------------------
# Sentinel team ids (never real teams)
# ---------------------------------------------------------------------------

PLAYER_FREE_AGENT: int = -1
PLAYER_UNDRAFTED: int = -2
PLAYER_RETIRED: int = -3

# Draft record team id before a player is drafted.
DRAFT_TID_NONE: int = -1


class Phase(IntEnum):
    """Season phases, in calendar order."""

    FANTASY_DRAFT = -1
    PRESEASON = 0
    REGULAR_SEASON = 1
    AFTER_TRADE_DEADLINE = 2
    PLAYOFFS = 3
    BEFORE_DRAFT = 4
    DRAFT = 5
    AFTER_DRAFT = 6
    RESIGN_PLAYERS = 7
    FREE_AGENCY = 8


@dataclass(frozen=True, slots=True)
class LeagueContext:
    season: int
    phase: int = Phase.PRESEASON
    starting_season: int = config.DEFAULT_STARTING_SEASON
    num_teams: int = config.DEFAULT_NUM_TEAMS
    num_games: int = config.DEFAULT_NUM_GAMES

    def with_season(self, season: int) -> "LeagueContext":
        return replace(self, season=int(season))

    def with_phase(self, phase: int) -> "LeagueContext":
        return replace(self, phase=int(phase))

    def to_row(self) -> Dict[str, Any]:
        return {
            "season": int(self.season),
            "phase": int(self.phase),
            "starting_season": int(self.starting_season),
            "num_teams": int(self.num_teams),
            "num_games": int(self.num_games),
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LeagueContext":
        season = int(row["season"])
        return cls(
            season=season,
            phase=int(row.get("phase", Phase.PRESEASON)),
            starting_season=int(row.get("starting_season", season)),
            num_teams=int(row.get("num_teams", config.DEFAULT_NUM_TEAMS)),
            num_games=int(row.get("num_games", config.DEFAULT_NUM_GAMES)),
        )
