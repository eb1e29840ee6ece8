"""Team metadata, label lookups and expense ranks used by the player core."""

from .directory import TeamDirectory
from .finances import get_rank_last_three, get_ranks_last_three
from .types import Team, TeamSeason

__all__ = [
    "Team",
    "TeamSeason",
    "TeamDirectory",
    "get_rank_last_three",
    "get_ranks_last_three",
]
