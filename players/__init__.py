"""Player records, generation, and row bookkeeping.

Public API (records)
--------------------
- Player, RatingsRow, StatsRow, Contract, SalaryEntry, DraftInfo, InjuryState, Born
- PlayerModelError

Generation lives in ``players.generation`` (generate, add_ratings_row,
add_stats_row). It is not re-exported here because it depends on the
contracts and ratings packages, which in turn import these records.
"""

from .errors import PlayerModelError
from .types import Born, Contract, DraftInfo, InjuryState, Player, RatingsRow, SalaryEntry, StatsRow

__all__ = [
    "PlayerModelError",
    "Born",
    "Contract",
    "DraftInfo",
    "InjuryState",
    "Player",
    "RatingsRow",
    "SalaryEntry",
    "StatsRow",
]
