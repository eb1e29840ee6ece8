from __future__ import annotations

"""Expense rank lookups.

Coaching, health, facilities and scouting effects all key off a team's rank
(1 = highest spending) in one budget item, averaged over the last three
seasons so a single budget swing doesn't flip a rank.
"""

from typing import Dict, Iterable, Sequence

from .types import Team

SEASONS_CONSIDERED: int = 3

# Middle of a 30-team league; used when a team has no expense history.
DEFAULT_RANK: float = 15.5


def expense_level_last_three(team: Team, item: str) -> float:
    recent = list(team.seasons)[-SEASONS_CONSIDERED:]
    if not recent:
        return 0.0
    total = sum(float(s.expenses.get(item, 0.0)) for s in recent)
    return total / len(recent)


def get_ranks_last_three(teams: Iterable[Team], item: str) -> Dict[int, int]:
    """Rank every team by mean expense on ``item``; ties keep tid order."""
    levels = [(int(t.tid), expense_level_last_three(t, item)) for t in teams]
    levels.sort(key=lambda x: (-x[1], x[0]))
    return {tid: i + 1 for i, (tid, _level) in enumerate(levels)}


def get_rank_last_three(teams: Sequence[Team], tid: int, item: str) -> float:
    ranks = get_ranks_last_three(teams, item)
    if int(tid) not in ranks:
        return DEFAULT_RANK
    return float(ranks[int(tid)])
