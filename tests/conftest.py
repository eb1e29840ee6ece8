from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest


# Ensure repo root is importable (top-level modules like league_repo.py).
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from league_context import LeagueContext, Phase  # noqa: E402
from players.types import Born, Contract, DraftInfo, Player, RatingsRow, StatsRow  # noqa: E402
from random_source import RandomSource  # noqa: E402
from ratings.config import RATING_KEYS  # noqa: E402
from ratings.derive import ovr, skills  # noqa: E402
from teams.types import Team, TeamSeason  # noqa: E402


class StubRandom(RandomSource):
    """Deterministic draws: gauss -> mu, uniform -> midpoint, randint -> lo or hi."""

    def __init__(self, *, random_value: float = 0.0, randint_high: bool = False) -> None:
        super().__init__(0)
        self.random_value = random_value
        self.randint_high = randint_high

    def random(self) -> float:
        return self.random_value

    def uniform(self, lo: float, hi: float) -> float:
        return (float(lo) + float(hi)) / 2.0

    def gauss(self, mu: float = 0.0, sigma: float = 1.0) -> float:
        return float(mu)

    def randint(self, lo: int, hi: int) -> int:
        return int(hi) if self.randint_high else int(lo)


@pytest.fixture
def ctx() -> LeagueContext:
    return LeagueContext(season=2013, phase=Phase.REGULAR_SEASON, starting_season=2013, num_teams=30)


@pytest.fixture
def rng() -> RandomSource:
    return RandomSource(1234)


@pytest.fixture
def stub_rng() -> StubRandom:
    return StubRandom()


@pytest.fixture
def make_stub_rng() -> Callable[..., StubRandom]:
    return StubRandom


def build_ratings(season: int = 2013, base: int = 50, pot: Optional[int] = None, fuzz: float = 0.0, **dims: int) -> RatingsRow:
    values = {k: int(dims.get(k, base)) for k in RATING_KEYS}
    row = RatingsRow(season=season, **values, fuzz=fuzz)
    row.ovr = ovr(row)
    row.pot = row.ovr if pot is None else int(pot)
    row.skills = skills(row)
    return row


def build_player(
    *,
    tid: int = 0,
    born_year: int = 1990,
    ratings: Optional[Sequence[RatingsRow]] = None,
    stats: Sequence[StatsRow] = (),
    contract: Optional[Contract] = None,
    draft_year: int = 2010,
    hgt: int = 79,
) -> Player:
    rows = list(ratings) if ratings is not None else [build_ratings()]
    return Player(
        tid=tid,
        name="Test Player",
        born=Born(year=born_year, loc="USA"),
        hgt=hgt,
        weight=210,
        pos="GF",
        ratings=rows,
        contract=contract or Contract(amount=1000, exp=2014),
        draft=DraftInfo(year=draft_year, pot=rows[0].pot, ovr=rows[0].ovr, skills=list(rows[0].skills)),
        stats=list(stats),
        stats_tids=sorted({s.tid for s in stats}),
        free_agent_mood=[0.0] * 30,
    )


def build_teams(n: int = 30, *, seasons: Sequence[int] = (2011, 2012, 2013)) -> List[Team]:
    """Teams whose spending falls with tid, so tid 0 ranks first in every item."""
    teams = []
    for tid in range(n):
        level = float(1000 * (n - tid))
        expenses: Dict[str, float] = {"coaching": level, "facilities": level, "health": level, "scouting": level}
        teams.append(
            Team(
                tid=tid,
                abbrev=f"T{tid:02d}",
                region=f"Region {tid}",
                name=f"Name {tid}",
                seasons=[TeamSeason(season=s, hype=0.5, pop=2.0, expenses=expenses) for s in seasons],
            )
        )
    return teams


@pytest.fixture
def make_ratings() -> Callable[..., RatingsRow]:
    return build_ratings


@pytest.fixture
def make_player() -> Callable[..., Player]:
    return build_player


@pytest.fixture
def make_teams() -> Callable[..., List[Team]]:
    return build_teams


@pytest.fixture
def make_stats() -> Callable[..., StatsRow]:
    def _make(season: int = 2013, tid: int = 0, playoffs: bool = False, **totals: Any) -> StatsRow:
        return StatsRow(season=season, tid=tid, playoffs=playoffs, **totals)

    return _make
