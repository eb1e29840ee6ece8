from __future__ import annotations

"""Team metadata records consumed by the player core.

Only the fields the player model reads are modelled: identity labels, and per
season hype, population and expense levels.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True, slots=True)
class TeamSeason:
    season: int
    hype: float = 0.0
    pop: float = 0.0  # metro population, millions
    expenses: Mapping[str, float] = field(default_factory=dict)  # budget item -> amount ($1000s)

    def to_row(self) -> Dict[str, Any]:
        return {
            "season": int(self.season),
            "hype": float(self.hype),
            "pop": float(self.pop),
            "expenses": {str(k): float(v) for k, v in self.expenses.items()},
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TeamSeason":
        return cls(
            season=int(row["season"]),
            hype=float(row.get("hype") or 0.0),
            pop=float(row.get("pop") or 0.0),
            expenses={str(k): float(v) for k, v in (row.get("expenses") or {}).items()},
        )


@dataclass(frozen=True, slots=True)
class Team:
    tid: int
    abbrev: str
    region: str
    name: str
    cid: int = 0
    seasons: List[TeamSeason] = field(default_factory=list)

    @property
    def latest_season(self) -> Optional[TeamSeason]:
        return self.seasons[-1] if self.seasons else None

    def to_row(self) -> Dict[str, Any]:
        return {
            "tid": int(self.tid),
            "abbrev": self.abbrev,
            "region": self.region,
            "name": self.name,
            "cid": int(self.cid),
            "seasons": [s.to_row() for s in self.seasons],
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Team":
        return cls(
            tid=int(row["tid"]),
            abbrev=str(row["abbrev"]),
            region=str(row.get("region") or ""),
            name=str(row.get("name") or ""),
            cid=int(row.get("cid") or 0),
            seasons=[TeamSeason.from_row(s) for s in row.get("seasons") or []],
        )
