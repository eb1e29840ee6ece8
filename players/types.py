from __future__ import annotations

"""Player record types.

Records are mutable: the generator builds them and the development and
contract paths mutate them in place. ``ratings`` and ``stats`` are only ever
appended to.

Each type round-trips through ``to_row()`` / ``from_row()`` (JSON-safe dicts)
for the SQLite store. ``from_row`` is strict about rating dimensions and
tolerant about bookkeeping fields.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

from league_context import DRAFT_TID_NONE
from ratings.config import RATING_KEYS

from .errors import RATING_MISSING, STATS_ROW_DUPLICATE, PlayerModelError


JsonDict = Dict[str, Any]


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RatingsRow:
    season: int
    hgt: int
    stre: int
    spd: int
    jmp: int
    endu: int
    ins: int
    dnk: int
    ft: int
    fg: int
    tp: int
    blk: int
    stl: int
    drb: int
    pss: int
    reb: int
    ovr: int = 0
    pot: int = 0
    skills: List[str] = field(default_factory=list)
    fuzz: float = 0.0

    def dimensions(self) -> Dict[str, int]:
        return {k: getattr(self, k) for k in RATING_KEYS}

    def copy(self) -> "RatingsRow":
        return RatingsRow.from_row(self.to_row())

    def to_row(self) -> JsonDict:
        out: JsonDict = {"season": int(self.season)}
        for k in RATING_KEYS:
            out[k] = int(getattr(self, k))
        out["ovr"] = int(self.ovr)
        out["pot"] = int(self.pot)
        out["skills"] = list(self.skills)
        out["fuzz"] = float(self.fuzz)
        return out

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RatingsRow":
        missing = [k for k in RATING_KEYS if row.get(k) is None]
        if missing:
            raise PlayerModelError(RATING_MISSING, f"ratings row missing dimensions {missing}", {"missing": missing})
        return cls(
            season=int(row["season"]),
            **{k: int(row[k]) for k in RATING_KEYS},
            ovr=int(row.get("ovr", 0)),
            pot=int(row.get("pot", 0)),
            skills=list(row.get("skills") or []),
            fuzz=float(row.get("fuzz", 0.0)),
        )


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class StatsRow:
    """Season-to-date totals for one (season, tid, playoffs) combination."""

    season: int
    tid: int
    playoffs: bool = False
    gp: int = 0
    gs: int = 0
    min: float = 0.0
    fg: int = 0
    fga: int = 0
    fg_at_rim: int = 0
    fga_at_rim: int = 0
    fg_low_post: int = 0
    fga_low_post: int = 0
    fg_mid_range: int = 0
    fga_mid_range: int = 0
    tp: int = 0
    tpa: int = 0
    ft: int = 0
    fta: int = 0
    orb: int = 0
    drb: int = 0
    trb: int = 0
    ast: int = 0
    tov: int = 0
    stl: int = 0
    blk: int = 0
    pf: int = 0
    pts: int = 0
    per: float = 0.0

    @property
    def key(self) -> Tuple[int, int, bool]:
        return (int(self.season), int(self.tid), bool(self.playoffs))

    def to_row(self) -> JsonDict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "StatsRow":
        kwargs: JsonDict = {}
        for f in fields(cls):
            if f.name in row:
                kwargs[f.name] = row[f.name]
        kwargs["playoffs"] = bool(kwargs.get("playoffs", False))
        return cls(**kwargs)


# Contextual fields: identify a row, never summed into career totals.
STATS_CONTEXT_FIELDS: Tuple[str, ...] = ("age", "playoffs", "season", "tid")

COUNTING_STAT_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(StatsRow) if f.name not in STATS_CONTEXT_FIELDS
)


# ---------------------------------------------------------------------------
# Contract / misc
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Contract:
    amount: int  # thousands of dollars
    exp: int  # last season covered

    def to_row(self) -> JsonDict:
        return {"amount": int(self.amount), "exp": int(self.exp)}

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Contract":
        return cls(amount=int(row["amount"]), exp=int(row["exp"]))


@dataclass(slots=True)
class SalaryEntry:
    season: int
    amount: int

    def to_row(self) -> JsonDict:
        return {"season": int(self.season), "amount": int(self.amount)}

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SalaryEntry":
        return cls(season=int(row["season"]), amount=int(row["amount"]))


@dataclass(slots=True)
class Born:
    year: int
    loc: str = ""

    def to_row(self) -> JsonDict:
        return {"year": int(self.year), "loc": self.loc}

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Born":
        return cls(year=int(row["year"]), loc=str(row.get("loc") or ""))


@dataclass(slots=True)
class InjuryState:
    type: str = "Healthy"
    games_remaining: int = 0

    def to_row(self) -> JsonDict:
        return {"type": self.type, "games_remaining": int(self.games_remaining)}

    @classmethod
    def from_row(cls, row: Optional[Mapping[str, Any]]) -> "InjuryState":
        if not row:
            return cls()
        return cls(type=str(row.get("type") or "Healthy"), games_remaining=int(row.get("games_remaining") or 0))


@dataclass(slots=True)
class DraftInfo:
    """Draft record; pot/ovr/skills are frozen at generation time."""

    year: int
    pot: int
    ovr: int
    skills: List[str] = field(default_factory=list)
    round: int = 0
    pick: int = 0
    tid: int = DRAFT_TID_NONE
    abbrev: Optional[str] = None
    team_name: Optional[str] = None
    team_region: Optional[str] = None

    def to_row(self) -> JsonDict:
        return {
            "year": int(self.year),
            "pot": int(self.pot),
            "ovr": int(self.ovr),
            "skills": list(self.skills),
            "round": int(self.round),
            "pick": int(self.pick),
            "tid": int(self.tid),
            "abbrev": self.abbrev,
            "team_name": self.team_name,
            "team_region": self.team_region,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DraftInfo":
        return cls(
            year=int(row["year"]),
            pot=int(row["pot"]),
            ovr=int(row["ovr"]),
            skills=list(row.get("skills") or []),
            round=int(row.get("round", 0)),
            pick=int(row.get("pick", 0)),
            tid=int(row.get("tid", DRAFT_TID_NONE)),
            abbrev=row.get("abbrev"),
            team_name=row.get("team_name"),
            team_region=row.get("team_region"),
        )


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Player:
    tid: int
    name: str
    born: Born
    hgt: int
    weight: int
    pos: str
    ratings: List[RatingsRow]
    contract: Contract
    draft: DraftInfo
    pid: Optional[int] = None
    college: str = ""
    face: JsonDict = field(default_factory=dict)
    stats: List[StatsRow] = field(default_factory=list)
    stats_tids: List[int] = field(default_factory=list)
    salaries: List[SalaryEntry] = field(default_factory=list)
    free_agent_mood: List[float] = field(default_factory=list)
    injury: InjuryState = field(default_factory=InjuryState)
    awards: List[Any] = field(default_factory=list)
    retired_year: Optional[int] = None
    years_free_agent: int = 0
    roster_order: int = 666

    def __post_init__(self) -> None:
        self.check_stats_rows()

    def check_stats_rows(self) -> None:
        """Raise STATS_ROW_DUPLICATE if two stats rows share (season, tid, playoffs)."""
        seen = set()
        for row in self.stats:
            if row.key in seen:
                raise PlayerModelError(
                    STATS_ROW_DUPLICATE,
                    f"player has more than one stats row for season={row.season} tid={row.tid} playoffs={row.playoffs}",
                    {"pid": self.pid, "key": list(row.key)},
                )
            seen.add(row.key)

    @property
    def current_ratings(self) -> RatingsRow:
        return self.ratings[-1]

    def to_row(self) -> JsonDict:
        return {
            "pid": self.pid,
            "tid": int(self.tid),
            "name": self.name,
            "born": self.born.to_row(),
            "hgt": int(self.hgt),
            "weight": int(self.weight),
            "pos": self.pos,
            "college": self.college,
            "face": dict(self.face),
            "ratings": [r.to_row() for r in self.ratings],
            "stats": [s.to_row() for s in self.stats],
            "stats_tids": list(self.stats_tids),
            "contract": self.contract.to_row(),
            "salaries": [s.to_row() for s in self.salaries],
            "free_agent_mood": [float(m) for m in self.free_agent_mood],
            "draft": self.draft.to_row(),
            "injury": self.injury.to_row(),
            "awards": list(self.awards),
            "retired_year": self.retired_year,
            "years_free_agent": int(self.years_free_agent),
            "roster_order": int(self.roster_order),
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Player":
        pid = row.get("pid")
        return cls(
            pid=int(pid) if pid is not None else None,
            tid=int(row["tid"]),
            name=str(row.get("name") or ""),
            born=Born.from_row(row["born"]),
            hgt=int(row["hgt"]),
            weight=int(row["weight"]),
            pos=str(row.get("pos") or ""),
            college=str(row.get("college") or ""),
            face=dict(row.get("face") or {}),
            ratings=[RatingsRow.from_row(r) for r in row["ratings"]],
            stats=[StatsRow.from_row(s) for s in row.get("stats") or []],
            stats_tids=[int(t) for t in row.get("stats_tids") or []],
            contract=Contract.from_row(row["contract"]),
            salaries=[SalaryEntry.from_row(s) for s in row.get("salaries") or []],
            free_agent_mood=[float(m) for m in row.get("free_agent_mood") or []],
            draft=DraftInfo.from_row(row["draft"]),
            injury=InjuryState.from_row(row.get("injury")),
            awards=list(row.get("awards") or []),
            retired_year=row.get("retired_year"),
            years_free_agent=int(row.get("years_free_agent") or 0),
            roster_order=int(row.get("roster_order", 666)),
        )
