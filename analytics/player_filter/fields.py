from __future__ import annotations

"""Closed sets of field names the player filter understands.

Every requestable name is a member of one of three enums. Options are
validated against them up front, so an unknown name fails immediately instead
of quietly producing a missing key.
"""

from enum import Enum
from typing import Dict, Iterable, Tuple, Type, TypeVar

from players.errors import FILTER_UNKNOWN_FIELD, PlayerModelError


class AttributeField(str, Enum):
    # Stored on the record
    PID = "pid"
    TID = "tid"
    NAME = "name"
    BORN = "born"
    HGT = "hgt"
    WEIGHT = "weight"
    POS = "pos"
    COLLEGE = "college"
    FACE = "face"
    STATS_TIDS = "stats_tids"
    FREE_AGENT_MOOD = "free_agent_mood"
    AWARDS = "awards"
    RETIRED_YEAR = "retired_year"
    YEARS_FREE_AGENT = "years_free_agent"
    ROSTER_ORDER = "roster_order"
    # Computed
    AGE = "age"
    HGT_FT = "hgt_ft"
    HGT_IN = "hgt_in"
    CONTRACT = "contract"
    CASH_OWED = "cash_owed"
    ABBREV = "abbrev"
    TEAM_REGION = "team_region"
    TEAM_NAME = "team_name"
    SALARIES = "salaries"
    SALARIES_TOTAL = "salaries_total"
    DRAFT = "draft"
    INJURY = "injury"


class RatingField(str, Enum):
    HGT = "hgt"
    STRE = "stre"
    SPD = "spd"
    JMP = "jmp"
    ENDU = "endu"
    INS = "ins"
    DNK = "dnk"
    FT = "ft"
    FG = "fg"
    TP = "tp"
    BLK = "blk"
    STL = "stl"
    DRB = "drb"
    PSS = "pss"
    REB = "reb"
    OVR = "ovr"
    POT = "pot"
    SKILLS = "skills"
    FUZZ = "fuzz"
    SEASON = "season"
    # Computed
    AGE = "age"
    ABBREV = "abbrev"


class StatField(str, Enum):
    GP = "gp"
    GS = "gs"
    MIN = "min"
    FG = "fg"
    FGA = "fga"
    FGP = "fgp"
    FG_AT_RIM = "fg_at_rim"
    FGA_AT_RIM = "fga_at_rim"
    FGP_AT_RIM = "fgp_at_rim"
    FG_LOW_POST = "fg_low_post"
    FGA_LOW_POST = "fga_low_post"
    FGP_LOW_POST = "fgp_low_post"
    FG_MID_RANGE = "fg_mid_range"
    FGA_MID_RANGE = "fga_mid_range"
    FGP_MID_RANGE = "fgp_mid_range"
    TP = "tp"
    TPA = "tpa"
    TPP = "tpp"
    FT = "ft"
    FTA = "fta"
    FTP = "ftp"
    ORB = "orb"
    DRB = "drb"
    TRB = "trb"
    AST = "ast"
    TOV = "tov"
    STL = "stl"
    BLK = "blk"
    PF = "pf"
    PTS = "pts"
    PER = "per"
    # Row context
    SEASON = "season"
    AGE = "age"
    ABBREV = "abbrev"


# ---------------------------------------------------------------------------
# Stat field classes
# ---------------------------------------------------------------------------

# Percentage -> (made, attempted); always made/attempted, 0 when attempted == 0.
PERCENTAGE_STATS: Dict[StatField, Tuple[str, str]] = {
    StatField.FGP: ("fg", "fga"),
    StatField.FGP_AT_RIM: ("fg_at_rim", "fga_at_rim"),
    StatField.FGP_LOW_POST: ("fg_low_post", "fga_low_post"),
    StatField.FGP_MID_RANGE: ("fg_mid_range", "fga_mid_range"),
    StatField.TPP: ("tp", "tpa"),
    StatField.FTP: ("ft", "fta"),
}

# Copied as-is, never divided by games.
UNDIVIDED_STATS: Tuple[StatField, ...] = (StatField.GP, StatField.GS, StatField.PER)

# Describe the row rather than measure it; not zeroed on empty rows.
CONTEXT_STATS: Tuple[StatField, ...] = (StatField.SEASON, StatField.AGE, StatField.ABBREV)

# Ratings fields that never receive fuzz on display.
NOISE_EXEMPT_RATINGS: Tuple[RatingField, ...] = (
    RatingField.FUZZ,
    RatingField.SEASON,
    RatingField.SKILLS,
    RatingField.AGE,
    RatingField.ABBREV,
)


E = TypeVar("E", bound=Enum)


def parse_fields(enum_cls: Type[E], names: Iterable[object], *, kind: str) -> Tuple[E, ...]:
    """Convert requested names into enum members, preserving order.

    Raises PlayerModelError(FILTER_UNKNOWN_FIELD) listing every unknown name.
    """
    out = []
    unknown = []
    for name in names or ():
        if isinstance(name, enum_cls):
            out.append(name)
            continue
        try:
            out.append(enum_cls(str(name)))
        except ValueError:
            unknown.append(name)
    if unknown:
        raise PlayerModelError(
            FILTER_UNKNOWN_FIELD,
            f"unknown {kind} field(s): {', '.join(repr(u) for u in unknown)}",
            {"kind": kind, "unknown": [str(u) for u in unknown]},
        )
    return tuple(out)
