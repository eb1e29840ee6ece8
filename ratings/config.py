from __future__ import annotations

"""Rating dimensions and derivation thresholds.

Skill weights are balance-sensitive: the game simulation uses the same
composites, so change them together or not at all.
"""

from typing import Dict, Tuple

# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------

MIN_RATING: int = 0
MAX_RATING: int = 100

# Height first, then the 14 skill scores. Order matters: generation profiles
# are offset vectors in exactly this order.
RATING_KEYS: Tuple[str, ...] = (
    "hgt",
    "stre",
    "spd",
    "jmp",
    "endu",
    "ins",
    "dnk",
    "ft",
    "fg",
    "tp",
    "blk",
    "stl",
    "drb",
    "pss",
    "reb",
)

# Height is fixed at generation; only these change year to year.
SKILL_RATING_KEYS: Tuple[str, ...] = RATING_KEYS[1:]

# ---------------------------------------------------------------------------
# Skill tags
# ---------------------------------------------------------------------------

# A tag is granted when sum(r_i * w_i) / sum(100 * w_i) exceeds this.
SKILL_THRESHOLD: float = 0.75

# (code, components, weights), in display order.
SKILL_DEFINITIONS: Tuple[Tuple[str, Tuple[str, ...], Tuple[float, ...]], ...] = (
    ("3", ("hgt", "tp"), (0.2, 1.0)),  # three point shooter
    ("A", ("stre", "spd", "jmp", "hgt"), (1.0, 1.0, 1.0, 0.5)),  # athlete
    ("B", ("drb", "spd"), (1.0, 1.0)),  # ball handler
    ("Di", ("hgt", "stre", "spd", "jmp", "blk"), (2.0, 1.0, 0.5, 0.5, 1.0)),  # interior defender
    ("Dp", ("hgt", "stre", "spd", "jmp", "stl"), (1.0, 1.0, 2.0, 0.5, 1.0)),  # perimeter defender
    ("Po", ("hgt", "stre", "spd", "ins"), (1.0, 0.6, 0.2, 1.0)),  # post scorer
    ("Ps", ("drb", "pss"), (0.4, 1.0)),  # passer
    ("R", ("hgt", "stre", "jmp", "reb"), (1.0, 0.1, 0.1, 0.7)),  # rebounder
)

SKILL_LABELS: Dict[str, str] = {
    "3": "Three Point Shooter",
    "A": "Athlete",
    "B": "Ball Handler",
    "Di": "Interior Defender",
    "Dp": "Perimeter Defender",
    "Po": "Post Scorer",
    "Ps": "Passer",
    "R": "Rebounder",
}

# ---------------------------------------------------------------------------
# Position classification
# ---------------------------------------------------------------------------

POSITIONS: Tuple[str, ...] = ("PG", "SG", "SF", "PF", "C", "G", "GF", "FC", "F")

# Default position: GF for ball handlers, F otherwise.
POS_DEFAULT_DRB_MIN: int = 50

# Guard eligibility: short or very fast.
POS_GUARD_HGT_MAX: int = 30
POS_GUARD_SPD_MIN: int = 85
POS_PG_PSS_DRB_MIN: int = 100
POS_SG_HGT_MIN: int = 30

POS_SF_HGT_RANGE: Tuple[int, int] = (50, 65)
POS_SF_SPD_MIN: int = 40

POS_PF_HGT_MIN: int = 70
POS_C_HGT_STRE_MIN: int = 130

# A default "F" with no handle at all is a power forward.
POS_F_TO_PF_DRB_MAX: int = 20

# ---------------------------------------------------------------------------
# Fuzz (scouting noise)
# ---------------------------------------------------------------------------

# Max error runs from FUZZ_CUTOFF_MIN (rank 1) to FUZZ_CUTOFF_MIN+FUZZ_CUTOFF_RANGE (rank 30).
FUZZ_CUTOFF_MIN: float = 2.0
FUZZ_CUTOFF_RANGE: float = 8.0

# Std dev runs from FUZZ_SIGMA_MIN to FUZZ_SIGMA_MIN+FUZZ_SIGMA_RANGE.
FUZZ_SIGMA_MIN: float = 1.0
FUZZ_SIGMA_RANGE: float = 2.0

# Scouting spending rank drives the fuzz spread.
SCOUTING_EXPENSE_ITEM: str = "scouting"
