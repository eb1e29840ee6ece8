from __future__ import annotations

"""Pure functions deriving labels from a ratings row.

All functions accept either a ``RatingsRow`` or any mapping of rating key to
score. A missing dimension is a programmer error and raises immediately.
"""

from typing import Any, List, Mapping, Optional, Sequence

from helpers import round_half_up
from players.errors import RATING_MISSING, PlayerModelError

from . import config as cfg


def rating(ratings: Any, key: str) -> float:
    """Read one dimension from a row or mapping."""
    if isinstance(ratings, Mapping):
        if key not in ratings or ratings[key] is None:
            raise PlayerModelError(RATING_MISSING, f"ratings missing dimension {key!r}", {"key": key})
        return ratings[key]
    value = getattr(ratings, key, None)
    if value is None:
        raise PlayerModelError(RATING_MISSING, f"ratings missing dimension {key!r}", {"key": key})
    return value


def limit_rating(x: float) -> int:
    """Clamp to [0, 100]; in-range values are floored."""
    if x > cfg.MAX_RATING:
        return cfg.MAX_RATING
    if x < cfg.MIN_RATING:
        return cfg.MIN_RATING
    return int(x // 1)


def ovr(ratings: Any) -> int:
    """Overall rating: rounded mean of all 15 dimensions (height included)."""
    total = sum(float(rating(ratings, k)) for k in cfg.RATING_KEYS)
    return round_half_up(total / len(cfg.RATING_KEYS))


def has_skill(
    ratings: Any,
    components: Sequence[str],
    weights: Optional[Sequence[float]] = None,
    *,
    threshold: float = cfg.SKILL_THRESHOLD,
) -> bool:
    """Weighted composite of ``components`` as a fraction of its maximum, compared to ``threshold``."""
    if weights is None:
        weights = [1.0] * len(components)
    if len(weights) != len(components):
        raise ValueError("components and weights must have the same length")

    numerator = 0.0
    denominator = 0.0
    for key, w in zip(components, weights):
        numerator += float(rating(ratings, key)) * float(w)
        denominator += cfg.MAX_RATING * float(w)
    if denominator <= 0:
        return False
    return numerator / denominator > threshold


def skills(ratings: Any) -> List[str]:
    """Skill tag codes granted by ``ratings``, in declaration order."""
    return [code for code, components, weights in cfg.SKILL_DEFINITIONS if has_skill(ratings, components, weights)]


def position(ratings: Any) -> str:
    """Assign PG, SG, SF, PF, C, G, GF, FC (or F) from ratings."""
    hgt = rating(ratings, "hgt")
    stre = rating(ratings, "stre")
    spd = rating(ratings, "spd")
    drb = rating(ratings, "drb")
    pss = rating(ratings, "pss")

    g = pg = sg = sf = pf = c = False

    pos = "GF" if drb >= cfg.POS_DEFAULT_DRB_MIN else "F"

    if hgt <= cfg.POS_GUARD_HGT_MAX or spd >= cfg.POS_GUARD_SPD_MIN:
        g = True
        if pss + drb >= cfg.POS_PG_PSS_DRB_MIN:
            pg = True
        if hgt >= cfg.POS_SG_HGT_MIN:
            sg = True
    sf_lo, sf_hi = cfg.POS_SF_HGT_RANGE
    if sf_lo <= hgt <= sf_hi and spd >= cfg.POS_SF_SPD_MIN:
        sf = True
    if hgt >= cfg.POS_PF_HGT_MIN:
        pf = True
    if hgt + stre >= cfg.POS_C_HGT_STRE_MIN:
        c = True

    if pg and not sg and not sf and not pf and not c:
        pos = "PG"
    elif not pg and (g or sg) and not sf and not pf and not c:
        pos = "SG"
    elif not pg and not sg and sf and not pf and not c:
        pos = "SF"
    elif not pg and not sg and not sf and pf and not c:
        pos = "PF"
    elif not pg and not sg and not sf and not pf and c:
        pos = "C"

    # Multiple positions
    if (pf or sf) and g:
        pos = "GF"
    elif c and (pf or sf):
        pos = "FC"
    elif pg and sg:
        pos = "G"

    if pos == "F" and drb <= cfg.POS_F_TO_PF_DRB_MAX:
        pos = "PF"

    return pos
