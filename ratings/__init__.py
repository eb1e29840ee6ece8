"""Rating derivation: overall, skill tags, position, and display fuzz."""

from .derive import has_skill, limit_rating, ovr, position, rating, skills
from .fuzz import apply_fuzz, gen_fuzz

__all__ = [
    "has_skill",
    "limit_rating",
    "ovr",
    "position",
    "rating",
    "skills",
    "apply_fuzz",
    "gen_fuzz",
]
