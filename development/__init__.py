"""Year-over-year player development."""

from .engine import bonus, coaching_multiplier, develop, player_age

__all__ = ["develop", "bonus", "coaching_multiplier", "player_age"]
