"""Player filter: season, career and multi-season views of player records."""

from __future__ import annotations

from .engine import filter_player, filter_players
from .fields import AttributeField, RatingField, StatField
from .types import FilterOptions

__all__ = [
    "FilterOptions",
    "AttributeField",
    "RatingField",
    "StatField",
    "filter_player",
    "filter_players",
]
