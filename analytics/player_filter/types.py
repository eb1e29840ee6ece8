from __future__ import annotations

"""Options and output shapes for the player filter."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, TypedDict

from .fields import AttributeField, RatingField, StatField, parse_fields


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """What to project out of each player record.

    ``season=None`` selects every season (lists plus career totals); ``tid``
    only narrows single-season stats lookups. Field names are validated on
    construction.
    """

    season: Optional[int] = None
    tid: Optional[int] = None
    attributes: Tuple[AttributeField, ...] = ()
    ratings: Tuple[RatingField, ...] = ()
    stats: Tuple[StatField, ...] = ()
    totals: bool = False
    playoffs: bool = False
    show_players_without_stats: bool = False
    show_current_season_rookies: bool = False
    apply_rating_noise: bool = False
    use_last_season_if_empty: bool = False
    num_games_remaining: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", parse_fields(AttributeField, self.attributes, kind="attribute"))
        object.__setattr__(self, "ratings", parse_fields(RatingField, self.ratings, kind="rating"))
        object.__setattr__(self, "stats", parse_fields(StatField, self.stats, kind="stat"))

    @property
    def single_season(self) -> bool:
        return self.season is not None

    @property
    def force_include(self) -> bool:
        """With no stats requested there is nothing to gate inclusion on."""
        return self.show_players_without_stats or not self.stats


ShapedStats = Dict[str, Any]
ShapedRatings = Dict[str, Any]


class FilteredPlayer(TypedDict, total=False):
    """Output record; attribute keys sit at the top level next to these."""

    stats: Any  # ShapedStats (single season) or List[ShapedStats]
    stats_playoffs: Any
    career_stats: ShapedStats
    career_stats_playoffs: ShapedStats
    ratings: Any  # ShapedRatings or List[ShapedRatings]

