from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from league_context import PLAYER_UNDRAFTED


class GeneratePlayerRequest(BaseModel):
    tid: int = PLAYER_UNDRAFTED
    age: int = Field(19, ge=15, le=45)
    profile: str = "balanced"
    base_rating: float = 45.0
    pot: int = Field(50, ge=0, le=100)
    draft_year: Optional[int] = None  # default: current season
    new_league: bool = False
    scouting_rank: Optional[float] = Field(None, ge=1, le=30)  # default: league middle


class FilterPlayersRequest(BaseModel):
    roster_tid: Optional[int] = None  # only players currently on this team
    season: Optional[int] = None
    tid: Optional[int] = None
    attributes: List[str] = Field(default_factory=list)
    ratings: List[str] = Field(default_factory=list)
    stats: List[str] = Field(default_factory=list)
    totals: bool = False
    playoffs: bool = False
    show_players_without_stats: bool = False
    show_current_season_rookies: bool = False
    apply_rating_noise: bool = False
    use_last_season_if_empty: bool = False
    num_games_remaining: int = Field(0, ge=0)


class DevelopPlayerRequest(BaseModel):
    years: int = Field(1, ge=0, le=25)
    coaching_rank: Optional[float] = Field(None, ge=1, le=30)  # default: player's team coaching rank
    new_season_row: bool = False  # append a ratings row for the current season first


class InjuryRequest(BaseModel):
    health_rank: Optional[float] = Field(None, ge=1, le=30)  # default: player's team health rank
