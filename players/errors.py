from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class PlayerModelError(Exception):
    """Structured error for programmer errors in the player model.

    Degenerate numeric inputs never raise; these codes cover records or
    requests that would otherwise produce silently wrong output. The server
    layer maps them to HTTP 4xx while keeping a stable machine-readable code.
    """

    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


# Error codes (stable API surface)
RATING_MISSING = "RATING_MISSING"
STATS_ROW_DUPLICATE = "STATS_ROW_DUPLICATE"
FILTER_UNKNOWN_FIELD = "FILTER_UNKNOWN_FIELD"
MOOD_LENGTH_MISMATCH = "MOOD_LENGTH_MISMATCH"
PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
