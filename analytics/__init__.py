"""Top-level package for derived analytics.

This package is intentionally *read-only* with respect to player records:
modules compute *derived views* (season lines, career totals, displayed
ratings) suitable for the API and UI.
"""

from __future__ import annotations

from . import player_filter

__all__ = ["player_filter"]
