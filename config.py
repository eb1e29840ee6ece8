from __future__ import annotations

"""Process-level configuration.

Subsystems import this module by absolute name (``import config``), the same
way they import each other. Tunable model constants live in each subsystem's
own ``config.py``; this file only holds environment variable names and
league-wide defaults.
"""

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

# Path of the SQLite league database used by the HTTP server.
ENV_DB_PATH = "LEAGUE_DB_PATH"

# Optional seed for the server's RandomSource (reproducible sessions); integers are used
# as-is, other strings go through random_source.stable_seed.
ENV_RNG_SEED = "LEAGUE_RNG_SEED"

# ---------------------------------------------------------------------------
# League defaults
# ---------------------------------------------------------------------------

DEFAULT_NUM_TEAMS: int = 30
DEFAULT_NUM_GAMES: int = 82
DEFAULT_STARTING_SEASON: int = 2013

# Ranks (coaching, health, facilities, scouting) run 1..RANK_MAX, 1 = best.
RANK_MAX: int = 30

# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

# Stored in the meta table; bump when db_schema changes shape.
SCHEMA_VERSION: str = "1"
