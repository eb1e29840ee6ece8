# db_schema/core.py
"""SQLite schema: core league tables.

This module contains *only* DDL and schema migrations.
It must not import LeagueRepo (to avoid circular imports).

Player and team records are stored whole as JSON (``data_json``); the
columns next to it are denormalized copies kept for indexed lookups.
"""

from __future__ import annotations

import sqlite3
from typing import Callable, Mapping


# Signature compatible with LeagueRepo._ensure_table_columns(cur, table, columns)
EnsureColumnsFn = Callable[[sqlite3.Cursor, str, Mapping[str, str]], None]


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for core tables (as a single executescript string)."""
    return f"""
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );

                INSERT INTO meta(key, value) VALUES ('schema_version', '{schema_version}')
                ON CONFLICT(key) DO UPDATE SET value=excluded.value;
                INSERT OR IGNORE INTO meta(key, value) VALUES ('created_at', '{now}');

                CREATE TABLE IF NOT EXISTS players (
                    pid INTEGER PRIMARY KEY AUTOINCREMENT,
                    tid INTEGER NOT NULL,
                    name TEXT,
                    pos TEXT,
                    data_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_players_tid ON players(tid);

                CREATE TABLE IF NOT EXISTS teams (
                    tid INTEGER PRIMARY KEY,
                    abbrev TEXT NOT NULL,
                    data_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                -- Contracts still owed by a team after it released the player.
                CREATE TABLE IF NOT EXISTS released_players (
                    rid INTEGER PRIMARY KEY AUTOINCREMENT,
                    pid INTEGER,
                    tid INTEGER NOT NULL,
                    amount INTEGER NOT NULL,
                    exp INTEGER NOT NULL,
                    created_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_released_players_pid ON released_players(pid);
                CREATE INDEX IF NOT EXISTS idx_released_players_tid ON released_players(tid);
"""


def migrate(cur: sqlite3.Cursor, *, ensure_columns: EnsureColumnsFn) -> None:
    """Post-DDL migrations for databases created before a column existed."""
    ensure_columns(
        cur,
        "players",
        {
            "draft_year": "INTEGER",
        },
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_players_draft_year ON players(draft_year);")
