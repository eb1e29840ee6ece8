# league_repo.py
# Developer note:
# - SQLite DB is the single source of truth (SSOT) for persisted league data (tables managed here).
# - Excel files are export only (no runtime reads).
# - pid and tid are canonical integers; negative tids are sentinels (free agent, undrafted, retired).
"""
LeagueRepository: persisted-data SSOT (SQLite)

Goal:
- All persisted player/team reads and writes go through SQLite (via LeagueRepo).
- Records are stored whole as JSON and rebuilt with ``Player.from_row`` /
  ``Team.from_row``; indexed columns are denormalized copies.

Usage (CLI):
  python league_repo.py init --db <db_path> --season 2013
  python league_repo.py export_players --db <db_path> --excel players.xlsx

Python:
  from league_repo import LeagueRepo
  with LeagueRepo("<db_path>") as repo:
      repo.init_db()
      pid = repo.put_player(player)
"""

from __future__ import annotations

import argparse
import contextlib
import datetime as _dt
import json
import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import config
from league_context import LeagueContext
from players.errors import PLAYER_NOT_FOUND, PlayerModelError
from players.types import Contract, Player
from teams.types import Team


# ----------------------------
# Helpers
# ----------------------------

logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}

_META_LEAGUE_CONTEXT = "league_context"


def _warn_limited(code: str, msg: str, *, limit: int = 5) -> None:
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg, exc_info=True)
    _WARN_COUNTS[code] = n + 1


def _utc_now_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0).isoformat()


def _json_dumps(obj: Any) -> str:
    return json.dumps(
        obj,
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
        default=str,
    )


def _json_loads(value: Any, default: Any):
    """
    Safe JSON loader:
    - None -> default
    - already dict/list -> returns as-is
    - invalid JSON -> default
    """
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        return value
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        _warn_limited("JSON_DECODE_FAILED", f"value_preview={repr(str(value))[:120]}", limit=3)
        return default


@dataclass(frozen=True)
class ReleasedPlayer:
    rid: int
    pid: Optional[int]
    tid: int
    contract: Contract


# ----------------------------
# Repository
# ----------------------------

class LeagueRepo:
    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON;")
        self._conn.execute("PRAGMA journal_mode = WAL;")
        # Nested transaction support (SAVEPOINT) for callers that compose repo methods.
        # (SQLite raises if BEGIN is issued while a transaction is already active.)
        self._savepoint_seq = 0

    def close(self) -> None:
        self._conn.close()

    @contextlib.contextmanager
    def transaction(self):
        """
        Atomic transaction helper.

        Supports nesting via SAVEPOINT:
        - outermost: BEGIN ... COMMIT/ROLLBACK
        - nested: SAVEPOINT ... RELEASE (or ROLLBACK TO + RELEASE on error)
        """
        cur = self._conn.cursor()
        nested = bool(self._conn.in_transaction)
        sp_name = None
        try:
            if nested:
                self._savepoint_seq += 1
                sp_name = f"sp_{self._savepoint_seq}"
                cur.execute(f"SAVEPOINT {sp_name};")
            else:
                self._conn.execute("BEGIN;")

            yield cur

            if nested and sp_name:
                cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.commit()
        except Exception:
            if nested and sp_name:
                # Roll back to the savepoint only; do NOT rollback the outer transaction here.
                try:
                    cur.execute(f"ROLLBACK TO SAVEPOINT {sp_name};")
                finally:
                    cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.rollback()
            raise
        finally:
            cur.close()

    # ------------------------
    # Schema
    # ------------------------

    def _ensure_table_columns(self, cur: sqlite3.Cursor, table: str, columns: Dict[str, str]) -> None:
        """SQLite has no ADD COLUMN IF NOT EXISTS; check PRAGMA table_info first."""
        rows = cur.execute(f"PRAGMA table_info({table});").fetchall()
        existing = {r["name"] for r in rows}
        for col, ddl in columns.items():
            if col in existing:
                continue
            cur.execute(f"ALTER TABLE {table} ADD COLUMN {col} {ddl};")

    def init_db(self) -> None:
        """Apply SQLite schema (DDL + migrations) via db_schema."""
        from db_schema import apply_schema

        now = _utc_now_iso()
        with self.transaction() as cur:
            apply_schema(
                cur,
                now=now,
                schema_version=config.SCHEMA_VERSION,
                ensure_columns=self._ensure_table_columns,
            )

    # ------------------------
    # League context
    # ------------------------

    def get_league_context(self) -> Optional[LeagueContext]:
        row = self._conn.execute("SELECT value FROM meta WHERE key=?", (_META_LEAGUE_CONTEXT,)).fetchone()
        if not row:
            return None
        data = _json_loads(row["value"], None)
        if not isinstance(data, dict):
            return None
        return LeagueContext.from_row(data)

    def set_league_context(self, ctx: LeagueContext) -> None:
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO meta(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value;
                """,
                (_META_LEAGUE_CONTEXT, _json_dumps(ctx.to_row())),
            )

    # ------------------------
    # Players
    # ------------------------

    def put_player(self, player: Player) -> int:
        """Insert or replace a player record; assigns ``player.pid`` on first insert."""
        now = _utc_now_iso()
        with self.transaction() as cur:
            if player.pid is None:
                cur.execute(
                    """
                    INSERT INTO players(tid, name, pos, draft_year, data_json, created_at, updated_at)
                    VALUES (?, ?, ?, ?, '{}', ?, ?);
                    """,
                    (int(player.tid), player.name, player.pos, int(player.draft.year), now, now),
                )
                player.pid = int(cur.lastrowid)
                logger.debug("PLAYER_INSERTED pid=%s tid=%s", player.pid, player.tid)

            cur.execute(
                """
                INSERT INTO players(pid, tid, name, pos, draft_year, data_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(pid) DO UPDATE SET
                    tid=excluded.tid,
                    name=excluded.name,
                    pos=excluded.pos,
                    draft_year=excluded.draft_year,
                    data_json=excluded.data_json,
                    updated_at=excluded.updated_at;
                """,
                (
                    int(player.pid),
                    int(player.tid),
                    player.name,
                    player.pos,
                    int(player.draft.year),
                    _json_dumps(player.to_row()),
                    now,
                    now,
                ),
            )
        return int(player.pid)

    def put_players(self, players: Iterable[Player]) -> List[int]:
        with self.transaction():
            return [self.put_player(p) for p in players]

    def _player_from_db_row(self, row: sqlite3.Row) -> Player:
        data = _json_loads(row["data_json"], {})
        data["pid"] = int(row["pid"])
        return Player.from_row(data)

    def get_player(self, pid: int) -> Player:
        row = self._conn.execute("SELECT pid, data_json FROM players WHERE pid=?", (int(pid),)).fetchone()
        if not row:
            raise PlayerModelError(PLAYER_NOT_FOUND, f"player not found: {pid}", {"pid": pid})
        return self._player_from_db_row(row)

    def list_players(self, tid: Optional[int] = None) -> List[Player]:
        if tid is None:
            rows = self._conn.execute("SELECT pid, data_json FROM players ORDER BY pid;").fetchall()
        else:
            rows = self._conn.execute(
                "SELECT pid, data_json FROM players WHERE tid=? ORDER BY pid;", (int(tid),)
            ).fetchall()
        return [self._player_from_db_row(r) for r in rows]

    def list_players_by_draft_year(self, draft_year: int) -> List[Player]:
        rows = self._conn.execute(
            "SELECT pid, data_json FROM players WHERE draft_year=? ORDER BY pid;", (int(draft_year),)
        ).fetchall()
        return [self._player_from_db_row(r) for r in rows]

    # ------------------------
    # Released players (dead money)
    # ------------------------

    def add_released_player(self, pid: Optional[int], tid: int, contract: Contract) -> int:
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO released_players(pid, tid, amount, exp, created_at)
                VALUES (?, ?, ?, ?, ?);
                """,
                (pid, int(tid), int(contract.amount), int(contract.exp), _utc_now_iso()),
            )
            return int(cur.lastrowid)

    def list_released_players(self, *, tid: Optional[int] = None, pid: Optional[int] = None) -> List[ReleasedPlayer]:
        sql = "SELECT rid, pid, tid, amount, exp FROM released_players"
        where: List[str] = []
        params: List[Any] = []
        if tid is not None:
            where.append("tid=?")
            params.append(int(tid))
        if pid is not None:
            where.append("pid=?")
            params.append(int(pid))
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY rid;"
        rows = self._conn.execute(sql, params).fetchall()
        return [
            ReleasedPlayer(
                rid=int(r["rid"]),
                pid=int(r["pid"]) if r["pid"] is not None else None,
                tid=int(r["tid"]),
                contract=Contract(amount=int(r["amount"]), exp=int(r["exp"])),
            )
            for r in rows
        ]

    # ------------------------
    # Teams
    # ------------------------

    def upsert_teams(self, teams: Iterable[Team]) -> None:
        now = _utc_now_iso()
        with self.transaction() as cur:
            for t in teams:
                cur.execute(
                    """
                    INSERT INTO teams(tid, abbrev, data_json, updated_at) VALUES (?, ?, ?, ?)
                    ON CONFLICT(tid) DO UPDATE SET
                        abbrev=excluded.abbrev,
                        data_json=excluded.data_json,
                        updated_at=excluded.updated_at;
                    """,
                    (int(t.tid), t.abbrev, _json_dumps(t.to_row()), now),
                )

    def list_teams(self) -> List[Team]:
        rows = self._conn.execute("SELECT tid, data_json FROM teams ORDER BY tid;").fetchall()
        out: List[Team] = []
        for r in rows:
            data = _json_loads(r["data_json"], None)
            if not isinstance(data, dict):
                _warn_limited("TEAM_ROW_INVALID", f"tid={r['tid']}")
                continue
            out.append(Team.from_row(data))
        return out

    # ------------------------
    # Export
    # ------------------------

    def export_players_excel(self, excel_path: str | Path) -> None:
        """Export one row per player (current ratings and contract) to Excel."""
        import pandas as pd  # local import so the repo works without pandas otherwise

        ctx = self.get_league_context()
        out: List[Dict[str, Any]] = []
        for p in self.list_players():
            pr = p.current_ratings
            out.append(
                {
                    "pid": p.pid,
                    "tid": p.tid,
                    "name": p.name,
                    "pos": p.pos,
                    "age": (ctx.season - p.born.year) if ctx is not None else None,
                    "hgt": p.hgt,
                    "weight": p.weight,
                    "ovr": pr.ovr,
                    "pot": pr.pot,
                    "skills": " ".join(pr.skills),
                    "contract_amount": p.contract.amount,
                    "contract_exp": p.contract.exp,
                    "injury": p.injury.type,
                }
            )

        df = pd.DataFrame(out)
        df.to_excel(str(excel_path), index=False)

    # ------------------------
    # Convenience
    # ------------------------

    def __enter__(self) -> "LeagueRepo":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# ----------------------------
# CLI
# ----------------------------

def _cmd_init(args) -> None:
    with LeagueRepo(args.db) as repo:
        repo.init_db()
        if args.season is not None:
            repo.set_league_context(LeagueContext(season=args.season, starting_season=args.season))
    print(f"OK: initialized {args.db}")

def _cmd_export_players(args) -> None:
    with LeagueRepo(args.db) as repo:
        repo.export_players_excel(args.excel)
    print(f"OK: exported players to {args.excel}")

def main(argv: Optional[Sequence[str]] = None) -> None:
    p = argparse.ArgumentParser(description="LeagueRepo (SQLite single source of truth)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="initialize DB schema")
    p_init.add_argument("--db", required=True, help="path to sqlite db file")
    p_init.add_argument("--season", type=int, default=None, help="store a league context starting at this season")
    p_init.set_defaults(func=_cmd_init)

    p_exp = sub.add_parser("export_players", help="export players from DB to excel")
    p_exp.add_argument("--db", required=True, help="path to sqlite db file")
    p_exp.add_argument("--excel", required=True, help="output excel path")
    p_exp.set_defaults(func=_cmd_export_players)

    args = p.parse_args(argv)
    args.func(args)

if __name__ == "__main__":
    main()
