# db_schema/init.py
"""Public entrypoint for applying the SQLite schema."""

from __future__ import annotations

import logging
import sqlite3
from types import ModuleType
from typing import Callable, Iterable, Mapping

from . import core


logger = logging.getLogger(__name__)

# Signature compatible with LeagueRepo._ensure_table_columns(cur, table, columns)
EnsureColumnsFn = Callable[[sqlite3.Cursor, str, Mapping[str, str]], None]

# Order matters once more modules reference core tables.
DEFAULT_MODULES = (core,)


def apply_schema(
    cur: sqlite3.Cursor,
    *,
    now: str,
    schema_version: str,
    ensure_columns: EnsureColumnsFn,
    modules: Iterable[ModuleType] = DEFAULT_MODULES,
) -> None:
    """Apply the schema and migrations.

    Steps:
    1) executescript(concat(ddl)) for every module
    2) run migrate() for modules that define it
    """
    modules = tuple(modules)
    cur.executescript("\n\n".join(m.ddl(now=now, schema_version=schema_version) for m in modules))

    for m in modules:
        migrate = getattr(m, "migrate", None)
        if migrate is None:
            continue
        migrate(cur, ensure_columns=ensure_columns)

    logger.debug("SCHEMA_APPLIED version=%s modules=%s", schema_version, [m.__name__ for m in modules])
