"""
SQLite schema DDL for the result store.

All statements use ``IF NOT EXISTS`` so ``apply_schema()`` is idempotent.

Tables
------
  assessment_results  -- one row per completed assessment; ``responses`` and
                         ``recommendations`` are JSON arrays of strings.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

_DDL_ASSESSMENT_RESULTS = """
CREATE TABLE IF NOT EXISTS assessment_results (
    result_id        INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id          TEXT    NOT NULL,
    responses        TEXT    NOT NULL,
    recommendations  TEXT    NOT NULL,
    completed_at     TEXT    NOT NULL,
    created_at       TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
"""

_DDL_ASSESSMENT_RESULTS_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_results_user_time
    ON assessment_results(user_id, completed_at DESC);
"""

_ALL_DDL = [
    _DDL_ASSESSMENT_RESULTS,
    _DDL_ASSESSMENT_RESULTS_INDEXES,
]

ALL_TABLE_NAMES = [
    "assessment_results",
]


def apply_schema(conn: sqlite3.Connection) -> None:
    """Apply all DDL statements to ``conn``.  Safe to call repeatedly."""
    for ddl in _ALL_DDL:
        for statement in _split_ddl(ddl):
            conn.execute(statement)

    conn.commit()
    logger.debug("Schema applied: %d table(s) created/verified.", len(ALL_TABLE_NAMES))


def _split_ddl(ddl: str) -> list[str]:
    """Split a multi-statement DDL block on semicolons."""
    return [s.strip() for s in ddl.split(";") if s.strip()]


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    """Return table names present in the database, sorted."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name;"
    ).fetchall()
    return [row[0] for row in rows]


def get_existing_indexes(conn: sqlite3.Connection) -> list[str]:
    """Return index names present in the database, sorted."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='index' ORDER BY name;"
    ).fetchall()
    return [row[0] for row in rows]


def get_table_columns(conn: sqlite3.Connection, table: str) -> set[str]:
    """Return the column names of ``table``."""
    return {row[1] for row in conn.execute(f"PRAGMA table_info({table});").fetchall()}
