"""
Sequential schema migrations for the result store.

  1. A ``schema_versions`` table tracks applied migration IDs.
  2. Each migration is a function taking a ``sqlite3.Connection``.
  3. ``run_migrations()`` applies any migrations not yet recorded, in
     ``MIGRATIONS`` insertion order.

The base schema comes from ``apply_schema()``; migrations hold incremental
changes only.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable

from wellness_guide.db.schema import apply_schema, get_table_columns

logger = logging.getLogger(__name__)

MigrationFn = Callable[[sqlite3.Connection], None]


def _ensure_version_table(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_versions (
            version_id  TEXT    NOT NULL PRIMARY KEY,
            applied_at  TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
            description TEXT
        );
    """)
    conn.commit()


def _get_applied_versions(conn: sqlite3.Connection) -> set[str]:
    rows = conn.execute("SELECT version_id FROM schema_versions;").fetchall()
    return {row[0] for row in rows}


def _mark_applied(conn: sqlite3.Connection, version_id: str, description: str) -> None:
    conn.execute(
        "INSERT INTO schema_versions(version_id, description) VALUES (?, ?);",
        (version_id, description),
    )
    conn.commit()


# ── Migration functions ────────────────────────────────────────────────────────

def migration_0001_baseline(conn: sqlite3.Connection) -> None:
    """Baseline marker; the initial tables come from apply_schema()."""


def migration_0002_add_catalog_source(conn: sqlite3.Connection) -> None:
    """Record which catalog (built-in or file name) produced each result."""
    if "catalog_source" not in get_table_columns(conn, "assessment_results"):
        conn.execute(
            "ALTER TABLE assessment_results "
            "ADD COLUMN catalog_source TEXT NOT NULL DEFAULT 'builtin';"
        )
    conn.commit()


# ── Registry ──────────────────────────────────────────────────────────────────

MIGRATIONS: dict[str, tuple[MigrationFn, str]] = {
    "0001_baseline": (
        migration_0001_baseline,
        "Baseline: schema_versions table created",
    ),
    "0002_catalog_source": (
        migration_0002_add_catalog_source,
        "Add catalog_source to assessment_results",
    ),
}


def run_migrations(conn: sqlite3.Connection) -> int:
    """Apply all pending migrations.

    Returns:
        Number of migrations applied in this call.
    """
    _ensure_version_table(conn)
    applied = _get_applied_versions(conn)

    count = 0
    for version_id, (fn, description) in MIGRATIONS.items():
        if version_id in applied:
            continue

        logger.info("Applying migration %s: %s", version_id, description)
        try:
            fn(conn)
            _mark_applied(conn, version_id, description)
            count += 1
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("Migration %s FAILED: %s", version_id, exc)
            raise

    return count


def initialize_database(conn: sqlite3.Connection) -> int:
    """Apply the base schema and any pending migrations.

    Returns:
        Number of migrations applied.
    """
    apply_schema(conn)
    return run_migrations(conn)
