"""
SQLite connection management for the result store.

``get_connection()`` is a context manager that:
  - Creates the database file's parent directories on first use.
  - Enables foreign key enforcement and a busy timeout.
  - Enables WAL journal mode (skipped for ``":memory:"``).
  - Uses ``sqlite3.Row`` so rows can be read by column name.
  - Commits on clean exit, rolls back on exception.

Usage::

    from wellness_guide.db.connection import get_connection

    with get_connection("data/db/wellness_guide.db") as conn:
        AssessmentResultRepository(conn).insert(result)
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def configure_connection(
    conn: sqlite3.Connection,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> sqlite3.Connection:
    """Apply row factory and pragmas to an already-open connection."""
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.execute(f"PRAGMA busy_timeout = {int(busy_timeout_ms)};")
    if wal_mode:
        conn.execute("PRAGMA journal_mode = WAL;")
    return conn


@contextmanager
def get_connection(
    db_path: str,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> Generator[sqlite3.Connection, None, None]:
    """Yield a configured SQLite connection; commit on success, roll back on error.

    Args:
        db_path: Database file path, or ``":memory:"``.
        wal_mode: Enable WAL journal mode (ignored for in-memory databases).
        busy_timeout_ms: Lock wait before ``OperationalError`` is raised.

    Raises:
        sqlite3.OperationalError: If the database cannot be opened or is locked.
    """
    in_memory = db_path == MEMORY_DB
    if not in_memory:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, timeout=busy_timeout_ms / 1000)
    logger.debug("Opened SQLite connection: %s", db_path)

    try:
        configure_connection(conn, wal_mode=wal_mode and not in_memory,
                             busy_timeout_ms=busy_timeout_ms)
        yield conn
        conn.commit()

    except Exception:
        conn.rollback()
        raise

    finally:
        conn.close()
