"""
Base repository with the shared SQLite helpers.

Repositories receive an open ``sqlite3.Connection`` (normally from
``get_connection()``) and never commit or close it themselves; the
connection context manager owns the transaction.  All SQL is explicit (no
ORM) and repositories speak Pydantic models, not raw rows.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Optional

logger = logging.getLogger(__name__)

Params = tuple[Any, ...] | dict[str, Any]


class BaseRepository:
    """Shared SQL execution helpers.

    Attributes:
        conn: The active ``sqlite3.Connection``.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def execute(self, sql: str, params: Params = ()) -> sqlite3.Cursor:
        logger.debug("SQL: %s | params: %s", sql.strip(), params)
        return self.conn.execute(sql, params)

    def fetchone(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        return self.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: Params = ()) -> list[sqlite3.Row]:
        return self.execute(sql, params).fetchall()

    @staticmethod
    def to_json(values: Any) -> str:
        """Encode a list/tuple column value as JSON text."""
        return json.dumps(list(values), ensure_ascii=False)

    @staticmethod
    def from_json(text: Optional[str]) -> tuple[str, ...]:
        """Decode a JSON array column; ``NULL`` becomes an empty tuple."""
        if text is None:
            return ()
        return tuple(json.loads(text))
