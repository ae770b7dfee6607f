"""
Repository for completed assessment results.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Optional

from wellness_guide.db.repositories.base import BaseRepository
from wellness_guide.models.result import AssessmentResult

logger = logging.getLogger(__name__)


class AssessmentResultRepository(BaseRepository):
    """Read/write access to ``assessment_results``."""

    def insert(self, result: AssessmentResult) -> int:
        """Insert a result and return its ``result_id``."""
        cursor = self.execute(
            """
            INSERT INTO assessment_results (
                user_id, responses, recommendations, completed_at, catalog_source
            ) VALUES (?, ?, ?, ?, ?);
            """,
            (
                result.user_id,
                self.to_json(result.responses),
                self.to_json(result.recommendations),
                result.completed_at.isoformat(),
                result.catalog_source,
            ),
        )
        result_id = int(cursor.lastrowid)
        logger.info("Stored assessment result %d for user %s", result_id, result.user_id)
        return result_id

    def get_by_id(self, result_id: int) -> Optional[AssessmentResult]:
        row = self.fetchone(
            "SELECT * FROM assessment_results WHERE result_id = ?;", (result_id,)
        )
        return self._row_to_result(row) if row else None

    def get_latest_for_user(self, user_id: str) -> Optional[AssessmentResult]:
        """Return the most recently completed result for ``user_id``, if any."""
        row = self.fetchone(
            """
            SELECT * FROM assessment_results
            WHERE user_id = ?
            ORDER BY completed_at DESC, result_id DESC
            LIMIT 1;
            """,
            (user_id,),
        )
        return self._row_to_result(row) if row else None

    def list_for_user(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> list[AssessmentResult]:
        """Return results for ``user_id``, newest first.

        Args:
            user_id: User identifier.
            limit: Maximum rows to return; ``None`` for all.
        """
        sql = """
            SELECT * FROM assessment_results
            WHERE user_id = ?
            ORDER BY completed_at DESC, result_id DESC
        """
        params: tuple = (user_id,)
        if limit is not None:
            sql += " LIMIT ?"
            params = (user_id, limit)
        return [self._row_to_result(r) for r in self.fetchall(sql + ";", params)]

    def count_for_user(self, user_id: str) -> int:
        row = self.fetchone(
            "SELECT COUNT(*) AS n FROM assessment_results WHERE user_id = ?;",
            (user_id,),
        )
        return int(row["n"]) if row else 0

    def _row_to_result(self, row: sqlite3.Row) -> AssessmentResult:
        return AssessmentResult(
            result_id=row["result_id"],
            user_id=row["user_id"],
            responses=self.from_json(row["responses"]),
            recommendations=self.from_json(row["recommendations"]),
            completed_at=datetime.fromisoformat(row["completed_at"]),
            catalog_source=row["catalog_source"],
        )
