"""
Hand-off from a completed assessment to the result store.

``save_result()`` persists the answers and recommendations of a ``Completed``
session.  A storage failure never touches the recommendations: the caller
always gets them back in ``SaveOutcome.result`` and decides how to show a
"could not save" notice.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from wellness_guide.assessment.runner import Completed
from wellness_guide.db.repositories.result_repo import AssessmentResultRepository
from wellness_guide.models.result import AssessmentResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveOutcome:
    """Result of trying to persist a completed assessment.

    Attributes:
        result: The result record; ``result.result_id`` is set only when saved.
        saved:  True if the row was written.
        error:  Storage error message when ``saved`` is False.
    """

    result: AssessmentResult
    saved:  bool
    error:  Optional[str] = None

    @property
    def recommendations(self) -> tuple[str, ...]:
        return self.result.recommendations


def build_result(
    user_id: str,
    completed: Completed,
    catalog_source: str = "builtin",
    completed_at: Optional[datetime] = None,
) -> AssessmentResult:
    """Wrap a ``Completed`` state into an unsaved ``AssessmentResult``."""
    return AssessmentResult(
        user_id=user_id,
        responses=completed.answers,
        recommendations=completed.recommendations,
        completed_at=completed_at or datetime.now(tz=timezone.utc),
        catalog_source=catalog_source,
    )


def save_result(
    conn: sqlite3.Connection,
    user_id: str,
    completed: Completed,
    catalog_source: str = "builtin",
    completed_at: Optional[datetime] = None,
) -> SaveOutcome:
    """Persist a completed assessment.

    Args:
        conn: Open connection with the schema applied.
        user_id: Owner of the result.
        completed: Final runner state.
        catalog_source: Label of the catalog that produced the result.
        completed_at: Completion time; defaults to now (UTC).

    Returns:
        ``SaveOutcome``; on ``sqlite3.Error`` the error is logged and returned
        instead of raised.
    """
    result = build_result(user_id, completed, catalog_source, completed_at)
    try:
        result_id = AssessmentResultRepository(conn).insert(result)
        conn.commit()
    except sqlite3.Error as exc:
        logger.error("Could not save assessment result for user %s: %s", user_id, exc)
        try:
            conn.rollback()
        except sqlite3.Error:
            logger.debug("Rollback after failed save also failed", exc_info=True)
        return SaveOutcome(result=result, saved=False, error=str(exc))

    return SaveOutcome(result=result.model_copy(update={"result_id": result_id}), saved=True)
