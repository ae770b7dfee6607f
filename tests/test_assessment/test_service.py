"""Tests for persisting completed assessments via save_result()."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

from wellness_guide.assessment.runner import Completed
from wellness_guide.assessment.service import build_result, save_result
from wellness_guide.db.repositories.result_repo import AssessmentResultRepository

_COMPLETED = Completed(
    answers=("High", "5-6 hours", "Often", "Finding balance", "Goal setting", "Night"),
    recommendations=("a", "b", "c", "d"),
)


class TestSaveResult:
    def test_saved_result_gets_id(self, in_memory_db):
        outcome = save_result(in_memory_db, "alice", _COMPLETED)
        assert outcome.saved is True
        assert outcome.error is None
        assert outcome.result.result_id is not None

        stored = AssessmentResultRepository(in_memory_db).get_by_id(outcome.result.result_id)
        assert stored is not None
        assert stored.responses == _COMPLETED.answers
        assert stored.recommendations == _COMPLETED.recommendations

    def test_completed_at_defaults_to_utc_now(self, in_memory_db):
        before = datetime.now(tz=timezone.utc)
        outcome = save_result(in_memory_db, "alice", _COMPLETED)
        assert outcome.result.completed_at >= before

    def test_storage_failure_keeps_recommendations(self, in_memory_db):
        in_memory_db.execute("DROP TABLE assessment_results;")
        outcome = save_result(in_memory_db, "alice", _COMPLETED)

        assert outcome.saved is False
        assert outcome.error
        assert outcome.result.result_id is None
        assert outcome.recommendations == _COMPLETED.recommendations

    def test_closed_connection_reports_error(self):
        conn = sqlite3.connect(":memory:")
        conn.close()
        outcome = save_result(conn, "alice", _COMPLETED)
        assert outcome.saved is False
        assert outcome.recommendations == ("a", "b", "c", "d")


def test_build_result_carries_catalog_source():
    ts = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)
    result = build_result("bob", _COMPLETED, catalog_source="custom.json", completed_at=ts)
    assert result.catalog_source == "custom.json"
    assert result.completed_at == ts
    assert result.result_id is None
