"""Tests for recommendation rendering and result export."""

from __future__ import annotations

import csv
import json
from datetime import date, datetime, timezone

from wellness_guide.models.result import AssessmentResult
from wellness_guide.recommendations.reporter import (
    format_recommendations,
    write_results_csv,
    write_results_json,
)

_RESULT = AssessmentResult(
    result_id=7,
    user_id="alice",
    responses=("High", "Night"),
    recommendations=("Rest early", "Drink water"),
    completed_at=datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc),
)


def test_format_numbers_lines():
    assert format_recommendations(["a", "b"]) == "  1. a\n  2. b"


def test_format_empty():
    assert format_recommendations([]) == "No recommendations available."


def test_write_json(tmp_path):
    path = write_results_json([_RESULT], tmp_path / "out", "alice", run_date=date(2026, 3, 2))
    assert path.name == "assessment_results_alice_2026-03-02.json"

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["user_id"] == "alice"
    assert payload["results"][0]["result_id"] == 7
    assert payload["results"][0]["recommendations"] == ["Rest early", "Drink water"]


def test_write_csv_one_row_per_recommendation(tmp_path):
    path = write_results_csv([_RESULT], tmp_path, "alice", run_date=date(2026, 3, 2))
    with path.open(encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["rank"] for r in rows] == ["1", "2"]
    assert rows[1]["recommendation"] == "Drink water"
    assert rows[0]["responses"] == "High | Night"


def test_unsafe_user_id_sanitised_in_filename(tmp_path):
    path = write_results_json([], tmp_path, "a/b c", run_date=date(2026, 3, 2))
    assert path.name == "assessment_results_a_b_c_2026-03-02.json"
