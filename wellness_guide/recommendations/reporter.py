"""
Recommendation rendering and result export.

``format_recommendations`` builds the numbered plain-text block printed by
the CLI.  ``write_results_json`` / ``write_results_csv`` export a user's
stored assessment history to files.  No DB access here; callers pass in the
``AssessmentResult`` objects they fetched.

Output files
------------
  <output_dir>/
    assessment_results_{user}_{date}.json
    assessment_results_{user}_{date}.csv
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from wellness_guide.models.result import AssessmentResult

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1"


def format_recommendations(recommendations: Sequence[str]) -> str:
    """Return recommendations as a numbered, newline-separated block."""
    if not recommendations:
        return "No recommendations available."
    return "\n".join(
        f"  {rank}. {rec}" for rank, rec in enumerate(recommendations, start=1)
    )


def _safe_user(user_id: str) -> str:
    return "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in user_id)


def write_results_json(
    results: Sequence[AssessmentResult],
    output_dir: Path,
    user_id: str,
    run_date: date | None = None,
) -> Path:
    """Write assessment results to a structured JSON file.

    Args:
        results:    Results to export, in the order they should appear.
        output_dir: Target directory (created if missing).
        user_id:    Used in the filename and metadata.
        run_date:   Date label for the filename. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"assessment_results_{_safe_user(user_id)}_{run_date}.json"

    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "user_id":        user_id,
        "generated_at":   run_date.isoformat(),
        "results": [
            {
                "result_id":       r.result_id,
                "completed_at":    r.completed_at.isoformat(),
                "responses":       list(r.responses),
                "recommendations": list(r.recommendations),
            }
            for r in results
        ],
    }

    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Results JSON written: %s (%d result(s))", json_path, len(results))
    return json_path


def write_results_csv(
    results: Sequence[AssessmentResult],
    output_dir: Path,
    user_id: str,
    run_date: date | None = None,
) -> Path:
    """Write assessment results to CSV, one row per recommendation.

    Columns: result_id, completed_at, rank, recommendation, responses.
    ``responses`` is the answer list joined with `` | ``.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"assessment_results_{_safe_user(user_id)}_{run_date}.csv"

    fieldnames = ["result_id", "completed_at", "rank", "recommendation", "responses"]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            for rank, rec in enumerate(r.recommendations, start=1):
                writer.writerow(
                    {
                        "result_id":      r.result_id,
                        "completed_at":   r.completed_at.isoformat(),
                        "rank":           rank,
                        "recommendation": rec,
                        "responses":      " | ".join(r.responses),
                    }
                )

    logger.info("Results CSV written: %s", csv_path)
    return csv_path
