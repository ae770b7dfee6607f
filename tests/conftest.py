"""
Shared pytest fixtures for the Wellness Guide test suite.

Provides:
  - ``in_memory_db``: a fresh in-memory SQLite connection with the schema
    and all migrations applied.
  - Reference answer sets used across deriver, runner and CLI tests.
  - ``small_catalog``: a two-question catalog for substitution tests.
"""

from __future__ import annotations

import sqlite3
from typing import Generator

import pytest

from wellness_guide.db.connection import configure_connection
from wellness_guide.db.migrations import initialize_database
from wellness_guide.models.assessment import AssessmentCatalog, Question, TriggerRule


# ── Database fixture ──────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the full schema applied."""
    conn = configure_connection(sqlite3.connect(":memory:"), wal_mode=False)
    initialize_database(conn)
    yield conn
    conn.close()


# ── Answer sets ───────────────────────────────────────────────────────────────

@pytest.fixture
def all_trigger_answers() -> list[str]:
    """Answers that fire every topic's rule."""
    return [
        "Very high", "Less than 5 hours", "Never",
        "Managing anxiety", "Habit building", "Early morning",
    ]


@pytest.fixture
def no_trigger_answers() -> list[str]:
    """Valid answers that match none of the rule keywords."""
    return [
        "Very low", "More than 8 hours", "Daily",
        "Staying motivated", "Regular check-ins", "Night",
    ]


# ── Catalog fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def small_catalog() -> AssessmentCatalog:
    """Two questions, two rules, three defaults, quota 3."""
    return AssessmentCatalog(
        questions=(
            Question(ordinal=1, prompt="Energy today?", options=("Low", "High")),
            Question(ordinal=2, prompt="Walked today?", options=("Yes", "No")),
        ),
        rules=(
            TriggerRule(answer_index=0, keyword="Low", recommendations=("Rest early",)),
            TriggerRule(answer_index=1, keyword="No",
                        recommendations=("Take a walk", "Rest early")),
        ),
        defaults=("Drink water", "Stretch", "Take a walk"),
        quota=3,
    )
