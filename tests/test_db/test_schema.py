"""Tests for the SQLite schema, migrations and connection helper."""

from __future__ import annotations

import sqlite3

import pytest

from wellness_guide.db.connection import get_connection
from wellness_guide.db.migrations import MIGRATIONS, initialize_database, run_migrations
from wellness_guide.db.schema import (
    ALL_TABLE_NAMES,
    apply_schema,
    get_existing_indexes,
    get_existing_tables,
    get_table_columns,
)


class TestApplySchema:
    def test_all_tables_created(self, in_memory_db):
        tables = get_existing_tables(in_memory_db)
        for expected in ALL_TABLE_NAMES:
            assert expected in tables

    def test_idempotent_double_apply(self, in_memory_db):
        apply_schema(in_memory_db)
        assert "assessment_results" in get_existing_tables(in_memory_db)

    def test_user_time_index(self, in_memory_db):
        assert "idx_results_user_time" in get_existing_indexes(in_memory_db)

    def test_foreign_keys_on(self, in_memory_db):
        assert in_memory_db.execute("PRAGMA foreign_keys;").fetchone()[0] == 1


class TestMigrations:
    def test_all_recorded(self, in_memory_db):
        rows = in_memory_db.execute("SELECT version_id FROM schema_versions;").fetchall()
        assert {r[0] for r in rows} == set(MIGRATIONS)

    def test_second_run_applies_nothing(self, in_memory_db):
        assert run_migrations(in_memory_db) == 0

    def test_catalog_source_column_added(self, in_memory_db):
        assert "catalog_source" in get_table_columns(in_memory_db, "assessment_results")

    def test_fresh_database_applies_every_migration(self):
        conn = sqlite3.connect(":memory:")
        try:
            assert initialize_database(conn) == len(MIGRATIONS)
        finally:
            conn.close()


class TestGetConnection:
    def test_creates_parent_dirs_and_commits(self, tmp_path):
        db_path = tmp_path / "nested" / "store.db"
        with get_connection(str(db_path)) as conn:
            initialize_database(conn)
            conn.execute(
                "INSERT INTO assessment_results (user_id, responses, recommendations, completed_at) "
                "VALUES ('u', '[]', '[]', '2026-01-01T00:00:00+00:00');"
            )

        assert db_path.exists()
        with get_connection(str(db_path)) as conn:
            assert conn.execute("SELECT COUNT(*) FROM assessment_results;").fetchone()[0] == 1

    def test_rolls_back_on_error(self, tmp_path):
        db_path = str(tmp_path / "store.db")
        with get_connection(db_path) as conn:
            initialize_database(conn)

        with pytest.raises(RuntimeError):
            with get_connection(db_path) as conn:
                conn.execute(
                    "INSERT INTO assessment_results (user_id, responses, recommendations, completed_at) "
                    "VALUES ('u', '[]', '[]', '2026-01-01T00:00:00+00:00');"
                )
                raise RuntimeError("boom")

        with get_connection(db_path) as conn:
            assert conn.execute("SELECT COUNT(*) FROM assessment_results;").fetchone()[0] == 0

    def test_memory_db_rows_by_name(self):
        with get_connection(":memory:") as conn:
            row = conn.execute("SELECT 1 AS one;").fetchone()
            assert row["one"] == 1
