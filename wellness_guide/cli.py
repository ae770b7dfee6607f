"""
Wellness Guide — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Resolve the assessment catalog (built-in or ``assessment.catalog_file``).
  4. Execute the action.
  5. Report result to stdout.

Install and run::

    pip install -e .
    wellness-guide --help
    wellness-guide init-db
    wellness-guide show-questions
    wellness-guide take-assessment --user alice
    wellness-guide recommend "High" "5-6 hours" "Never" "Managing anxiety" \\
        "Mood tracking" "Evening" --explain
    wellness-guide history --user alice
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="wellness-guide",
    help="Wellness assessment with rule-based personal recommendations.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from wellness_guide.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from wellness_guide.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_catalog_or_exit(config):
    """Resolve the configured catalog, exiting with code 1 if it is invalid."""
    from wellness_guide.catalog.loader import CatalogError, resolve_catalog

    try:
        return resolve_catalog(config.assessment.catalog_file, config.assessment.quota)
    except (FileNotFoundError, CatalogError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _catalog_source(config) -> str:
    catalog_file = config.assessment.catalog_file
    return Path(catalog_file).name if catalog_file else "builtin"


def _persist(config, user_id: str, completed, db_path: Optional[str] = None):
    """Open the store and save ``completed``; connection failures become unsaved outcomes."""
    from wellness_guide.assessment.service import SaveOutcome, build_result, save_result
    from wellness_guide.db.connection import get_connection
    from wellness_guide.db.migrations import initialize_database

    source = _catalog_source(config)
    try:
        with get_connection(
            db_path or config.database.db_path,
            wal_mode=config.database.wal_mode,
            busy_timeout_ms=config.database.busy_timeout_ms,
        ) as conn:
            initialize_database(conn)
            return save_result(conn, user_id, completed, catalog_source=source)
    except (sqlite3.Error, OSError) as exc:
        return SaveOutcome(
            result=build_result(user_id, completed, source),
            saved=False,
            error=str(exc),
        )


def _print_recommendations(recommendations) -> None:
    from wellness_guide.recommendations.reporter import format_recommendations

    typer.echo("Your personalized wellness recommendations:")
    typer.echo(format_recommendations(recommendations))


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(
        None,
        "--db-path",
        help="Override DB path from config (e.g. data/db/test.db).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Initialize the SQLite result store and apply pending migrations.

    Safe to run multiple times.
    """
    from wellness_guide.db.connection import get_connection
    from wellness_guide.db.migrations import initialize_database
    from wellness_guide.db.schema import ALL_TABLE_NAMES

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_path = db_path or config.database.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with get_connection(
        target_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        migrations_applied = initialize_database(conn)

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo(f"  Migrations applied: {migrations_applied}")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file (and catalog) and print parsed values."""
    config = _load_config_or_exit(config_path)
    catalog = _load_catalog_or_exit(config)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:    {config.database.db_path}")
    typer.echo(f"  Catalog:          {_catalog_source(config)}")
    typer.echo(f"  Questions:        {catalog.question_count}")
    typer.echo(f"  Trigger rules:    {len(catalog.rules)}")
    typer.echo(f"  Quota:            {catalog.quota}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("show-questions")
def show_questions(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List the assessment questions and their options."""
    config = _load_config_or_exit(config_path)
    catalog = _load_catalog_or_exit(config)

    for question in catalog.questions:
        typer.echo(f"{question.ordinal}. {question.prompt}  [{question.topic.value}]")
        for number, option in enumerate(question.options, start=1):
            typer.echo(f"     {number}) {option}")


@app.command("take-assessment")
def take_assessment(
    user_id: Optional[str] = typer.Option(
        None,
        "--user",
        "-u",
        help="User identifier (default: assessment.default_user_id).",
    ),
    answers: Optional[list[str]] = typer.Option(
        None,
        "--answer",
        "-a",
        help="Answer text, repeated once per question in order. Omit to answer interactively.",
    ),
    no_save: bool = typer.Option(
        False,
        "--no-save",
        help="Show recommendations without storing the result.",
    ),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Run the wellness assessment and show personalized recommendations.

    Questions are asked one at a time; pick an option by its number.
    """
    from wellness_guide.assessment.runner import AssessmentError, AssessmentSession

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    catalog = _load_catalog_or_exit(config)
    user = user_id or config.assessment.default_user_id

    session = AssessmentSession(catalog)

    if answers:
        if len(answers) != catalog.question_count:
            typer.echo(
                f"[ERROR] Expected {catalog.question_count} answers, got {len(answers)}.",
                err=True,
            )
            raise typer.Exit(code=1)
        try:
            for text in answers:
                session.answer(text)
        except AssessmentError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)
    else:
        typer.echo("Wellness Assessment")
        while not session.is_complete:
            question = session.current_question
            typer.echo("")
            typer.echo(
                f"Question {question.ordinal} of {catalog.question_count}: {question.prompt}"
            )
            for number, option in enumerate(question.options, start=1):
                typer.echo(f"  {number}) {option}")
            choice = typer.prompt("Choose an option", type=int)
            try:
                session.answer_by_number(choice)
            except AssessmentError as exc:
                typer.echo(f"  {exc}", err=True)

    completed = session.state
    typer.echo("")
    _print_recommendations(completed.recommendations)

    if no_save:
        return

    outcome = _persist(config, user, completed, db_path)
    typer.echo("")
    if outcome.saved:
        typer.echo(f"[OK] Result saved (id {outcome.result.result_id}).")
    else:
        typer.echo(f"[WARN] Could not save your results: {outcome.error}", err=True)


@app.command("recommend")
def recommend(
    answers: list[str] = typer.Argument(..., help="Answers in question order."),
    explain: bool = typer.Option(False, "--explain", help="Show which rules fired."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Derive recommendations from answers without storing anything.

    Answers are not checked against the question options; unknown text only
    means fewer rules fire.
    """
    from wellness_guide.recommendations.deriver import RecommendationDeriver

    config = _load_config_or_exit(config_path)
    catalog = _load_catalog_or_exit(config)
    deriver = RecommendationDeriver(catalog)

    _print_recommendations(deriver.derive(answers))

    if explain:
        typer.echo("")
        hits = deriver.explain(answers)
        if not hits:
            typer.echo("No rules fired; defaults only.")
        for hit in hits:
            typer.echo(
                f"  rule [{hit.rule.topic.value}] answer {hit.rule.answer_index + 1} "
                f"contains '{hit.rule.keyword}' -> {len(hit.added)} new"
            )


@app.command("history")
def history(
    user_id: Optional[str] = typer.Option(None, "--user", "-u", help="User identifier."),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum results to show."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show stored assessment results, newest first."""
    from wellness_guide.db.connection import get_connection
    from wellness_guide.db.migrations import initialize_database
    from wellness_guide.db.repositories.result_repo import AssessmentResultRepository
    from wellness_guide.recommendations.reporter import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = user_id or config.assessment.default_user_id

    with get_connection(
        db_path or config.database.db_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        initialize_database(conn)
        results = AssessmentResultRepository(conn).list_for_user(user, limit=limit)

    if not results:
        typer.echo(f"No stored results for user '{user}'.")
        return

    for result in results:
        typer.echo(f"#{result.result_id}  {result.completed_at.isoformat()}")
        typer.echo(format_recommendations(result.recommendations))
        typer.echo("")


@app.command("export-results")
def export_results(
    user_id: Optional[str] = typer.Option(None, "--user", "-u", help="User identifier."),
    output_dir: str = typer.Option(
        "data/outputs/results", "--output-dir", "-o", help="Directory for exported files."
    ),
    fmt: str = typer.Option("json", "--format", help="Output format: json or csv."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Export a user's stored results to JSON or CSV."""
    from wellness_guide.db.connection import get_connection
    from wellness_guide.db.migrations import initialize_database
    from wellness_guide.db.repositories.result_repo import AssessmentResultRepository
    from wellness_guide.recommendations.reporter import write_results_csv, write_results_json

    if fmt not in ("json", "csv"):
        typer.echo(f"[ERROR] Unknown format '{fmt}'; use json or csv.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = user_id or config.assessment.default_user_id

    with get_connection(
        db_path or config.database.db_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        initialize_database(conn)
        results = AssessmentResultRepository(conn).list_for_user(user)

    writer = write_results_json if fmt == "json" else write_results_csv
    path = writer(results, Path(output_dir), user)
    typer.echo(f"[OK] Exported {len(results)} result(s) to {path}")


@app.command("export-catalog")
def export_catalog(
    output_path: str = typer.Argument(..., help="Destination JSON file."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Write the active assessment catalog to a JSON file for editing."""
    from wellness_guide.catalog.loader import dump_catalog

    config = _load_config_or_exit(config_path)
    catalog = _load_catalog_or_exit(config)
    path = dump_catalog(catalog, Path(output_path))
    typer.echo(f"[OK] Catalog written to {path}")


if __name__ == "__main__":
    app()
