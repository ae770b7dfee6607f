"""
Assessment catalog loader: JSON file <-> ``AssessmentCatalog``.

File format
-----------
::

    {
      "quota": 4,
      "questions": [
        {"ordinal": 1, "prompt": "...", "options": ["...", "..."], "topic": "stress"}
      ],
      "rules": [
        {"answer_index": 0, "keyword": "High", "recommendations": ["..."],
         "topic": "stress"}
      ],
      "defaults": ["...", "..."]
    }

``quota``, ``rules``, ``defaults`` and every ``topic`` are optional.

Validation
----------
All questions and rules are validated before anything is returned.  If
**any** entry fails, a single ``CatalogError`` lists the first 10 problems,
plus any catalog-level inconsistency (ordinal gaps, rules pointing past the
last question, blank or duplicate defaults).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from wellness_guide.models.assessment import AssessmentCatalog, Question, TriggerRule
from wellness_guide.recommendations.rules import DEFAULT_CATALOG

logger = logging.getLogger(__name__)

_MAX_SHOWN = 10


class CatalogError(ValueError):
    """Raised when a catalog file cannot be parsed or fails validation."""


def load_catalog(path: Path) -> AssessmentCatalog:
    """Load and validate a catalog JSON file.

    Args:
        path: Path to the JSON catalog.

    Returns:
        Validated ``AssessmentCatalog``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogError: On an unreadable file, malformed JSON or any
            validation failure.
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog {path.name} is not valid JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogError(f"Catalog {path.name} could not be read: {exc}") from exc

    catalog = parse_catalog(raw, source=path.name)
    logger.info(
        "Loaded catalog %s: %d question(s), %d rule(s), %d default(s), quota=%d",
        path.name,
        catalog.question_count,
        len(catalog.rules),
        len(catalog.defaults),
        catalog.quota,
    )
    return catalog


def parse_catalog(raw: Any, source: str = "<catalog>") -> AssessmentCatalog:
    """Validate a decoded catalog dict and build an ``AssessmentCatalog``."""
    if not isinstance(raw, dict):
        raise CatalogError(f"Catalog {source} must be a JSON object.")

    errors: list[str] = []

    questions: list[Question] = []
    for i, rec in enumerate(_as_list(raw.get("questions"), "questions", errors)):
        try:
            questions.append(Question(**_as_dict(rec)))
        except (TypeError, ValueError, ValidationError) as exc:
            errors.append(f"questions[{i}]: {_first_line(exc)}")

    rules: list[TriggerRule] = []
    for i, rec in enumerate(_as_list(raw.get("rules", []), "rules", errors)):
        try:
            rules.append(TriggerRule(**_as_dict(rec)))
        except (TypeError, ValueError, ValidationError) as exc:
            errors.append(f"rules[{i}]: {_first_line(exc)}")

    defaults = _as_list(raw.get("defaults", []), "defaults", errors)
    seen: set[str] = set()
    for i, rec in enumerate(defaults):
        if not isinstance(rec, str) or not rec.strip():
            errors.append(f"defaults[{i}]: must be a non-empty string.")
        elif rec in seen:
            errors.append(f"defaults[{i}]: duplicate default '{rec}'.")
        else:
            seen.add(rec)

    if not errors:
        try:
            return AssessmentCatalog(
                questions=tuple(questions),
                rules=tuple(rules),
                defaults=tuple(defaults),
                quota=raw.get("quota", DEFAULT_CATALOG.quota),
            )
        except ValidationError as exc:
            errors.extend(err["msg"] for err in exc.errors())

    detail = "\n".join(f"  {msg}" for msg in errors[:_MAX_SHOWN])
    suffix = (
        f"\n  … and {len(errors) - _MAX_SHOWN} more" if len(errors) > _MAX_SHOWN else ""
    )
    raise CatalogError(
        f"{len(errors)} problem(s) in catalog {source}:\n{detail}{suffix}"
    )


def resolve_catalog(catalog_file: Optional[str], quota: Optional[int] = None) -> AssessmentCatalog:
    """Return the catalog named by config, or the built-in one.

    Args:
        catalog_file: Path from ``AssessmentConfig.catalog_file``; empty or
            ``None`` selects ``DEFAULT_CATALOG``.
        quota: Optional quota override applied on top of the catalog's own.
    """
    catalog = load_catalog(Path(catalog_file)) if catalog_file else DEFAULT_CATALOG
    if quota is not None and quota != catalog.quota:
        catalog = catalog.with_quota(quota)
    return catalog


def dump_catalog(catalog: AssessmentCatalog, path: Path) -> Path:
    """Write ``catalog`` to ``path`` in the loader's JSON format."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = catalog.model_dump(mode="json")
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Catalog written: %s", path)
    return path


# ── Private helpers ────────────────────────────────────────────────────────────

def _as_list(value: Any, field: str, errors: list[str]) -> list[Any]:
    if value is None:
        errors.append(f"'{field}' is required.")
        return []
    if not isinstance(value, list):
        errors.append(f"'{field}' must be a list.")
        return []
    return value


def _as_dict(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError("entry must be an object.")
    return value


def _first_line(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'entry'}: {err['msg']}"
            for err in exc.errors()
        )
    return str(exc).splitlines()[0] if str(exc) else type(exc).__name__
