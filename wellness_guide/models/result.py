"""
Stored assessment result.

``AssessmentResult`` is what the result store persists once an assessment
has been completed: the user's answers and the derived recommendations,
keyed by user and completion time.  Frozen: results are append-only
history and are never edited after insertion.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class AssessmentResult(BaseModel):
    """One completed assessment.

    Attributes:
        result_id: Auto-assigned DB PK; ``None`` before insertion.
        user_id: Identifier of the user who took the assessment.
        responses: Answers in question order.
        recommendations: Derived recommendations in output order.
        completed_at: UTC datetime the assessment was completed.
        catalog_source: ``"builtin"`` or the catalog file name used.
    """

    model_config = ConfigDict(frozen=True)

    result_id: Optional[int] = None
    user_id: str
    responses: tuple[str, ...]
    recommendations: tuple[str, ...]
    completed_at: datetime
    catalog_source: str = "builtin"

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("user_id must not be empty.")
        return v.strip()
