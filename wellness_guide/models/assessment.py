"""
Assessment catalog models: questions, trigger rules, and the catalog bundle.

``Question`` is one multiple-choice item of the assessment.  ``TriggerRule``
maps a keyword found in one answer position to fixed recommendation strings.
``AssessmentCatalog`` bundles the ordered questions, the ordered rule table,
the ordered default recommendations and the output quota.

All models are frozen.  Catalogs are static configuration, loaded once and
shared between sessions.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from wellness_guide.taxonomy.assessment_taxonomy import AssessmentTopic


class Question(BaseModel):
    """One assessment question.

    Attributes:
        ordinal: 1-based position in the assessment.
        prompt: Question text shown to the user.
        options: Allowed answers, in display order.
        topic: Subject area label.
    """

    model_config = ConfigDict(frozen=True)

    ordinal: int
    prompt: str
    options: tuple[str, ...]
    topic: AssessmentTopic = AssessmentTopic.GENERAL

    @field_validator("ordinal")
    @classmethod
    def validate_ordinal(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"ordinal must be >= 1, got {v}.")
        return v

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("prompt must not be empty.")
        return v.strip()

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("options must not be empty.")
        if any(not opt.strip() for opt in v):
            raise ValueError("options must not contain blank strings.")
        if len(set(v)) != len(v):
            raise ValueError(f"options must be unique, got {list(v)}.")
        return v


class TriggerRule(BaseModel):
    """Keyword rule over a single answer position.

    The rule fires when ``keyword`` occurs (case-sensitive substring) in the
    answer at ``answer_index``.  Positions beyond the answer set never fire.

    Attributes:
        answer_index: 0-based answer position the rule inspects.
        keyword: Substring looked for in that answer.
        recommendations: Strings appended, in order, when the rule fires.
        topic: Subject area label (for explanations).
    """

    model_config = ConfigDict(frozen=True)

    answer_index: int
    keyword: str
    recommendations: tuple[str, ...]
    topic: AssessmentTopic = AssessmentTopic.GENERAL

    @field_validator("answer_index")
    @classmethod
    def validate_answer_index(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"answer_index must be >= 0, got {v}.")
        return v

    @field_validator("keyword")
    @classmethod
    def validate_keyword(cls, v: str) -> str:
        if not v:
            raise ValueError("keyword must not be empty.")
        return v

    @field_validator("recommendations")
    @classmethod
    def validate_recommendations(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("recommendations must not be empty.")
        if any(not rec.strip() for rec in v):
            raise ValueError("recommendations must not contain blank strings.")
        return v

    def matches(self, answers: tuple[str, ...] | list[str]) -> bool:
        """Return True if this rule fires for ``answers``."""
        if self.answer_index >= len(answers):
            return False
        answer = answers[self.answer_index]
        return isinstance(answer, str) and self.keyword in answer


class AssessmentCatalog(BaseModel):
    """Questions, rule table, default recommendations and output quota.

    Attributes:
        questions: Questions in ordinal order (ordinals 1..n, no gaps).
        rules: Trigger rules in evaluation priority order.
        defaults: Fallback recommendations used to fill up to ``quota``.
        quota: Number of recommendations returned per assessment (``K``).
    """

    model_config = ConfigDict(frozen=True)

    questions: tuple[Question, ...]
    rules: tuple[TriggerRule, ...] = ()
    defaults: tuple[str, ...] = ()
    quota: int = 4

    @field_validator("quota")
    @classmethod
    def validate_quota(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"quota must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_catalog_consistency(self) -> "AssessmentCatalog":
        if not self.questions:
            raise ValueError("catalog must define at least one question.")
        ordinals = [q.ordinal for q in self.questions]
        expected = list(range(1, len(self.questions) + 1))
        if ordinals != expected:
            raise ValueError(
                f"question ordinals must be sequential from 1, got {ordinals}."
            )
        for rule in self.rules:
            if rule.answer_index >= len(self.questions):
                raise ValueError(
                    f"rule '{rule.keyword}' targets answer_index "
                    f"{rule.answer_index} but only {len(self.questions)} "
                    "questions exist."
                )
        seen: set[str] = set()
        for i, rec in enumerate(self.defaults):
            if not rec.strip():
                raise ValueError(f"defaults[{i}] must be a non-empty string.")
            if rec in seen:
                raise ValueError(f"defaults[{i}] duplicate default '{rec}'.")
            seen.add(rec)
        return self

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def with_quota(self, quota: int) -> "AssessmentCatalog":
        """Return a copy of this catalog with a different quota."""
        return AssessmentCatalog(
            questions=self.questions,
            rules=self.rules,
            defaults=self.defaults,
            quota=quota,
        )
