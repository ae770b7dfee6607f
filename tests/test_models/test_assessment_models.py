"""Tests for catalog and result Pydantic models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from wellness_guide.models.assessment import AssessmentCatalog, Question, TriggerRule
from wellness_guide.models.result import AssessmentResult
from wellness_guide.recommendations.rules import (
    DEFAULT_CATALOG,
    DEFAULT_QUESTIONS,
    DEFAULT_RECOMMENDATIONS,
    DEFAULT_RULES,
)
from wellness_guide.taxonomy.assessment_taxonomy import AssessmentTopic


class TestQuestion:
    def test_options_coerced_to_tuple(self):
        q = Question(ordinal=1, prompt=" Sleep? ", options=["a", "b"])
        assert q.options == ("a", "b")
        assert q.prompt == "Sleep?"

    @pytest.mark.parametrize("kwargs", [
        {"ordinal": 0, "prompt": "Q", "options": ("a",)},
        {"ordinal": 1, "prompt": " ", "options": ("a",)},
        {"ordinal": 1, "prompt": "Q", "options": ()},
        {"ordinal": 1, "prompt": "Q", "options": ("a", "a")},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            Question(**kwargs)

    def test_frozen(self):
        q = DEFAULT_QUESTIONS[0]
        with pytest.raises(ValidationError):
            q.prompt = "changed"


class TestTriggerRule:
    def test_substring_match(self):
        rule = TriggerRule(answer_index=0, keyword="morning", recommendations=("r",))
        assert rule.matches(["Mid-morning"])
        assert not rule.matches(["Morning"])

    def test_empty_keyword_rejected(self):
        with pytest.raises(ValidationError):
            TriggerRule(answer_index=0, keyword="", recommendations=("r",))

    def test_empty_recommendations_rejected(self):
        with pytest.raises(ValidationError):
            TriggerRule(answer_index=0, keyword="x", recommendations=())


class TestAssessmentCatalog:
    def test_reference_catalog_shape(self):
        assert DEFAULT_CATALOG.question_count == 6
        assert DEFAULT_CATALOG.quota == 4
        assert [q.ordinal for q in DEFAULT_CATALOG.questions] == [1, 2, 3, 4, 5, 6]
        assert len(DEFAULT_RECOMMENDATIONS) == 4

    def test_rules_follow_question_order(self):
        indices = [r.answer_index for r in DEFAULT_RULES]
        assert indices == sorted(indices)

    def test_every_rule_topic_matches_its_question(self):
        for rule in DEFAULT_RULES:
            assert rule.topic == DEFAULT_QUESTIONS[rule.answer_index].topic

    def test_no_questions_rejected(self):
        with pytest.raises(ValidationError):
            AssessmentCatalog(questions=())

    @pytest.mark.parametrize("defaults", [("Stretch", "Stretch"), ("Stretch", "  ")])
    def test_bad_defaults_rejected(self, defaults):
        with pytest.raises(ValidationError, match="defaults\\[1\\]"):
            AssessmentCatalog(
                questions=(Question(ordinal=1, prompt="Q?", options=("a",)),),
                defaults=defaults,
            )

    def test_with_quota_copies(self):
        smaller = DEFAULT_CATALOG.with_quota(2)
        assert smaller.quota == 2
        assert DEFAULT_CATALOG.quota == 4
        assert smaller.rules == DEFAULT_CATALOG.rules

    def test_topic_values(self):
        assert AssessmentTopic("time_of_day") is AssessmentTopic.TIME_OF_DAY


class TestAssessmentResult:
    def test_user_id_stripped(self):
        r = AssessmentResult(
            user_id=" alice ",
            responses=["a"],
            recommendations=["b"],
            completed_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        assert r.user_id == "alice"
        assert r.responses == ("a",)

    def test_blank_user_rejected(self):
        with pytest.raises(ValidationError):
            AssessmentResult(
                user_id="",
                responses=(),
                recommendations=(),
                completed_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            )
