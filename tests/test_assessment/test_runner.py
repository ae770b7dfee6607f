"""Tests for the assessment runner state machine."""

from __future__ import annotations

import pytest

from wellness_guide.assessment.runner import (
    AssessmentCompleteError,
    AssessmentSession,
    Completed,
    InProgress,
    InvalidAnswerError,
    advance,
)
from wellness_guide.recommendations.deriver import derive_recommendations
from wellness_guide.recommendations.rules import DEFAULT_CATALOG, DEFAULT_RECOMMENDATIONS


class TestAdvance:
    def test_first_answer_moves_to_next_question(self):
        state = advance(InProgress(index=0), "High", DEFAULT_CATALOG)
        assert state == InProgress(index=1, answers=("High",))

    def test_last_answer_completes(self, small_catalog):
        state = advance(InProgress(index=1, answers=("Low",)), "No", small_catalog)
        assert isinstance(state, Completed)
        assert state.answers == ("Low", "No")
        assert state.recommendations == ("Rest early", "Take a walk", "Drink water")

    def test_invalid_option_rejected(self):
        with pytest.raises(InvalidAnswerError, match="not an option for question 1"):
            advance(InProgress(index=0), "Extremely high", DEFAULT_CATALOG)

    def test_state_unchanged_after_invalid_answer(self):
        session = AssessmentSession()
        session.answer("Low")
        with pytest.raises(InvalidAnswerError):
            session.answer("Low")  # not a sleep option
        assert session.state == InProgress(index=1, answers=("Low",))

    def test_completed_rejects_more_answers(self, small_catalog):
        done = Completed(answers=("Low", "No"), recommendations=())
        with pytest.raises(AssessmentCompleteError):
            advance(done, "Low", small_catalog)


class TestAssessmentSession:
    def test_full_run_matches_deriver(self, all_trigger_answers):
        session = AssessmentSession()
        for answer in all_trigger_answers:
            assert not session.is_complete
            session.answer(answer)

        assert session.is_complete
        assert session.current_question is None
        assert session.state.answers == tuple(all_trigger_answers)
        assert session.state.recommendations == derive_recommendations(all_trigger_answers)

    def test_current_question_follows_progress(self):
        session = AssessmentSession()
        assert session.current_question.ordinal == 1
        session.answer("Moderate")
        assert session.current_question.ordinal == 2

    def test_progress_fraction(self, no_trigger_answers):
        session = AssessmentSession()
        assert session.progress == 0.0
        for answer in no_trigger_answers[:3]:
            session.answer(answer)
        assert session.progress == pytest.approx(0.5)
        for answer in no_trigger_answers[3:]:
            session.answer(answer)
        assert session.progress == 1.0
        assert session.state.recommendations == DEFAULT_RECOMMENDATIONS

    def test_answer_by_number(self, small_catalog):
        session = AssessmentSession(small_catalog)
        session.answer_by_number(1)
        state = session.answer_by_number(2)
        assert state.answers == ("Low", "No")

    @pytest.mark.parametrize("number", [0, 3, -1])
    def test_answer_by_number_out_of_range(self, small_catalog, number):
        session = AssessmentSession(small_catalog)
        with pytest.raises(InvalidAnswerError):
            session.answer_by_number(number)

    def test_answer_by_number_after_completion(self, small_catalog):
        session = AssessmentSession(small_catalog)
        session.answer("High")
        session.answer("Yes")
        with pytest.raises(AssessmentCompleteError):
            session.answer_by_number(1)

    def test_reset_starts_over(self, small_catalog):
        session = AssessmentSession(small_catalog)
        session.answer("High")
        session.answer("Yes")
        session.reset()
        assert session.state == InProgress(index=0)
        assert session.answers == ()
        assert session.current_question.ordinal == 1

    def test_injected_catalog_drives_question_count(self, small_catalog):
        session = AssessmentSession(small_catalog)
        session.answer("High")
        assert not session.is_complete
        session.answer("Yes")
        assert session.is_complete
        assert len(session.state.recommendations) == small_catalog.quota
