"""
Assessment runner: presents one question at a time and collects answers.

States
------
    InProgress(index, answers)   -- ``index`` is the 0-based question awaiting
                                    an answer; ``answers`` has length ``index``.
    Completed(answers, recommendations)

Transitions
-----------
    InProgress(i, a) --answer(opt)--> InProgress(i + 1, a + [opt])   if more questions
    InProgress(i, a) --answer(opt)--> Completed(a + [opt], derive(...)) on the last one
    any              --reset()------> InProgress(0, ())

The transition into ``Completed`` is the only place recommendations are
derived.  Answers are checked against the current question's options here;
the deriver itself accepts anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from wellness_guide.models.assessment import AssessmentCatalog, Question
from wellness_guide.recommendations.deriver import RecommendationDeriver
from wellness_guide.recommendations.rules import DEFAULT_CATALOG

logger = logging.getLogger(__name__)


class AssessmentError(Exception):
    """Base class for assessment runner errors."""


class InvalidAnswerError(AssessmentError):
    """The answer is not one of the current question's options."""


class AssessmentCompleteError(AssessmentError):
    """An answer was submitted after the last question."""


@dataclass(frozen=True)
class InProgress:
    index:   int
    answers: tuple[str, ...] = ()


@dataclass(frozen=True)
class Completed:
    answers:         tuple[str, ...]
    recommendations: tuple[str, ...]


AssessmentState = Union[InProgress, Completed]


def advance(
    state: AssessmentState,
    answer: str,
    catalog: AssessmentCatalog,
    deriver: Optional[RecommendationDeriver] = None,
) -> AssessmentState:
    """Apply one answer to ``state`` and return the next state.

    Raises:
        AssessmentCompleteError: If ``state`` is already ``Completed``.
        InvalidAnswerError: If ``answer`` is not an option of the current question.
    """
    if isinstance(state, Completed):
        raise AssessmentCompleteError("Assessment already completed; reset to start over.")

    question = catalog.questions[state.index]
    if answer not in question.options:
        raise InvalidAnswerError(
            f"'{answer}' is not an option for question {question.ordinal}. "
            f"Valid options: {list(question.options)}"
        )

    answers = state.answers + (answer,)
    if state.index + 1 < catalog.question_count:
        return InProgress(index=state.index + 1, answers=answers)

    deriver = deriver or RecommendationDeriver(catalog)
    recommendations = deriver.derive(answers)
    logger.debug("Assessment completed with %d answer(s)", len(answers))
    return Completed(answers=answers, recommendations=recommendations)


class AssessmentSession:
    """One user's pass through the assessment.

    Not thread-safe: a session has a single outstanding question and is
    meant to be driven by one caller.
    """

    def __init__(self, catalog: AssessmentCatalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog
        self._deriver = RecommendationDeriver(catalog)
        self.state: AssessmentState = InProgress(index=0)

    @property
    def is_complete(self) -> bool:
        return isinstance(self.state, Completed)

    @property
    def current_question(self) -> Optional[Question]:
        """The question awaiting an answer, or ``None`` once completed."""
        if isinstance(self.state, InProgress):
            return self.catalog.questions[self.state.index]
        return None

    @property
    def answers(self) -> tuple[str, ...]:
        return self.state.answers

    @property
    def progress(self) -> float:
        """Fraction of questions answered, 0.0 to 1.0."""
        return len(self.state.answers) / self.catalog.question_count

    def answer(self, option: str) -> AssessmentState:
        """Record ``option`` for the current question and advance."""
        self.state = advance(self.state, option, self.catalog, self._deriver)
        return self.state

    def answer_by_number(self, number: int) -> AssessmentState:
        """Answer with the 1-based option number of the current question."""
        question = self.current_question
        if question is None:
            raise AssessmentCompleteError("Assessment already completed; reset to start over.")
        if not 1 <= number <= len(question.options):
            raise InvalidAnswerError(
                f"Option number must be between 1 and {len(question.options)}, got {number}."
            )
        return self.answer(question.options[number - 1])

    def reset(self) -> None:
        self.state = InProgress(index=0)
