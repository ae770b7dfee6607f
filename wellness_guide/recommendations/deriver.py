"""
Recommendation deriver: completed answer set -> fixed-size recommendation list.

Algorithm
---------
1. Walk the catalog's rule table in order.  Every rule whose keyword occurs
   in its answer appends its strings to an ordered accumulator; a string
   already present is skipped, so it never counts twice toward the quota.
2. While the accumulator is short of ``quota``, pass over the default
   recommendations in order, appending the ones not yet present.  A pass that
   adds nothing ends the fill, so a catalog with fewer unique strings than
   the quota yields a short list instead of looping.
3. Return the first ``quota`` entries.  Triggered strings beyond the quota are
   dropped in rule order.

Pure functions, no I/O and no logging.  Malformed answers (too few, unknown
text, non-strings) only mean fewer rules fire.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from wellness_guide.models.assessment import AssessmentCatalog, TriggerRule
from wellness_guide.recommendations.rules import DEFAULT_CATALOG


class _Accumulator:
    """Ordered, append-only collection of unique recommendation strings."""

    def __init__(self) -> None:
        self._items: list[str] = []
        self._seen: set[str] = set()

    def add(self, rec: str) -> bool:
        if rec in self._seen:
            return False
        self._seen.add(rec)
        self._items.append(rec)
        return True

    def __len__(self) -> int:
        return len(self._items)

    def head(self, n: int) -> tuple[str, ...]:
        return tuple(self._items[:n])


@dataclass(frozen=True)
class RuleHit:
    """A rule that fired, with the strings it placed in the final list.

    ``added`` is empty when every string was already present or the quota
    was full before the rule was reached.
    """

    rule:  TriggerRule
    added: tuple[str, ...]


def fired_rules(
    answers: Sequence[str],
    catalog: AssessmentCatalog = DEFAULT_CATALOG,
) -> list[TriggerRule]:
    """Return the rules of ``catalog`` that fire for ``answers``, in table order."""
    answers = tuple(answers)
    return [rule for rule in catalog.rules if rule.matches(answers)]


def derive_recommendations(
    answers: Sequence[str],
    catalog: AssessmentCatalog = DEFAULT_CATALOG,
) -> tuple[str, ...]:
    """Derive the recommendation list for a completed answer set.

    Args:
        answers: Answers in question order.
        catalog: Rule table, defaults and quota to apply.

    Returns:
        Up to ``catalog.quota`` unique strings; exactly ``quota`` unless the
        catalog holds fewer unique strings than that.
    """
    return RecommendationDeriver(catalog).derive(answers)


def explain_recommendations(
    answers: Sequence[str],
    catalog: AssessmentCatalog = DEFAULT_CATALOG,
) -> list[RuleHit]:
    """Return every rule that fired and the strings it kept in the output."""
    return RecommendationDeriver(catalog).explain(answers)


class RecommendationDeriver:
    """Stateless deriver bound to one catalog.

    Safe to share between sessions and threads; ``derive()`` keeps all
    working state local.
    """

    def __init__(self, catalog: AssessmentCatalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog

    @property
    def quota(self) -> int:
        return self.catalog.quota

    def derive(self, answers: Sequence[str]) -> tuple[str, ...]:
        acc = _Accumulator()
        for rule in fired_rules(answers, self.catalog):
            for rec in rule.recommendations:
                acc.add(rec)

        self._fill_from_defaults(acc)
        return acc.head(self.quota)

    def explain(self, answers: Sequence[str]) -> list[RuleHit]:
        acc = _Accumulator()
        hits: list[RuleHit] = []
        for rule in fired_rules(answers, self.catalog):
            added = tuple(
                rec for rec in rule.recommendations
                if len(acc) < self.quota and acc.add(rec)
            )
            hits.append(RuleHit(rule=rule, added=added))
        return hits

    def _fill_from_defaults(self, acc: _Accumulator) -> None:
        while len(acc) < self.quota:
            added_this_pass = False
            for rec in self.catalog.defaults:
                if len(acc) >= self.quota:
                    break
                if acc.add(rec):
                    added_this_pass = True
            if not added_this_pass:
                break
