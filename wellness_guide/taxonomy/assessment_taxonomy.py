"""
Assessment taxonomy: the topic each question (and each trigger rule) covers.

Topics are labels only; they never influence rule evaluation order, which is
fixed by the position of a rule in the catalog's rule table.

This module has NO imports from any other ``wellness_guide`` package.
"""

from enum import StrEnum


class AssessmentTopic(StrEnum):
    """Subject area of an assessment question."""

    STRESS = "stress"
    """Self-reported current stress level."""

    SLEEP = "sleep"
    """Typical hours of quality sleep."""

    MINDFULNESS = "mindfulness"
    """Frequency of mindfulness or meditation practice."""

    CHALLENGE = "challenge"
    """Biggest current wellness challenge."""

    TRACKING = "tracking"
    """Preferred way of tracking wellness progress."""

    TIME_OF_DAY = "time_of_day"
    """Time of day the user feels most motivated for self-care."""

    GENERAL = "general"
    """Catch-all for custom catalogs."""
