"""
Reference assessment catalog: six questions, the trigger rule table, and the
default recommendations used to fill the quota.

Rule table (evaluated top to bottom)
------------------------------------
    answer  keyword        topic          recommendations
    ------  -------------  -------------  ---------------
    0       "High"         stress         breathing, muscle relaxation
    0       "Very high"    stress         (same strings; dedup absorbs them)
    1       "Less than"    sleep          bedtime routine, sleep environment
    1       "5-6"          sleep          (same strings)
    2       "Never"        mindfulness    guided meditation, mindful breathing
    2       "Rarely"       mindfulness    (same strings)
    3       "anxiety"      challenge      grounding, anxiety journal
    3       "confidence"   challenge      affirmations, gratitude wins
    4       "Habit"        tracking       habit tracker
    4       "Mood"         tracking       mood log
    5       "morning"      time_of_day    morning routine, morning meditation

Matching is case-sensitive substring containment, so "Very high" does NOT
contain "High" but is covered by its own row, and "Mid-morning" fires the
morning rule.  Each OR-ed predicate of a topic is its own row with the same
strings; the deriver's dedup makes a double hit count once.

Everything here is plain module-level data.  Consumers take an
``AssessmentCatalog`` argument and only fall back to ``DEFAULT_CATALOG``.
"""

from __future__ import annotations

from wellness_guide.models.assessment import AssessmentCatalog, Question, TriggerRule
from wellness_guide.taxonomy.assessment_taxonomy import AssessmentTopic

DEFAULT_QUOTA = 4

# ── Questions ─────────────────────────────────────────────────────────────────

DEFAULT_QUESTIONS: tuple[Question, ...] = (
    Question(
        ordinal=1,
        prompt="How would you describe your current stress levels?",
        options=("Very low", "Low", "Moderate", "High", "Very high"),
        topic=AssessmentTopic.STRESS,
    ),
    Question(
        ordinal=2,
        prompt="How many hours of quality sleep do you typically get?",
        options=(
            "Less than 5 hours", "5-6 hours", "6-7 hours",
            "7-8 hours", "More than 8 hours",
        ),
        topic=AssessmentTopic.SLEEP,
    ),
    Question(
        ordinal=3,
        prompt="How often do you practice mindfulness or meditation?",
        options=("Never", "Rarely", "Sometimes", "Often", "Daily"),
        topic=AssessmentTopic.MINDFULNESS,
    ),
    Question(
        ordinal=4,
        prompt="What's your biggest wellness challenge right now?",
        options=(
            "Managing anxiety", "Improving sleep", "Building confidence",
            "Finding balance", "Staying motivated",
        ),
        topic=AssessmentTopic.CHALLENGE,
    ),
    Question(
        ordinal=5,
        prompt="How would you prefer to track your wellness progress?",
        options=(
            "Daily journaling", "Mood tracking", "Habit building",
            "Goal setting", "Regular check-ins",
        ),
        topic=AssessmentTopic.TRACKING,
    ),
    Question(
        ordinal=6,
        prompt="What time of day do you feel most motivated for self-care?",
        options=("Early morning", "Mid-morning", "Afternoon", "Evening", "Night"),
        topic=AssessmentTopic.TIME_OF_DAY,
    ),
)

# ── Recommendation strings ────────────────────────────────────────────────────

_STRESS_RECS = (
    "Try deep breathing exercises for 5-10 minutes daily",
    "Consider progressive muscle relaxation before bed",
)
_SLEEP_RECS = (
    "Establish a consistent bedtime routine",
    "Create a sleep-friendly environment (cool, dark, quiet)",
)
_MINDFULNESS_RECS = (
    "Start with 3-minute guided meditations",
    "Practice mindful breathing during daily activities",
)
_ANXIETY_RECS = (
    "Try grounding techniques (5-4-3-2-1 method)",
    "Keep an anxiety journal to identify triggers",
)
_CONFIDENCE_RECS = (
    "Practice daily positive affirmations",
    "Celebrate small wins in a gratitude journal",
)
_HABIT_RECS = ("Use our habit tracker to build consistent routines",)
_MOOD_RECS = ("Log your daily mood to identify patterns",)
_MORNING_RECS = (
    "Create a morning wellness routine",
    "Try morning meditation or journaling",
)

# ── Rule table ────────────────────────────────────────────────────────────────

DEFAULT_RULES: tuple[TriggerRule, ...] = (
    TriggerRule(answer_index=0, keyword="High", recommendations=_STRESS_RECS,
                topic=AssessmentTopic.STRESS),
    TriggerRule(answer_index=0, keyword="Very high", recommendations=_STRESS_RECS,
                topic=AssessmentTopic.STRESS),
    TriggerRule(answer_index=1, keyword="Less than", recommendations=_SLEEP_RECS,
                topic=AssessmentTopic.SLEEP),
    TriggerRule(answer_index=1, keyword="5-6", recommendations=_SLEEP_RECS,
                topic=AssessmentTopic.SLEEP),
    TriggerRule(answer_index=2, keyword="Never", recommendations=_MINDFULNESS_RECS,
                topic=AssessmentTopic.MINDFULNESS),
    TriggerRule(answer_index=2, keyword="Rarely", recommendations=_MINDFULNESS_RECS,
                topic=AssessmentTopic.MINDFULNESS),
    TriggerRule(answer_index=3, keyword="anxiety", recommendations=_ANXIETY_RECS,
                topic=AssessmentTopic.CHALLENGE),
    TriggerRule(answer_index=3, keyword="confidence", recommendations=_CONFIDENCE_RECS,
                topic=AssessmentTopic.CHALLENGE),
    TriggerRule(answer_index=4, keyword="Habit", recommendations=_HABIT_RECS,
                topic=AssessmentTopic.TRACKING),
    TriggerRule(answer_index=4, keyword="Mood", recommendations=_MOOD_RECS,
                topic=AssessmentTopic.TRACKING),
    TriggerRule(answer_index=5, keyword="morning", recommendations=_MORNING_RECS,
                topic=AssessmentTopic.TIME_OF_DAY),
)

# ── Defaults ──────────────────────────────────────────────────────────────────

DEFAULT_RECOMMENDATIONS: tuple[str, ...] = (
    "Practice gratitude by writing down 3 things you're thankful for daily",
    "Take short mindful walks to connect with nature",
    "Set boundaries with technology for better mental health",
    "Practice self-compassion when facing challenges",
)

DEFAULT_CATALOG = AssessmentCatalog(
    questions=DEFAULT_QUESTIONS,
    rules=DEFAULT_RULES,
    defaults=DEFAULT_RECOMMENDATIONS,
    quota=DEFAULT_QUOTA,
)
