"""AI wellness tools."""

from heal.services.wellness.wellness_coach import (
    GeneratedRoutine,
    JournalInsights,
    ModerationVerdict,
    ProgressSnapshot,
    WellnessCoach,
)

__all__ = [
    "GeneratedRoutine",
    "JournalInsights",
    "ModerationVerdict",
    "ProgressSnapshot",
    "WellnessCoach",
]
