"""Domain models package."""

from heal.domain.models.chat import ChatReply, ChatTurn
from heal.domain.models.crisis import CrisisAlert, CrisisAssessment
from heal.domain.models.mood import (
    MOOD_SCORES,
    MoodAnalyticsSummary,
    MoodRecord,
)

__all__ = [
    # Chat
    "ChatReply",
    "ChatTurn",
    # Crisis
    "CrisisAlert",
    "CrisisAssessment",
    # Mood
    "MOOD_SCORES",
    "MoodAnalyticsSummary",
    "MoodRecord",
]
