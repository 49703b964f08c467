"""
Heal Domain Layer

Core business entities and value objects, independent of infrastructure.
"""

from heal.domain.enums.chat_role import ChatRole
from heal.domain.enums.crisis_severity import CrisisSeverity
from heal.domain.enums.mood_period import MoodPeriod
from heal.domain.models.chat import ChatReply, ChatTurn
from heal.domain.models.crisis import CrisisAlert, CrisisAssessment
from heal.domain.models.mood import MoodAnalyticsSummary, MoodRecord

__all__ = [
    # Enums
    "ChatRole",
    "CrisisSeverity",
    "MoodPeriod",
    # Models
    "ChatReply",
    "ChatTurn",
    "CrisisAlert",
    "CrisisAssessment",
    "MoodAnalyticsSummary",
    "MoodRecord",
]
