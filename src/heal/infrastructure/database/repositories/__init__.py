"""
Repository pattern implementations package.
"""

from heal.infrastructure.database.repositories.base import BaseRepository
from heal.infrastructure.database.repositories.conversation_repository import ConversationRepository
from heal.infrastructure.database.repositories.crisis_alert_repository import (
    CrisisAlertRepository,
    DatabaseCrisisAlertStore,
)
from heal.infrastructure.database.repositories.mood_repository import (
    MoodAnalyticsRepository,
    MoodEntryRepository,
)

__all__ = [
    "BaseRepository",
    "ConversationRepository",
    "CrisisAlertRepository",
    "DatabaseCrisisAlertStore",
    "MoodAnalyticsRepository",
    "MoodEntryRepository",
]
