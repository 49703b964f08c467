"""
Database ORM models package.
"""

from heal.infrastructure.database.models.conversation_model import ConversationModel, MessageModel
from heal.infrastructure.database.models.crisis_alert_model import CrisisAlertModel
from heal.infrastructure.database.models.mood_analytics_model import MoodAnalyticsModel
from heal.infrastructure.database.models.mood_entry_model import MoodEntryModel

__all__ = [
    "ConversationModel",
    "MessageModel",
    "CrisisAlertModel",
    "MoodAnalyticsModel",
    "MoodEntryModel",
]
