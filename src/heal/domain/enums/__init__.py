"""Domain enums package."""

from heal.domain.enums.chat_role import ChatRole
from heal.domain.enums.crisis_severity import CrisisSeverity
from heal.domain.enums.mood_period import MoodPeriod

__all__ = ["ChatRole", "CrisisSeverity", "MoodPeriod"]
