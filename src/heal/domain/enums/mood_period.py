"""Mood Analytics Period Enumeration"""

from enum import StrEnum


class MoodPeriod(StrEnum):
    """Analytics window size."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def days(self) -> int:
        """Number of days covered by the window."""
        return 30 if self is MoodPeriod.MONTHLY else 7
