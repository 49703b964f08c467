"""
Mood Domain Models

Mood records logged by the user and the derived analytics summary.
Summaries are always derivable from records and are never a
source of truth.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from heal.domain.enums.mood_period import MoodPeriod


# Ordinal score per mood label (1-5)
MOOD_SCORES: dict[str, int] = {
    "happy": 5,
    "calm": 4,
    "neutral": 3,
    "sad": 2,
    "anxious": 1,
}

# Score used for labels outside the known scale
NEUTRAL_MOOD_SCORE: int = 3


@dataclass(frozen=True)
class MoodRecord:
    """
    One logged mood entry.

    Attributes:
        mood: Mood label (happy, calm, neutral, sad, anxious, ...)
        stress_level: Self-reported stress (1-10), if given
        sleep_hours: Hours slept, if given
        created_at: When the entry was logged
        note: Free-text note, if given
    """

    mood: str
    stress_level: Optional[int] = None
    sleep_hours: Optional[int] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    note: Optional[str] = None

    @property
    def score(self) -> int:
        """Ordinal mood score, neutral for unknown labels."""
        return MOOD_SCORES.get(self.mood, NEUTRAL_MOOD_SCORE)

    def to_prompt_dict(self) -> dict:
        """Compact representation passed to the insights prompt."""
        return {
            "mood": self.mood,
            "stress": self.stress_level,
            "sleep": self.sleep_hours,
            "date": self.created_at.isoformat(),
        }


@dataclass
class MoodAnalyticsSummary:
    """
    Statistics over a window of mood records.

    Attributes:
        period_type: Window size
        average_mood_score: Mean ordinal score, one decimal place
        dominant_mood: Most frequent label (first seen wins ties)
        total_entries: Number of records in the window
        mood_distribution: Count per label in first-seen order
        insights: Natural-language interpretation (AI or fallback)
        insights_generated: Whether insights came from the provider
    """

    period_type: MoodPeriod
    average_mood_score: float
    dominant_mood: str
    total_entries: int
    mood_distribution: dict[str, int]
    insights: str = ""
    insights_generated: bool = False

    def to_dict(self) -> dict:
        """Serialize to the client payload shape."""
        return {
            "periodType": self.period_type.value,
            "averageMoodScore": self.average_mood_score,
            "dominantMood": self.dominant_mood,
            "totalEntries": self.total_entries,
            "moodDistribution": dict(self.mood_distribution),
            "insights": self.insights,
        }
