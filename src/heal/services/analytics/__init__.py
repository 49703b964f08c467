"""Mood analytics services."""

from heal.services.analytics.mood_summarizer import (
    MoodAnalyticsSummarizer,
    compute_mood_statistics,
    window_start,
)

__all__ = [
    "MoodAnalyticsSummarizer",
    "compute_mood_statistics",
    "window_start",
]
