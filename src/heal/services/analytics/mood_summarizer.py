"""
Mood Analytics Summarizer

Aggregates a window of mood records into simple statistics and asks
the completion provider for a short natural-language interpretation.

Analytics always render something: provider failures are replaced by
a static encouraging sentence.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from heal.config.logging_config import get_logger
from heal.domain.enums.mood_period import MoodPeriod
from heal.domain.models.mood import MoodAnalyticsSummary, MoodRecord
from heal.infrastructure.llm.provider import ExhaustedRetriesError, ProviderUnavailableError
from heal.services.llm.completion_client import ResilientCompletionClient
from heal.services.prompt.companion_prompts import (
    FALLBACK_INSIGHTS,
    MOOD_ANALYTICS_SYSTEM_PROMPT,
    build_mood_insights_prompt,
)

logger = get_logger(__name__)

INSIGHTS_MAX_TOKENS: int = 300


def window_start(period: MoodPeriod, now: Optional[datetime] = None) -> datetime:
    """Earliest record timestamp included in the analytics window."""
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=period.days)


def compute_mood_statistics(
    period: MoodPeriod,
    records: Sequence[MoodRecord],
) -> Optional[MoodAnalyticsSummary]:
    """
    Compute statistics for a window of records.

    Args:
        period: Window size the records were selected for
        records: Mood records in chronological order

    Returns:
        Summary without insights, or None when there are no records
    """
    if not records:
        return None

    total_score = sum(record.score for record in records)
    average = (Decimal(total_score) / Decimal(len(records))).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP,
    )

    # Counter keeps first-seen order, and max() keeps the first of equal counts
    distribution = Counter(record.mood for record in records)
    dominant_mood = max(distribution, key=distribution.__getitem__)

    return MoodAnalyticsSummary(
        period_type=period,
        average_mood_score=float(average),
        dominant_mood=dominant_mood,
        total_entries=len(records),
        mood_distribution=dict(distribution),
    )


class MoodAnalyticsSummarizer:
    """
    Mood statistics plus AI insights.

    Usage:
        summarizer = MoodAnalyticsSummarizer(client)
        summary = await summarizer.summarize(MoodPeriod.WEEKLY, records)
        if summary is None:
            ...  # not enough data yet
    """

    def __init__(self, completion_client: ResilientCompletionClient) -> None:
        self._client = completion_client

    async def summarize(
        self,
        period: MoodPeriod,
        records: Sequence[MoodRecord],
    ) -> Optional[MoodAnalyticsSummary]:
        """
        Summarize a window of mood records.

        Returns:
            Summary with insights, or None when the window is empty
        """
        summary = compute_mood_statistics(period, records)
        if summary is None:
            return None

        prompt = build_mood_insights_prompt(
            period.value,
            records,
            summary.average_mood_score,
            summary.dominant_mood,
        )

        try:
            insights = await self._client.complete(
                MOOD_ANALYTICS_SYSTEM_PROMPT,
                prompt,
                max_tokens=INSIGHTS_MAX_TOKENS,
            )
        except (ProviderUnavailableError, ExhaustedRetriesError) as e:
            logger.warning(
                "Mood insights unavailable, using fallback",
                period=period.value,
                error_type=type(e).__name__,
            )
            insights = ""

        insights = insights.strip()
        summary.insights = insights or FALLBACK_INSIGHTS
        summary.insights_generated = bool(insights)

        logger.info(
            "Mood analytics computed",
            period=period.value,
            total_entries=summary.total_entries,
            insights_generated=summary.insights_generated,
        )
        return summary
