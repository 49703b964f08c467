"""
Mood Analytics Endpoint

Statistics and AI insights over the user's recent mood entries.
Provider failures never surface as errors: insights fall back to a
static sentence.
"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from heal.api.dependencies import get_database, get_db_session, get_summarizer, get_user_id
from heal.config.logging_config import get_logger
from heal.domain.enums.mood_period import MoodPeriod
from heal.domain.models.mood import MoodAnalyticsSummary
from heal.infrastructure.database.connection import DatabaseManager
from heal.infrastructure.database.repositories.mood_repository import (
    MoodAnalyticsRepository,
    MoodEntryRepository,
)
from heal.services.analytics.mood_summarizer import MoodAnalyticsSummarizer, window_start

logger = get_logger(__name__)
router = APIRouter()

NOT_ENOUGH_DATA_MESSAGE = "Not enough mood data yet"


@router.get("/mood-analytics", summary="Mood analytics for a recent window")
async def mood_analytics(
    period: MoodPeriod = Query(default=MoodPeriod.WEEKLY),
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
    db: DatabaseManager = Depends(get_database),
    summarizer: MoodAnalyticsSummarizer = Depends(get_summarizer),
) -> dict[str, Any]:
    """
    Summarize the last 7 (weekly) or 30 (monthly) days of mood entries.
    """
    records = await MoodEntryRepository(session).list_records_since(user_id, window_start(period))

    summary = await summarizer.summarize(period, records)
    if summary is None:
        return {"message": NOT_ENOUGH_DATA_MESSAGE, "analytics": None}

    await _store_summary(db, user_id, summary)
    return {"analytics": summary.to_dict()}


async def _store_summary(db: DatabaseManager, user_id: UUID, summary: MoodAnalyticsSummary) -> None:
    """Best-effort snapshot in its own session; the response never depends on it."""
    try:
        async with db.session() as session:
            await MoodAnalyticsRepository(session).save_summary(user_id, summary)
    except SQLAlchemyError as e:
        logger.warning(
            "Mood analytics snapshot not stored",
            user_id=str(user_id),
            error_type=type(e).__name__,
        )
