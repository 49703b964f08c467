"""
Mood Repositories

Data access for mood entries and computed mood analytics snapshots.
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from heal.domain.models.mood import MoodAnalyticsSummary, MoodRecord
from heal.infrastructure.database.models.mood_analytics_model import MoodAnalyticsModel
from heal.infrastructure.database.models.mood_entry_model import MoodEntryModel
from heal.infrastructure.database.repositories.base import BaseRepository


class MoodEntryRepository(BaseRepository[MoodEntryModel]):
    """
    Repository for mood check-ins.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(MoodEntryModel, session)

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        limit: int = 100,
    ) -> Sequence[MoodEntryModel]:
        """Most recent entries first."""
        result = await self._session.execute(
            select(MoodEntryModel)
            .where(MoodEntryModel.user_id == user_id)
            .order_by(MoodEntryModel.created_at.desc(), MoodEntryModel.id.desc())
            .limit(limit)
        )
        return result.scalars().all()

    async def list_records_since(self, user_id: UUID, since: datetime) -> list[MoodRecord]:
        """
        Entries logged at or after ``since`` in chronological order.

        Args:
            user_id: Owning user
            since: Start of the analytics window

        Returns:
            Domain mood records for the window
        """
        result = await self._session.execute(
            select(MoodEntryModel)
            .where(
                MoodEntryModel.user_id == user_id,
                MoodEntryModel.created_at >= since,
            )
            .order_by(MoodEntryModel.created_at, MoodEntryModel.id)
        )
        return [entry.to_record() for entry in result.scalars().all()]

    async def create_entry(
        self,
        user_id: UUID,
        mood: str,
        *,
        note: Optional[str] = None,
        sleep_hours: Optional[int] = None,
        stress_level: Optional[int] = None,
    ) -> MoodEntryModel:
        return await self.create(
            MoodEntryModel(
                user_id=user_id,
                mood=mood,
                note=note,
                sleep_hours=sleep_hours,
                stress_level=stress_level,
            )
        )


class MoodAnalyticsRepository(BaseRepository[MoodAnalyticsModel]):
    """
    Repository for mood analytics snapshots.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(MoodAnalyticsModel, session)

    async def save_summary(self, user_id: UUID, summary: MoodAnalyticsSummary) -> MoodAnalyticsModel:
        """Store a computed summary."""
        return await self.create(
            MoodAnalyticsModel(
                user_id=user_id,
                period_type=summary.period_type.value,
                average_mood_score=summary.average_mood_score,
                dominant_mood=summary.dominant_mood,
                total_entries=summary.total_entries,
                mood_distribution=dict(summary.mood_distribution),
                insights=summary.insights,
            )
        )
