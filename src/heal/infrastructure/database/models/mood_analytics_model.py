"""
Mood Analytics Database Model

Snapshots of computed mood analytics. Derived data: every row can be
recomputed from mood entries.
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from heal.infrastructure.database.connection import Base


class MoodAnalyticsModel(Base):
    """
    Mood analytics table ORM model.

    Table: mood_analytics
    """

    __tablename__ = "mood_analytics"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    period_type: Mapped[str] = mapped_column(String(20), nullable=False)
    average_mood_score: Mapped[float] = mapped_column(Float, nullable=False)
    dominant_mood: Mapped[str] = mapped_column(String(30), nullable=False)
    total_entries: Mapped[int] = mapped_column(Integer, nullable=False)
    mood_distribution: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    insights: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<MoodAnalyticsModel(id={self.id}, period_type={self.period_type})>"
