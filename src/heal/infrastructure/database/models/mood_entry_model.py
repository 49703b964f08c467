"""
Mood Entry Database Model

Self-reported mood check-ins that feed mood analytics.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from heal.domain.models.mood import MoodRecord
from heal.infrastructure.database.connection import Base


class MoodEntryModel(Base):
    """
    Mood entry table ORM model.

    Table: mood_entries
    """

    __tablename__ = "mood_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    mood: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        doc="Mood label (happy, calm, neutral, sad, anxious, ...)"
    )
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sleep_hours: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    stress_level: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        doc="Self-reported stress (1-10)"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<MoodEntryModel(id={self.id}, mood={self.mood})>"

    def to_record(self) -> MoodRecord:
        """Convert to the domain mood record."""
        return MoodRecord(
            mood=self.mood,
            stress_level=self.stress_level,
            sleep_hours=self.sleep_hours,
            created_at=self.created_at,
            note=self.note,
        )
