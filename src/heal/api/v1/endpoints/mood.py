"""
Mood Entry Endpoints

Mood check-ins that feed mood analytics.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from heal.api.dependencies import get_db_session, get_user_id
from heal.config.logging_config import get_logger
from heal.infrastructure.database.repositories.mood_repository import MoodEntryRepository

logger = get_logger(__name__)
router = APIRouter()


class CreateMoodEntryRequest(BaseModel):
    """Mood check-in."""

    model_config = ConfigDict(populate_by_name=True)

    mood: str = Field(..., min_length=1, max_length=30, description="happy, calm, neutral, sad, anxious, ...")
    note: Optional[str] = Field(default=None, max_length=2000)
    sleep_hours: Optional[int] = Field(default=None, ge=0, le=24, alias="sleepHours")
    stress_level: Optional[int] = Field(default=None, ge=1, le=10, alias="stressLevel")


class MoodEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    mood: str
    note: Optional[str] = None
    sleep_hours: Optional[int] = Field(default=None, alias="sleepHours")
    stress_level: Optional[int] = Field(default=None, alias="stressLevel")
    created_at: datetime = Field(..., alias="createdAt")


@router.get("", response_model=list[MoodEntryResponse], summary="List mood entries")
async def list_mood_entries(
    limit: int = Query(default=100, ge=1, le=500),
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
) -> list[MoodEntryResponse]:
    entries = await MoodEntryRepository(session).list_for_user(user_id, limit=limit)
    return [MoodEntryResponse.model_validate(entry) for entry in entries]


@router.post(
    "",
    response_model=MoodEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a mood entry",
)
async def create_mood_entry(
    request: CreateMoodEntryRequest,
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
) -> MoodEntryResponse:
    entry = await MoodEntryRepository(session).create_entry(
        user_id,
        request.mood.strip().lower(),
        note=request.note,
        sleep_hours=request.sleep_hours,
        stress_level=request.stress_level,
    )

    logger.info("Mood entry logged", user_id=str(user_id), mood=entry.mood)
    return MoodEntryResponse.model_validate(entry)
