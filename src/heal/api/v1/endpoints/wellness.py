"""
Wellness Tool Endpoints

Single-shot AI tools. Unlike chat, these have no canned answer: when
the completion provider is unavailable they respond with 503.
"""

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from heal.api.dependencies import get_db_session, get_user_id, get_wellness_coach
from heal.config.logging_config import get_logger
from heal.infrastructure.database.repositories.mood_repository import MoodEntryRepository
from heal.infrastructure.llm.provider import ExhaustedRetriesError, ProviderUnavailableError
from heal.services.wellness.wellness_coach import ProgressSnapshot, WellnessCoach

logger = get_logger(__name__)
router = APIRouter()

UNAVAILABLE_DETAIL = "This tool is temporarily unavailable. Please try again in a moment."

_PROVIDER_ERRORS = (ProviderUnavailableError, ExhaustedRetriesError)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ReframeRequest(_CamelModel):
    thought: str = Field(..., min_length=1, max_length=2000)
    context: Optional[str] = Field(default=None, max_length=2000)


class GroundingRequest(_CamelModel):
    current_mood: Optional[str] = Field(default=None, max_length=100, alias="currentMood")
    situation: Optional[str] = Field(default=None, max_length=1000)
    preferred_type: Optional[str] = Field(default=None, max_length=100, alias="preferredType")


class JournalInsightsRequest(_CamelModel):
    content: str = Field(..., min_length=1, max_length=10000)
    title: Optional[str] = Field(default=None, max_length=200)


class RoutineRequest(_CamelModel):
    goal: str = Field(..., min_length=1, max_length=200)
    wake_time: str = Field(default="7:00 AM", max_length=20, alias="wakeTime")
    sleep_time: str = Field(default="10:00 PM", max_length=20, alias="sleepTime")
    current_challenges: Optional[str] = Field(default=None, max_length=1000, alias="currentChallenges")


class AffirmationRequest(_CamelModel):
    current_mood: Optional[str] = Field(default=None, max_length=100, alias="currentMood")
    challenges: Optional[str] = Field(default=None, max_length=1000)
    preferences: Optional[str] = Field(default=None, max_length=1000)


class AnalyzeMoodRequest(_CamelModel):
    mood: str = Field(..., min_length=1, max_length=30)
    note: Optional[str] = Field(default=None, max_length=2000)
    sleep_hours: Optional[float] = Field(default=None, ge=0, le=24, alias="sleepHours")
    stress_level: Optional[int] = Field(default=None, ge=1, le=10, alias="stressLevel")


class ProgressInsightsRequest(_CamelModel):
    sessions: int = Field(default=0, ge=0)
    journal_entries: int = Field(default=0, ge=0, alias="journalEntries")
    streak: int = Field(default=0, ge=0)
    goals_completed: int = Field(default=0, ge=0, le=100, alias="goalsCompleted")
    habits_consistency: int = Field(default=0, ge=0, le=100, alias="habitsConsistency")
    weekly_mood: list[float] = Field(default_factory=list, max_length=7, alias="weeklyMood")
    achievements: list[str] = Field(default_factory=list, max_length=50)
    user_goals: Optional[str] = Field(default=None, max_length=1000, alias="userGoals")

    def to_snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            sessions=self.sessions,
            journal_entries=self.journal_entries,
            streak_days=self.streak,
            goals_completed_percent=self.goals_completed,
            habits_consistency_percent=self.habits_consistency,
            weekly_mood=self.weekly_mood,
            achievements=self.achievements,
            user_goals=self.user_goals,
        )


class HabitCoachRequest(_CamelModel):
    habit: str = Field(..., min_length=1, max_length=200)
    current_streak: int = Field(default=0, ge=0, alias="currentStreak")
    challenges: Optional[str] = Field(default=None, max_length=1000)


class SessionSummaryRequest(_CamelModel):
    session_notes: str = Field(..., min_length=1, max_length=10000, alias="sessionNotes")
    therapist_name: Optional[str] = Field(default=None, max_length=200, alias="therapistName")
    session_goals: Optional[str] = Field(default=None, max_length=1000, alias="sessionGoals")


class ModerationRequest(_CamelModel):
    content: str = Field(..., min_length=1, max_length=10000)
    context: Optional[str] = Field(default=None, max_length=100)


def _unavailable(tool: str, error: Exception) -> HTTPException:
    logger.warning("Wellness tool unavailable", tool=tool, error_type=type(error).__name__)
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=UNAVAILABLE_DETAIL)


@router.post("/cbt-reframe", summary="Reframe a negative thought")
async def cbt_reframe(
    request: ReframeRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        reframe = await coach.reframe_thought(request.thought, request.context)
    except _PROVIDER_ERRORS as e:
        raise _unavailable("cbt-reframe", e) from e
    return {"reframe": reframe}


@router.post("/grounding-technique", summary="Personalized grounding exercise")
async def grounding_technique(
    request: GroundingRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        technique = await coach.grounding_technique(
            current_mood=request.current_mood,
            situation=request.situation,
            preferred_type=request.preferred_type,
        )
    except _PROVIDER_ERRORS as e:
        raise _unavailable("grounding-technique", e) from e
    return {"technique": technique}


@router.post("/journal-insights", summary="Analyze a journal entry")
async def journal_insights(
    request: JournalInsightsRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        insights = await coach.journal_insights(request.content, request.title)
    except _PROVIDER_ERRORS as e:
        raise _unavailable("journal-insights", e) from e
    return insights.to_dict()


@router.post("/routine-generator", summary="Generate a daily wellness routine")
async def routine_generator(
    request: RoutineRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        routine = await coach.generate_routine(
            request.goal,
            wake_time=request.wake_time,
            sleep_time=request.sleep_time,
            challenges=request.current_challenges,
        )
    except _PROVIDER_ERRORS as e:
        raise _unavailable("routine-generator", e) from e
    return routine.to_dict()


@router.post("/daily-affirmation", summary="Personalized affirmations")
async def daily_affirmation(
    request: AffirmationRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        affirmations = await coach.daily_affirmations(
            current_mood=request.current_mood,
            challenges=request.challenges,
            preferences=request.preferences,
        )
    except _PROVIDER_ERRORS as e:
        raise _unavailable("daily-affirmation", e) from e
    return {"affirmations": affirmations}


@router.post("/analyze-mood", summary="Insights on a single mood entry")
async def analyze_mood(
    request: AnalyzeMoodRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        analysis = await coach.analyze_mood(
            request.mood,
            note=request.note,
            sleep_hours=request.sleep_hours,
            stress_level=request.stress_level,
        )
    except _PROVIDER_ERRORS as e:
        raise _unavailable("analyze-mood", e) from e
    return {"analysis": analysis}


@router.post("/sleep-stress-insights", summary="Sleep and stress patterns from recent mood entries")
async def sleep_stress_insights(
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    entries = await MoodEntryRepository(session).list_for_user(user_id, limit=7)
    try:
        insights = await coach.sleep_stress_insights([entry.to_record() for entry in entries])
    except _PROVIDER_ERRORS as e:
        raise _unavailable("sleep-stress-insights", e) from e
    return {"insights": insights}


@router.post("/progress-insights", summary="Insights on the wellness journey so far")
async def progress_insights(
    request: ProgressInsightsRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        insights = await coach.progress_insights(request.to_snapshot())
    except _PROVIDER_ERRORS as e:
        raise _unavailable("progress-insights", e) from e
    return {"insights": insights}


@router.post("/habit-coach", summary="Motivation and tips for a habit")
async def habit_coach(
    request: HabitCoachRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        coaching = await coach.habit_coaching(
            request.habit,
            current_streak=request.current_streak,
            challenges=request.challenges,
        )
    except _PROVIDER_ERRORS as e:
        raise _unavailable("habit-coach", e) from e
    return {"coaching": coaching}


@router.post("/post-session-summary", summary="Summarize therapy session notes")
async def post_session_summary(
    request: SessionSummaryRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        summary = await coach.post_session_summary(
            request.session_notes,
            therapist_name=request.therapist_name,
            session_goals=request.session_goals,
        )
    except _PROVIDER_ERRORS as e:
        raise _unavailable("post-session-summary", e) from e
    return {"summary": summary}


@router.post("/moderate-content", summary="Screen a community post")
async def moderate_content(
    request: ModerationRequest,
    coach: WellnessCoach = Depends(get_wellness_coach),
) -> dict[str, Any]:
    try:
        verdict = await coach.moderate_content(request.content, request.context)
    except _PROVIDER_ERRORS as e:
        raise _unavailable("moderate-content", e) from e
    return verdict.to_dict()
