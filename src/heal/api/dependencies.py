"""
API Dependencies

FastAPI dependency providers. Long-lived services are built once in the
application lifespan and stored on ``app.state``; tests replace them
through ``app.dependency_overrides``.
"""

from typing import AsyncGenerator
from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from heal.infrastructure.database.connection import DatabaseManager
from heal.services.analytics.mood_summarizer import MoodAnalyticsSummarizer
from heal.services.llm.completion_client import ResilientCompletionClient
from heal.services.orchestration.chat_orchestrator import ChatOrchestrator
from heal.services.wellness.wellness_coach import WellnessCoach


def get_user_id(
    x_user_id: UUID = Header(..., alias="X-User-ID", description="Requesting user reference"),
) -> UUID:
    """User reference supplied by the upstream gateway."""
    return x_user_id


def get_database(request: Request) -> DatabaseManager:
    return request.app.state.db_manager


async def get_db_session(
    db: DatabaseManager = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped database session.

    Commits when the endpoint returns, rolls back if it raises.
    """
    async with db.session() as session:
        yield session


def get_completion_client(request: Request) -> ResilientCompletionClient:
    return request.app.state.completion_client


def get_orchestrator(request: Request) -> ChatOrchestrator:
    return request.app.state.orchestrator


def get_summarizer(request: Request) -> MoodAnalyticsSummarizer:
    return request.app.state.summarizer


def get_wellness_coach(request: Request) -> WellnessCoach:
    return request.app.state.wellness_coach
