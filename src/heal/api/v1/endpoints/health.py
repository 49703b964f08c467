"""Liveness and readiness checks."""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from heal import __version__
from heal.api.dependencies import get_completion_client, get_database
from heal.infrastructure.database.connection import DatabaseManager
from heal.services.llm.completion_client import ResilientCompletionClient

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    ready: bool
    components: dict[str, bool]


@router.get("", response_model=HealthResponse, summary="Liveness check")
async def health_check(request: Request) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=request.app.state.settings.env,
    )


@router.get("/ready", response_model=ReadinessResponse, summary="Readiness check")
async def readiness_check(
    db: DatabaseManager = Depends(get_database),
    client: ResilientCompletionClient = Depends(get_completion_client),
) -> ReadinessResponse:
    """
    Only the database gates readiness. Without a completion provider
    the companion still answers with canned replies.
    """
    database_ok = await db.health_check()
    return ReadinessResponse(
        ready=database_ok,
        components={
            "database": database_ok,
            "completion_provider": await client.health_check(),
        },
    )
