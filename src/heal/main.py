"""
Heal API entry point.

``create_application`` wires middleware and routes; the lifespan builds
the shared services once and parks them on ``app.state`` where the
request dependencies in ``heal.api.dependencies`` pick them up.

Run locally with ``uvicorn heal.main:app --reload``.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from heal import __version__
from heal.api.middleware.error_handler import ErrorHandlerMiddleware
from heal.api.v1.router import api_router
from heal.config import Settings, get_settings
from heal.config.logging_config import configure_logging, get_logger
from heal.infrastructure.database import DatabaseManager, get_db_manager
from heal.infrastructure.database.repositories.crisis_alert_repository import DatabaseCrisisAlertStore
from heal.infrastructure.llm.provider_factory import build_completion_provider
from heal.services.analytics.mood_summarizer import MoodAnalyticsSummarizer
from heal.services.llm.completion_client import ResilientCompletionClient, RetryPolicy
from heal.services.orchestration.chat_orchestrator import ChatOrchestrator
from heal.services.safety.crisis_detector import CrisisDetector
from heal.services.wellness.wellness_coach import WellnessCoach

logger = get_logger(__name__)


def install_services(app: FastAPI, settings: Settings, db: DatabaseManager) -> None:
    """Build one completion client and the services sharing it."""
    client = ResilientCompletionClient(
        build_completion_provider(settings),
        RetryPolicy.from_settings(settings.retry),
    )

    app.state.db_manager = db
    app.state.completion_client = client
    app.state.orchestrator = ChatOrchestrator(CrisisDetector(), client, DatabaseCrisisAlertStore(db))
    app.state.summarizer = MoodAnalyticsSummarizer(client)
    app.state.wellness_coach = WellnessCoach(client)

    logger.info(
        "Services installed",
        llm_provider=settings.llm_primary_provider,
        completion_available=client.is_available,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    logger.info("Starting Heal API", env=settings.env, version=__version__)

    db = get_db_manager()
    await db.initialize()
    install_services(app, settings, db)

    try:
        yield
    finally:
        await db.close()
        logger.info("Heal API stopped")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        settings: Explicit settings, otherwise read from the environment
    """
    settings = settings or get_settings()
    configure_logging(settings)

    # Interactive docs are off in production
    docs_enabled = not settings.is_production()
    app = FastAPI(
        title="Heal API",
        description="Mental wellness companion backend",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)
    app.include_router(api_router, prefix=f"/api/{settings.api_version}")

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {"name": "Heal API", "version": __version__, "status": "operational"}

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "heal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=_settings.env == "development",
        log_level=_settings.log_level.lower(),
    )
