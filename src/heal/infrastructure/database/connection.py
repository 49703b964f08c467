"""
Database engine and session lifecycle for Heal.

One ``DatabaseManager`` per process owns the async engine. Request
handlers and background writers each open their own unit of work with
``session()``, which commits when the block exits cleanly.

SECURITY: The database URL embeds credentials. Only the dialect is
ever logged.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from heal.config import get_settings
from heal.config.logging_config import get_logger
from heal.config.settings import DatabaseSettings

logger = get_logger(__name__)

# Recycle pooled PostgreSQL connections hourly
POOL_RECYCLE_SECONDS = 3600


class Base(DeclarativeBase):
    """Declarative base shared by every Heal table."""


class DatabaseNotInitializedError(RuntimeError):
    def __init__(self) -> None:
        super().__init__("Database not initialized. Call initialize() first.")


class DatabaseManager:
    """
    Owns the async engine and hands out transactional sessions.

    Usage:
        db = DatabaseManager(settings.database)
        await db.initialize()
        async with db.session() as session:
            session.add(entry)
        await db.close()

    An explicit ``url`` replaces the pooled PostgreSQL setup, which is
    how tests run against ``sqlite+aiosqlite:///:memory:``.
    """

    def __init__(
        self,
        settings: Optional[DatabaseSettings] = None,
        *,
        url: Optional[str] = None,
        echo: bool = False,
    ) -> None:
        self._settings = settings
        self._url = url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    def _build_engine(self) -> AsyncEngine:
        if self._url is None:
            settings = self._settings or get_settings().database
            return create_async_engine(
                settings.async_url,
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_pre_ping=True,
                pool_recycle=POOL_RECYCLE_SECONDS,
                echo=self._echo,
            )

        if ":memory:" in self._url:
            # Every session must see the same in-memory database
            return create_async_engine(
                self._url,
                echo=self._echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_async_engine(self._url, echo=self._echo)

    async def initialize(self) -> None:
        """Create the engine and session factory. Safe to call twice."""
        if self._engine is not None:
            logger.warning("Database already initialized")
            return

        self._engine = self._build_engine()
        self._sessions = async_sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Database engine ready", dialect=self._engine.dialect.name)

    async def create_all(self) -> None:
        """Create all mapped tables. Deployed schemas come from Alembic."""
        engine = self._require_engine()

        # Registers the mapped classes on Base.metadata
        import heal.infrastructure.database.models  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessions = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Unit of work: commit on clean exit, roll back on any exception.

        Raises:
            DatabaseNotInitializedError: If initialize() has not run
        """
        if self._sessions is None:
            raise DatabaseNotInitializedError()

        async with self._sessions() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        """True when a trivial query succeeds."""
        if self._engine is None:
            return False

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database health check failed", error_type=type(e).__name__)
            return False
        return True

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseNotInitializedError()
        return self._engine

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None


@lru_cache()
def get_db_manager() -> DatabaseManager:
    """Process-wide manager built from environment settings."""
    settings = get_settings()
    return DatabaseManager(settings.database, echo=settings.debug)
