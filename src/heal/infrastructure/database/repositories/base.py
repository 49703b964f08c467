"""
Shared persistence helpers for Heal repositories.

Repositories wrap a caller-owned ``AsyncSession``; they flush but never
commit. The unit of work is committed by ``DatabaseManager.session()``.
"""

from typing import Generic, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from heal.infrastructure.database.connection import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Insert, removal and counting for one mapped class."""

    def __init__(self, model: Type[ModelT], session: AsyncSession) -> None:
        self._model = model
        self._session = session

    async def create(self, entity: ModelT) -> ModelT:
        """Insert and reload so server defaults and generated keys are populated."""
        self._session.add(entity)
        await self._session.flush()
        await self._session.refresh(entity)
        return entity

    async def remove(self, entity: ModelT) -> None:
        """Delete through the ORM so relationship cascades apply."""
        await self._session.delete(entity)
        await self._session.flush()

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(self._model))
        return result.scalar_one()
