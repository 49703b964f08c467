"""
Crisis Alert Repository

Append-only persistence for crisis audit records.

SAFETY-CRITICAL: DatabaseCrisisAlertStore writes in its own session so
a failed audit write never rolls back or poisons the request session.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from heal.domain.enums.crisis_severity import CrisisSeverity
from heal.domain.models.crisis import CrisisAlert
from heal.infrastructure.database.connection import DatabaseManager
from heal.infrastructure.database.models.crisis_alert_model import CrisisAlertModel
from heal.infrastructure.database.repositories.base import BaseRepository


class CrisisAlertRepository(BaseRepository[CrisisAlertModel]):
    """
    Repository for crisis alerts.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(CrisisAlertModel, session)

    async def create_crisis_alert(
        self,
        user_id: UUID,
        *,
        severity: CrisisSeverity,
        trigger_phrase: str,
        response_given: str,
    ) -> CrisisAlert:
        """
        Append a crisis alert.

        Returns:
            The stored alert
        """
        alert = await self.create(
            CrisisAlertModel(
                user_id=user_id,
                severity=severity.value,
                trigger_phrase=trigger_phrase,
                response_given=response_given,
            )
        )
        return alert.to_domain()


class DatabaseCrisisAlertStore:
    """
    Crisis alert store that commits each alert in a dedicated session.

    Usage:
        store = DatabaseCrisisAlertStore(db_manager)
        orchestrator = ChatOrchestrator(detector, client, store)
    """

    def __init__(self, db_manager: DatabaseManager) -> None:
        self._db = db_manager

    async def create_crisis_alert(
        self,
        user_id: UUID,
        *,
        severity: CrisisSeverity,
        trigger_phrase: str,
        response_given: str,
    ) -> CrisisAlert:
        async with self._db.session() as session:
            return await CrisisAlertRepository(session).create_crisis_alert(
                user_id,
                severity=severity,
                trigger_phrase=trigger_phrase,
                response_given=response_given,
            )
