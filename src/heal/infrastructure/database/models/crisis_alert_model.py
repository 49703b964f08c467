"""
Crisis Alert Database Model

Append-only audit trail of detected crisis turns.

CLINICAL_REVIEW_REQUIRED: Data retention and review policies for
crisis alerts should be reviewed clinically and legally.
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from heal.domain.enums.crisis_severity import CrisisSeverity
from heal.domain.models.crisis import CrisisAlert
from heal.infrastructure.database.connection import Base


class CrisisAlertModel(Base):
    """
    Crisis alert table ORM model.

    Rows are written by the chat pipeline and only ever updated by
    administrative resolution.

    Table: crisis_alerts
    """

    __tablename__ = "crisis_alerts"

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
        doc="Unique alert identifier"
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        doc="User whose message triggered the alert"
    )
    trigger_phrase: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        doc="Matched phrase, or the message prefix"
    )
    response_given: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        doc="Safety response issued to the user"
    )
    severity: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
    )
    resolved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<CrisisAlertModel(id={self.id}, severity={self.severity}, resolved={self.resolved})>"

    def to_domain(self) -> CrisisAlert:
        """Convert to the domain alert."""
        return CrisisAlert(
            id=self.id,
            user_id=self.user_id,
            trigger_phrase=self.trigger_phrase,
            response_given=self.response_given,
            severity=CrisisSeverity(self.severity),
            resolved=self.resolved,
            created_at=self.created_at,
        )
