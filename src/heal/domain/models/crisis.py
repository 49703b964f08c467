"""
Crisis Domain Models

CrisisAssessment is computed per message and never persisted.
CrisisAlert is the append-only audit record written when the
crisis protocol activates.

PRIVACY: matched phrases are for audit logging only and are
never shown back to the user.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from heal.domain.enums.crisis_severity import CrisisSeverity


@dataclass(frozen=True)
class CrisisAssessment:
    """
    Result of scanning one message for crisis phrases.

    Invariant: ``is_crisis`` is False exactly when ``severity`` is NONE.

    Attributes:
        is_crisis: Whether any crisis phrase matched
        severity: Severity of the winning rule
        matched_phrase: Phrase of the winning rule (audit only)
    """

    is_crisis: bool = False
    severity: CrisisSeverity = CrisisSeverity.NONE
    matched_phrase: Optional[str] = None

    def __post_init__(self) -> None:
        if self.is_crisis == (self.severity is CrisisSeverity.NONE):
            raise ValueError(
                f"Inconsistent crisis assessment: is_crisis={self.is_crisis}, "
                f"severity={self.severity}"
            )

    @classmethod
    def clear(cls) -> "CrisisAssessment":
        """Assessment for a message with no crisis phrase."""
        return cls()


@dataclass
class CrisisAlert:
    """
    Persisted crisis audit record.

    Created exactly once per crisis turn. Resolution is an
    administrative action outside the chat pipeline.
    """

    user_id: UUID
    trigger_phrase: str
    response_given: str
    severity: CrisisSeverity
    id: UUID = field(default_factory=uuid4)
    resolved: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Serialize alert to dictionary."""
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "trigger_phrase": self.trigger_phrase,
            "response_given": self.response_given,
            "severity": self.severity.value,
            "resolved": self.resolved,
            "created_at": self.created_at.isoformat(),
        }
