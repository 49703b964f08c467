"""
Chat Domain Models

Chat turns exchanged between the user and the AI companion,
and the reply returned by the chat orchestrator.

PRIVACY: Turn content may contain sensitive information.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from heal.domain.enums.chat_role import ChatRole
from heal.domain.enums.crisis_severity import CrisisSeverity


@dataclass(frozen=True)
class ChatTurn:
    """
    A single message in a conversation.

    Attributes:
        role: Who wrote the turn
        content: Message text
        created_at: When the turn was written
    """

    role: ChatRole
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def speaker_label(self) -> str:
        """Prefix used when rendering the turn into a transcript."""
        return "Companion" if self.role is ChatRole.ASSISTANT else "User"


@dataclass(frozen=True)
class ChatReply:
    """
    Orchestrated chat reply.

    Attributes:
        message: Text shown to the user (generated or canned)
        is_crisis: Whether the crisis protocol was activated
        crisis_severity: Severity of the detected crisis
        used_fallback: Whether generation failed and canned text was used
    """

    message: str
    is_crisis: bool
    crisis_severity: CrisisSeverity
    used_fallback: bool = False

    def to_dict(self) -> dict:
        """Serialize to the client payload shape."""
        return {
            "message": self.message,
            "isCrisis": self.is_crisis,
            "crisisSeverity": self.crisis_severity.value,
        }
