"""Companion chat orchestration."""

from heal.services.orchestration.chat_orchestrator import (
    AlertWriteResult,
    ChatOrchestrator,
    ChatTurnOutcome,
    ConversationStore,
    CrisisAlertStore,
)

__all__ = [
    "AlertWriteResult",
    "ChatOrchestrator",
    "ChatTurnOutcome",
    "ConversationStore",
    "CrisisAlertStore",
]
