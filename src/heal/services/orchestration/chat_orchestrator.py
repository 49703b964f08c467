"""
Chat Orchestrator

Coordinates one companion chat turn:
Detect → Branch → (Audit) → Assemble → Generate → Package

SAFETY-CRITICAL: Whenever a message is classified as crisis, the reply
returned to the caller contains the 988 crisis line, whether the text
was generated, empty, or replaced by the canned fallback.

ARCHITECTURE: Provider failures are absorbed into canned replies and
audit write failures are captured as an AlertWriteResult. Neither ever
reaches the caller as an exception.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence
from uuid import UUID

from heal.config.logging_config import get_logger
from heal.domain.enums.chat_role import ChatRole
from heal.domain.enums.crisis_severity import CrisisSeverity
from heal.domain.models.chat import ChatReply, ChatTurn
from heal.domain.models.crisis import CrisisAlert, CrisisAssessment
from heal.infrastructure.llm.provider import ExhaustedRetriesError, ProviderUnavailableError
from heal.services.llm.completion_client import ResilientCompletionClient
from heal.services.prompt.companion_prompts import (
    CRISIS_FALLBACK_REPLY,
    CRISIS_LINE_DISCLOSURE,
    CRISIS_RESPONSE_GIVEN,
    EMPTY_REPLY,
    FALLBACK_REPLY,
    build_companion_prompt,
    render_transcript,
)
from heal.services.safety.crisis_detector import CrisisDetector

logger = get_logger(__name__)

# Longest message prefix stored when no phrase is available
TRIGGER_PREFIX_LENGTH: int = 100


class CrisisAlertStore(Protocol):
    """Persistence collaborator for crisis audit records."""

    async def create_crisis_alert(
        self,
        user_id: UUID,
        *,
        severity: CrisisSeverity,
        trigger_phrase: str,
        response_given: str,
    ) -> CrisisAlert:
        ...


class ConversationStore(Protocol):
    """Persistence collaborator for conversation turns."""

    async def get_turns(self, conversation_id: int) -> list[ChatTurn]:
        ...

    async def add_turn(self, conversation_id: int, role: ChatRole, content: str) -> ChatTurn:
        ...


@dataclass(frozen=True)
class AlertWriteResult:
    """
    Outcome of the crisis audit write.

    Attributes:
        attempted: Whether the turn required an alert
        written: Whether the alert was persisted
        alert_id: Identifier of the stored alert
        error: Failure description when the write failed
    """

    attempted: bool
    written: bool = False
    alert_id: Optional[UUID] = None
    error: Optional[str] = None

    @classmethod
    def not_required(cls) -> "AlertWriteResult":
        return cls(attempted=False)


@dataclass(frozen=True)
class ChatTurnOutcome:
    """Reply plus the side-channel results of the turn."""

    reply: ChatReply
    assessment: CrisisAssessment
    alert: AlertWriteResult


class ChatOrchestrator:
    """
    Crisis-aware companion chat pipeline.

    Steps per call (nothing persisted between calls):
    1. Detect: classify the message
    2. Branch: standard persona, or persona plus crisis addendum
    3. Audit: for crisis turns, attempt the alert write before generating
    4. Assemble: role-prefixed transcript of history plus the message
    5. Generate: resilient completion call
    6. Package: generated text, or canned fallback on failure

    Usage:
        orchestrator = ChatOrchestrator(detector, client, alert_store)
        reply = await orchestrator.respond(user_id, "hi", history=[])
    """

    def __init__(
        self,
        detector: CrisisDetector,
        completion_client: ResilientCompletionClient,
        alert_store: CrisisAlertStore,
    ) -> None:
        self._detector = detector
        self._client = completion_client
        self._alert_store = alert_store

    async def respond(
        self,
        user_id: UUID,
        message: str,
        history: Sequence[ChatTurn] = (),
    ) -> ChatReply:
        """
        Produce the companion reply for one message.

        Never raises for provider or audit failures.
        """
        outcome = await self.handle_turn(user_id, message, history)
        return outcome.reply

    async def handle_turn(
        self,
        user_id: UUID,
        message: str,
        history: Sequence[ChatTurn] = (),
    ) -> ChatTurnOutcome:
        """Run the pipeline and return the reply with its audit outcome."""
        assessment = self._detector.detect(message)

        alert = AlertWriteResult.not_required()
        if assessment.is_crisis:
            logger.warning(
                "Crisis detected",
                user_id=str(user_id),
                severity=assessment.severity.value,
                matched_phrase=assessment.matched_phrase,
            )
            alert = await self._record_alert(user_id, message, assessment)

        system_instructions = build_companion_prompt(assessment.is_crisis)
        transcript = render_transcript(history, message)

        used_fallback = False
        try:
            text = await self._client.complete(system_instructions, transcript)
        except (ProviderUnavailableError, ExhaustedRetriesError) as e:
            logger.warning(
                "Chat completion degraded to fallback",
                user_id=str(user_id),
                is_crisis=assessment.is_crisis,
                error_type=type(e).__name__,
            )
            text = CRISIS_FALLBACK_REPLY if assessment.is_crisis else FALLBACK_REPLY
            used_fallback = True

        text = text.strip() or EMPTY_REPLY
        if assessment.is_crisis:
            text = _with_crisis_disclosure(text)

        reply = ChatReply(
            message=text,
            is_crisis=assessment.is_crisis,
            crisis_severity=assessment.severity,
            used_fallback=used_fallback,
        )
        return ChatTurnOutcome(reply=reply, assessment=assessment, alert=alert)

    async def continue_conversation(
        self,
        user_id: UUID,
        conversation_id: int,
        content: str,
        store: ConversationStore,
    ) -> ChatReply:
        """
        Handle a message posted to a stored conversation thread.

        Prior turns become the history; both the user turn and the
        companion reply are appended to the thread. The user turn is
        stored before generation starts, so it survives a failed or
        abandoned reply.
        """
        history = await store.get_turns(conversation_id)
        await store.add_turn(conversation_id, ChatRole.USER, content)

        outcome = await self.handle_turn(user_id, content, history)

        await store.add_turn(conversation_id, ChatRole.ASSISTANT, outcome.reply.message)
        return outcome.reply

    async def _record_alert(
        self,
        user_id: UUID,
        message: str,
        assessment: CrisisAssessment,
    ) -> AlertWriteResult:
        """Attempt the audit write; failures are logged and returned, never raised."""
        trigger = assessment.matched_phrase or message[:TRIGGER_PREFIX_LENGTH]

        try:
            alert = await self._alert_store.create_crisis_alert(
                user_id,
                severity=assessment.severity,
                trigger_phrase=trigger,
                response_given=CRISIS_RESPONSE_GIVEN,
            )
        except Exception as e:
            logger.error(
                "Crisis alert persistence failed",
                user_id=str(user_id),
                severity=assessment.severity.value,
                error_type=type(e).__name__,
                error=str(e),
            )
            return AlertWriteResult(attempted=True, written=False, error=str(e) or type(e).__name__)

        return AlertWriteResult(attempted=True, written=True, alert_id=alert.id)


def _with_crisis_disclosure(text: str) -> str:
    """Append the crisis line when the text does not already mention 988."""
    if "988" in text:
        return text
    return f"{text}\n\n{CRISIS_LINE_DISCLOSURE}."
