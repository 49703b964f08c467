"""
Chat Endpoints

Stateless companion chat used by the mobile client. History is sent
with every request; nothing is stored except crisis alerts.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from heal.api.dependencies import get_orchestrator, get_user_id
from heal.api.v1.endpoints.schemas import ChatResponse
from heal.config.logging_config import get_logger
from heal.domain.enums.chat_role import ChatRole
from heal.domain.models.chat import ChatTurn
from heal.services.orchestration.chat_orchestrator import ChatOrchestrator

logger = get_logger(__name__)
router = APIRouter()


class ChatHistoryItem(BaseModel):
    """One prior turn as sent by the client."""

    role: str = Field(default="user", description='"user" or "ai"')
    message: str = Field(..., max_length=4000)


class ChatRequest(BaseModel):
    """Chat turn request."""

    message: str = Field(..., min_length=1, max_length=4000, description="User message")
    history: list[ChatHistoryItem] = Field(default_factory=list, max_length=100)

    model_config = {
        "json_schema_extra": {
            "example": {
                "message": "I had a rough day at work",
                "history": [
                    {"role": "user", "message": "Hi"},
                    {"role": "ai", "message": "Hi there, how are you feeling today?"},
                ],
            }
        }
    }


@router.post(
    "",
    response_model=ChatResponse,
    summary="Send a message to the AI companion",
)
async def chat(
    request: ChatRequest,
    user_id: UUID = Depends(get_user_id),
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
) -> ChatResponse:
    """
    Reply to one message.

    Always returns a supportive message: provider failures degrade to
    canned replies, and crisis replies always carry the 988 line.
    """
    history = [
        ChatTurn(role=ChatRole.from_wire(item.role), content=item.message)
        for item in request.history
    ]

    logger.info(
        "Chat message received",
        user_id=str(user_id),
        message_length=len(request.message),
        history_length=len(history),
    )

    reply = await orchestrator.respond(user_id, request.message, history)
    return ChatResponse.from_reply(reply)
