"""
Conversation Endpoints

Stored conversation threads. Posting a message runs the same
crisis-aware pipeline as the stateless chat endpoint, with the stored
turns as history.
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from heal.api.dependencies import get_db_session, get_orchestrator, get_user_id
from heal.api.v1.endpoints.schemas import ChatResponse
from heal.config.logging_config import get_logger
from heal.infrastructure.database.models.conversation_model import ConversationModel
from heal.infrastructure.database.repositories.conversation_repository import ConversationRepository
from heal.services.orchestration.chat_orchestrator import ChatOrchestrator

logger = get_logger(__name__)
router = APIRouter()


class CreateConversationRequest(BaseModel):
    title: str = Field(default="New Chat", min_length=1, max_length=200)


class SendMessageRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=4000)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    role: str
    content: str
    created_at: datetime = Field(..., alias="createdAt")


class ConversationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    type: str
    created_at: datetime = Field(..., alias="createdAt")


class ConversationDetailResponse(ConversationResponse):
    messages: list[MessageResponse] = Field(default_factory=list)


async def _get_owned_conversation(
    repo: ConversationRepository,
    conversation_id: int,
    user_id: UUID,
    *,
    with_messages: bool = False,
) -> ConversationModel:
    conversation = await repo.get_for_user(conversation_id, user_id, with_messages=with_messages)
    if conversation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Conversation not found",
        )
    return conversation


@router.get("", response_model=list[ConversationResponse], summary="List conversations")
async def list_conversations(
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
) -> list[ConversationResponse]:
    conversations = await ConversationRepository(session).list_for_user(user_id)
    return [ConversationResponse.model_validate(c) for c in conversations]


@router.post(
    "",
    response_model=ConversationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a conversation",
)
async def create_conversation(
    request: CreateConversationRequest,
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
) -> ConversationResponse:
    conversation = await ConversationRepository(session).create_conversation(user_id, request.title)

    logger.info("Conversation created", conversation_id=conversation.id, user_id=str(user_id))
    return ConversationResponse.model_validate(conversation)


@router.get(
    "/{conversation_id}",
    response_model=ConversationDetailResponse,
    summary="Get a conversation with its messages",
)
async def get_conversation(
    conversation_id: int,
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
) -> ConversationDetailResponse:
    repo = ConversationRepository(session)
    conversation = await _get_owned_conversation(repo, conversation_id, user_id, with_messages=True)
    return ConversationDetailResponse.model_validate(conversation)


@router.delete(
    "/{conversation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a conversation",
)
async def delete_conversation(
    conversation_id: int,
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    repo = ConversationRepository(session)
    # Messages must be loaded for the ORM cascade to remove them
    conversation = await _get_owned_conversation(repo, conversation_id, user_id, with_messages=True)
    await repo.remove(conversation)

    logger.info("Conversation deleted", conversation_id=conversation_id, user_id=str(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{conversation_id}/messages",
    response_model=ChatResponse,
    summary="Send a message in a conversation",
)
async def send_message(
    conversation_id: int,
    request: SendMessageRequest,
    user_id: UUID = Depends(get_user_id),
    session: AsyncSession = Depends(get_db_session),
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
) -> ChatResponse:
    """
    Store the user turn, reply with stored turns as history, and store
    the reply.
    """
    repo = ConversationRepository(session)
    await _get_owned_conversation(repo, conversation_id, user_id)

    logger.info(
        "Conversation message received",
        conversation_id=conversation_id,
        user_id=str(user_id),
        message_length=len(request.content),
    )

    reply = await orchestrator.continue_conversation(user_id, conversation_id, request.content, repo)
    return ChatResponse.from_reply(reply)
