"""
Conversation Repository

Data access for conversation threads. Implements the conversation
store consumed by the chat orchestrator.
"""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from heal.domain.enums.chat_role import ChatRole
from heal.domain.models.chat import ChatTurn
from heal.infrastructure.database.models.conversation_model import ConversationModel, MessageModel
from heal.infrastructure.database.repositories.base import BaseRepository


class ConversationRepository(BaseRepository[ConversationModel]):
    """
    Repository for conversation threads and their messages.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ConversationModel, session)

    async def list_for_user(self, user_id: UUID) -> Sequence[ConversationModel]:
        """Conversations owned by the user, newest first."""
        result = await self._session.execute(
            select(ConversationModel)
            .where(ConversationModel.user_id == user_id)
            .order_by(ConversationModel.created_at.desc(), ConversationModel.id.desc())
        )
        return result.scalars().all()

    async def get_for_user(
        self,
        conversation_id: int,
        user_id: UUID,
        *,
        with_messages: bool = False,
    ) -> Optional[ConversationModel]:
        """
        Get a conversation if it belongs to the user.

        Args:
            conversation_id: Conversation identifier
            user_id: Requesting user
            with_messages: Eagerly load the message list

        Returns:
            Conversation if found and owned by the user, None otherwise
        """
        query = select(ConversationModel).where(
            ConversationModel.id == conversation_id,
            ConversationModel.user_id == user_id,
        )
        if with_messages:
            query = query.options(selectinload(ConversationModel.messages))

        result = await self._session.execute(query)
        return result.scalar_one_or_none()

    async def create_conversation(self, user_id: UUID, title: str = "New Chat") -> ConversationModel:
        return await self.create(ConversationModel(user_id=user_id, title=title))

    async def get_turns(self, conversation_id: int) -> list[ChatTurn]:
        """Stored turns of a conversation in the order they were written."""
        result = await self._session.execute(
            select(MessageModel)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.id)
        )
        return [message.to_turn() for message in result.scalars().all()]

    async def add_turn(self, conversation_id: int, role: ChatRole, content: str) -> ChatTurn:
        """
        Append a turn to a conversation and commit it.

        Committing per turn ends the request transaction before the
        companion reply is generated, so no connection stays checked
        out across the completion retry schedule.
        """
        message = MessageModel(
            conversation_id=conversation_id,
            role=role.value,
            content=content,
        )
        self._session.add(message)
        await self._session.commit()
        return message.to_turn()
