"""
Conversation Database Models

SQLAlchemy ORM models for companion conversation threads and the
messages exchanged in them.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from heal.domain.enums.chat_role import ChatRole
from heal.domain.models.chat import ChatTurn
from heal.infrastructure.database.connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationModel(Base):
    """
    Conversation thread table ORM model.

    Table: conversations
    """

    __tablename__ = "conversations"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Conversation identifier"
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        doc="Owning user reference"
    )
    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        default="New Chat",
    )
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="chat",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )

    messages: Mapped[list["MessageModel"]] = relationship(
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MessageModel.id",
    )

    def __repr__(self) -> str:
        return f"<ConversationModel(id={self.id}, title={self.title!r})>"


class MessageModel(Base):
    """
    Conversation message table ORM model.

    Roles are stored as "user" or "assistant".

    Table: messages
    """

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    conversation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )

    conversation: Mapped[ConversationModel] = relationship(back_populates="messages")

    def __repr__(self) -> str:
        return f"<MessageModel(id={self.id}, role={self.role})>"

    def to_turn(self) -> ChatTurn:
        """Convert to the domain chat turn."""
        return ChatTurn(
            role=ChatRole(self.role),
            content=self.content,
            created_at=self.created_at,
        )
