"""
Shared request/response models for v1 endpoints.

Field names follow the mobile client's camelCase payloads.
"""

from pydantic import BaseModel, ConfigDict, Field

from heal.domain.models.chat import ChatReply


class ChatResponse(BaseModel):
    """Companion reply."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    is_crisis: bool = Field(..., alias="isCrisis")
    crisis_severity: str = Field(..., alias="crisisSeverity")

    @classmethod
    def from_reply(cls, reply: ChatReply) -> "ChatResponse":
        return cls(
            message=reply.message,
            is_crisis=reply.is_crisis,
            crisis_severity=reply.crisis_severity.value,
        )
