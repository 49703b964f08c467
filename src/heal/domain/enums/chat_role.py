"""Chat Role Enumeration"""

from enum import StrEnum


class ChatRole(StrEnum):
    """Author of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"

    @classmethod
    def from_wire(cls, value: str) -> "ChatRole":
        """
        Map a client role label to a chat role.

        The mobile client labels companion turns ``"ai"``; anything
        that is not a companion label is treated as the user.
        """
        if value in ("ai", "assistant"):
            return cls.ASSISTANT
        return cls.USER
