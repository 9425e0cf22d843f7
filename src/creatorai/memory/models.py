"""Data models for conversation memory.

These models define the structure of stored conversation turns,
independent of the key-value backend used to persist them.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MessageRole(str, Enum):
    """Who authored a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ConversationMessage(BaseModel):
    """A single user or assistant turn.

    Messages are immutable once created; the history only appends and evicts.
    """

    model_config = ConfigDict(frozen=True)

    role: MessageRole = Field(description="Author of the message")
    content: str = Field(description="Message text")
    timestamp: datetime = Field(default_factory=utc_now)
    id: str = Field(default_factory=lambda: str(uuid4()))

    def to_transcript_line(self) -> str:
        """Render the message as one line of a prompt transcript."""
        speaker = "User" if self.role == MessageRole.USER else "Assistant"
        return f"{speaker}: {self.content}"


# Serialized form of the whole history (a JSON array of messages)
MessageList = TypeAdapter(list[ConversationMessage])
