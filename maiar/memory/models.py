"""Conversation memory models.

Messages and contexts are write-once records; they are frozen so a
stored value can never be changed in place. Timestamps are integer
milliseconds since the epoch.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CONTEXT_CHAIN = "context_chain"


class MessageRole(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique message id")
    role: MessageRole = Field(..., description="user or assistant")
    content: str = Field(..., description="Message text")
    timestamp: int = Field(..., description="Epoch milliseconds")
    context_id: str | None = Field(
        default=None, description="Context record this response was built from"
    )
    user_message_id: str | None = Field(
        default=None, description="User message that triggered this response"
    )


class Context(BaseModel):
    """A persisted processing record, usually a serialized context chain."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique context id")
    type: str = Field(..., description="Record kind, e.g. context_chain")
    content: str = Field(..., description="Serialized payload")
    timestamp: int = Field(..., description="Epoch milliseconds")


class Conversation(BaseModel):
    """A conversation with its messages and contexts in write order."""

    id: str = Field(..., description="Conversation id")
    messages: list[Message] = Field(default_factory=list)
    contexts: list[Context] = Field(default_factory=list)
    metadata: dict[str, Any] | None = Field(default=None)


class MemoryQueryOptions(BaseModel):
    """Filters for reading messages from a conversation."""

    conversation_id: str = Field(..., description="Conversation to read")
    limit: int | None = Field(
        default=None, gt=0, description="Return at most this many, newest kept"
    )
    after: int | None = Field(
        default=None, description="Only messages with timestamp > after"
    )
    before: int | None = Field(
        default=None, description="Only messages with timestamp < before"
    )


class ContextItem(BaseModel):
    """One step of the processing chain that produced a response.

    The first item of a chain is the triggering user message and must
    carry its id. Plugins may attach extra fields.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(default=None)
    plugin_id: str | None = Field(default=None)
    action: str | None = Field(default=None)
    type: str | None = Field(default=None)
    content: Any = Field(default=None)
    timestamp: int | None = Field(default=None)


class HistoryEntry(BaseModel):
    """A message reduced to what prompt building needs."""

    role: MessageRole
    content: str
    timestamp: int
