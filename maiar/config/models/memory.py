"""Conversation memory configuration."""

from pydantic import BaseModel, Field


class MemoryConfig(BaseModel):
    """Configuration for the memory service."""

    history_limit: int = Field(
        default=100,
        gt=0,
        description="Default number of messages returned as recent history",
    )
    serialize_first_access: bool = Field(
        default=True,
        description="Serialize get-or-create per conversation id",
    )
