"""ConversationStore abstract interface."""

from abc import ABC, abstractmethod
from typing import Any

from maiar.memory.models import Context, Conversation, MemoryQueryOptions, Message


class ConversationStore(ABC):
    """Abstract interface for conversation persistence.

    Stores messages and contexts per conversation. Implementations must
    raise maiar.errors.NotFoundError from get_conversation() when the
    conversation does not exist, and should treat create_conversation()
    with an existing id as a no-op returning that id.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Store name for logging."""
        pass

    @abstractmethod
    async def store_message(self, message: Message, conversation_id: str) -> None:
        """Append a message to a conversation."""
        pass

    @abstractmethod
    async def store_context(self, context: Context, conversation_id: str) -> None:
        """Append a context record to a conversation."""
        pass

    @abstractmethod
    async def get_messages(self, options: MemoryQueryOptions) -> list[Message]:
        """Get messages in chronological order."""
        pass

    @abstractmethod
    async def get_contexts(self, conversation_id: str) -> list[Context]:
        """Get contexts in write order."""
        pass

    @abstractmethod
    async def get_conversation(self, conversation_id: str) -> Conversation:
        """Get a conversation, raising NotFoundError if absent."""
        pass

    @abstractmethod
    async def create_conversation(
        self,
        id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Create a conversation, returning its id."""
        pass

    @abstractmethod
    async def delete_conversation(self, conversation_id: str) -> None:
        """Delete a conversation and everything in it."""
        pass
