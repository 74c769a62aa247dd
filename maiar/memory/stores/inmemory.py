"""In-memory implementation of ConversationStore."""

from typing import Any
from uuid import uuid4

from maiar.errors import NotFoundError
from maiar.memory.models import Context, Conversation, MemoryQueryOptions, Message
from maiar.memory.store import ConversationStore


class InMemoryConversationStore(ConversationStore):
    """In-memory implementation of ConversationStore for testing and development.

    Creating a conversation whose id already exists keeps the existing
    conversation and returns its id. Not suitable for production use.
    """

    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}

    @property
    def name(self) -> str:
        return "inmemory"

    def _require(self, conversation_id: str) -> Conversation:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise NotFoundError(f"Conversation {conversation_id} not found")
        return conversation

    async def store_message(self, message: Message, conversation_id: str) -> None:
        self._require(conversation_id).messages.append(message)

    async def store_context(self, context: Context, conversation_id: str) -> None:
        self._require(conversation_id).contexts.append(context)

    async def get_messages(self, options: MemoryQueryOptions) -> list[Message]:
        conversation = self._conversations.get(options.conversation_id)
        if conversation is None:
            return []

        results = [
            m
            for m in conversation.messages
            if (options.after is None or m.timestamp > options.after)
            and (options.before is None or m.timestamp < options.before)
        ]
        # Stable sort keeps write order for equal timestamps
        results.sort(key=lambda m: m.timestamp)
        if options.limit is not None:
            results = results[-options.limit:]
        return results

    async def get_contexts(self, conversation_id: str) -> list[Context]:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            return []
        return list(conversation.contexts)

    async def get_conversation(self, conversation_id: str) -> Conversation:
        return self._require(conversation_id).model_copy(deep=True)

    async def create_conversation(
        self,
        id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        conversation_id = id or str(uuid4())
        if conversation_id not in self._conversations:
            self._conversations[conversation_id] = Conversation(
                id=conversation_id, metadata=metadata
            )
        return conversation_id

    async def delete_conversation(self, conversation_id: str) -> None:
        self._require(conversation_id)
        del self._conversations[conversation_id]
