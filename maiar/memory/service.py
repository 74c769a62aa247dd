"""Conversation memory service.

MemoryService sits between the runtime and a ConversationStore. It owns:
- Conversation identity: one conversation per (user, platform), with id
  "{platform}-{user}"
- Write ordering: an assistant turn writes its context chain first and
  the response message second, so message.context_id always resolves
- Reference integrity: an assistant message records the id of the user
  message that triggered it, taken from the head of the context chain

Every operation publishes monitor events. Failures are published and
re-raised, except get_recent_conversation_history() which returns an
empty list instead.
"""

import json
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from maiar.errors import MissingReferenceError, NotFoundError
from maiar.memory.locks import KeyedLock
from maiar.memory.models import (
    CONTEXT_CHAIN,
    Context,
    Conversation,
    HistoryEntry,
    MemoryQueryOptions,
    Message,
    MessageRole,
)
from maiar.memory.store import ConversationStore
from maiar.observability.events import EventSink, emit_event
from maiar.observability.logging import get_logger
from maiar.observability.metrics import MEMORY_WRITES

logger = get_logger(__name__)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def _chain_item_id(item: Any) -> str | None:
    if isinstance(item, Mapping):
        value = item.get("id")
    else:
        value = getattr(item, "id", None)
    return value if isinstance(value, str) and value else None


def _chain_item_payload(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump(mode="json", exclude_none=True)
    if isinstance(item, Mapping):
        return dict(item)
    return item


def serialize_chain(chain: Sequence[Any]) -> str:
    """Serialize a processing chain to a JSON array, preserving order."""
    return json.dumps([_chain_item_payload(item) for item in chain], default=str)


class MemoryService:
    """Stores and retrieves conversational state through a ConversationStore.

    Example:
        memory = MemoryService(InMemoryConversationStore(), events)

        await memory.store_user_interaction("alice", "web", "hi", 1000)
        await memory.store_assistant_interaction(
            "alice", "web", "hello", [{"id": "web-1000"}]
        )
    """

    def __init__(
        self,
        store: ConversationStore,
        events: EventSink,
        *,
        clock: Callable[[], int] | None = None,
        history_limit: int = 100,
        serialize_first_access: bool = True,
    ) -> None:
        """Initialize the service.

        Args:
            store: Persistence backend
            events: Sink for monitor events
            clock: Returns epoch milliseconds; used to stamp assistant turns
            history_limit: Default limit for get_recent_conversation_history
            serialize_first_access: Guard get-or-create with a per-id lock
        """
        if store is None:
            raise ValueError("Conversation store is required")

        self._store = store
        self._events = events
        self._clock = clock or now_ms
        self._history_limit = history_limit
        self._locks: KeyedLock | None = KeyedLock() if serialize_first_access else None

        logger.info(
            "memory_service_initialized",
            store=store.name,
            serialize_first_access=serialize_first_access,
        )

    @property
    def store(self) -> ConversationStore:
        return self._store

    @staticmethod
    def conversation_id(user: str, platform: str) -> str:
        """Deterministic conversation id for a user on a platform."""
        return f"{platform}-{user}"

    # ------------------------------------------------------------------
    # Turn storage
    # ------------------------------------------------------------------

    async def store_user_interaction(
        self,
        user: str,
        platform: str,
        text: str,
        timestamp: int,
        message_id: str | None = None,
    ) -> None:
        """Store an incoming user message.

        Args:
            user: User identifier on the platform
            platform: Platform name, e.g. "web"
            text: Message text
            timestamp: Epoch milliseconds of the message
            message_id: Id to use; defaults to "{platform}-{timestamp}"
        """
        try:
            await emit_event(
                self._events,
                "memory.user.interaction.storing",
                "Storing user interaction",
                metadata={"user": user, "platform": platform, "message_id": message_id},
            )

            conversation_id = await self.get_or_create_conversation(user, platform)
            final_message_id = message_id or f"{platform}-{timestamp}"

            await self.store_message(
                Message(
                    id=final_message_id,
                    role=MessageRole.USER,
                    content=text,
                    timestamp=timestamp,
                ),
                conversation_id,
            )

            await emit_event(
                self._events,
                "memory.message.stored",
                "Stored user message",
                metadata={
                    "message_id": final_message_id,
                    "conversation_id": conversation_id,
                    "was_provided": message_id is not None,
                },
            )
        except Exception as e:
            await emit_event(
                self._events,
                "memory.user.interaction.failed",
                "Failed to store user interaction",
                log_level="error",
                metadata={"error": str(e), "user": user, "platform": platform},
            )
            raise

    async def store_assistant_interaction(
        self,
        user: str,
        platform: str,
        text: str,
        processing_chain: Sequence[Any],
        *,
        timestamp: int | None = None,
    ) -> None:
        """Store an assistant response together with the chain that produced it.

        The chain is written as a context record before the message. Its
        first element must be the triggering user message carrying an id.

        Args:
            user: User identifier on the platform
            platform: Platform name
            text: Response text
            processing_chain: Ordered ContextItems or mappings
            timestamp: Epoch milliseconds; defaults to the service clock

        Raises:
            MissingReferenceError: If the chain is empty or its head has no id.
                Nothing is written in that case.
        """
        try:
            await emit_event(
                self._events,
                "memory.assistant.interaction.storing",
                "Storing assistant interaction",
                metadata={"user": user, "platform": platform},
            )

            user_message_id = (
                _chain_item_id(processing_chain[0]) if processing_chain else None
            )
            if user_message_id is None:
                raise MissingReferenceError("No user message ID found in context chain")

            conversation_id = await self.get_or_create_conversation(user, platform)

            ts = timestamp if timestamp is not None else self._clock()
            context_id = f"{conversation_id}-context-{ts}"
            message_id = f"{conversation_id}-assistant-{ts}"

            await self.store_context(
                Context(
                    id=context_id,
                    type=CONTEXT_CHAIN,
                    content=serialize_chain(processing_chain),
                    timestamp=ts,
                ),
                conversation_id,
            )
            await emit_event(
                self._events,
                "memory.context.stored",
                "Stored context",
                metadata={"context_id": context_id, "conversation_id": conversation_id},
            )

            await self.store_message(
                Message(
                    id=message_id,
                    role=MessageRole.ASSISTANT,
                    content=text,
                    timestamp=ts,
                    context_id=context_id,
                    user_message_id=user_message_id,
                ),
                conversation_id,
            )

            await emit_event(
                self._events,
                "memory.assistant.interaction.completed",
                "Successfully stored assistant interaction and context",
                metadata={
                    "message_id": message_id,
                    "context_id": context_id,
                    "conversation_id": conversation_id,
                    "user_message_id": user_message_id,
                },
            )
        except Exception as e:
            await emit_event(
                self._events,
                "memory.assistant.interaction.failed",
                "Failed to store assistant interaction",
                log_level="error",
                metadata={"error": str(e), "user": user, "platform": platform},
            )
            raise

    # ------------------------------------------------------------------
    # Store delegation
    # ------------------------------------------------------------------

    async def store_message(self, message: Message, conversation_id: str) -> None:
        await emit_event(
            self._events,
            "memory.service.store_message.called",
            "MemoryService.store_message called",
            log_level="debug",
            metadata={
                "conversation_id": conversation_id,
                "message": message.model_dump(mode="json"),
            },
        )
        await self._store.store_message(message, conversation_id)
        MEMORY_WRITES.labels(kind="message").inc()

    async def store_context(self, context: Context, conversation_id: str) -> None:
        await emit_event(
            self._events,
            "memory.service.store_context.called",
            "MemoryService.store_context called",
            log_level="debug",
            metadata={
                "conversation_id": conversation_id,
                "context": context.model_dump(mode="json"),
            },
        )
        await self._store.store_context(context, conversation_id)
        MEMORY_WRITES.labels(kind="context").inc()

    async def get_messages(self, options: MemoryQueryOptions) -> list[Message]:
        await emit_event(
            self._events,
            "memory.service.get_messages.called",
            "MemoryService.get_messages called",
            log_level="debug",
            metadata={"options": options.model_dump(exclude_none=True)},
        )
        return await self._store.get_messages(options)

    async def get_contexts(self, conversation_id: str) -> list[Context]:
        await emit_event(
            self._events,
            "memory.service.get_contexts.called",
            "MemoryService.get_contexts called",
            log_level="debug",
            metadata={"conversation_id": conversation_id},
        )
        return await self._store.get_contexts(conversation_id)

    async def get_conversation(self, conversation_id: str) -> Conversation:
        await emit_event(
            self._events,
            "memory.service.get_conversation.called",
            "MemoryService.get_conversation called",
            log_level="debug",
            metadata={"conversation_id": conversation_id},
        )
        return await self._store.get_conversation(conversation_id)

    async def create_conversation(
        self,
        id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        await emit_event(
            self._events,
            "memory.service.create_conversation.called",
            "MemoryService.create_conversation called",
            metadata={"id": id, "metadata": metadata},
        )
        return await self._store.create_conversation(id=id, metadata=metadata)

    async def delete_conversation(self, conversation_id: str) -> None:
        await emit_event(
            self._events,
            "memory.service.delete_conversation.called",
            "MemoryService.delete_conversation called",
            log_level="warn",
            metadata={"conversation_id": conversation_id},
        )
        await self._store.delete_conversation(conversation_id)

    # ------------------------------------------------------------------
    # Conversation lookup
    # ------------------------------------------------------------------

    async def get_or_create_conversation(self, user: str, platform: str) -> str:
        """Return the conversation id for (user, platform), creating it if needed.

        Only NotFoundError from the store triggers creation; any other
        error propagates.
        """
        conversation_id = self.conversation_id(user, platform)
        if self._locks is None:
            return await self._get_or_create(conversation_id)
        async with self._locks.acquire(conversation_id):
            return await self._get_or_create(conversation_id)

    async def _get_or_create(self, conversation_id: str) -> str:
        try:
            conversation = await self.get_conversation(conversation_id)
            return conversation.id
        except NotFoundError:
            return await self.create_conversation(id=conversation_id)

    async def get_recent_conversation_history(
        self,
        user: str,
        platform: str,
        limit: int | None = None,
    ) -> list[HistoryEntry]:
        """Most recent messages of a conversation, oldest first.

        Never raises: on failure an error event is published and an empty
        list returned.
        """
        try:
            messages = await self.get_messages(
                MemoryQueryOptions(
                    conversation_id=self.conversation_id(user, platform),
                    limit=limit or self._history_limit,
                )
            )
            return [
                HistoryEntry(role=m.role, content=m.content, timestamp=m.timestamp)
                for m in messages
            ]
        except Exception as e:
            await emit_event(
                self._events,
                "memory.conversation.history.failed",
                "Failed to get conversation history",
                log_level="error",
                metadata={"error": str(e), "user": user, "platform": platform},
            )
            return []
