"""Conversational memory: conversations, messages and context chains.

MemoryService derives conversation identity, orders writes so that every
assistant message can be traced to the context chain and user message
behind it, and delegates storage to a pluggable ConversationStore.
"""

from maiar.memory.locks import KeyedLock
from maiar.memory.models import (
    CONTEXT_CHAIN,
    Context,
    ContextItem,
    Conversation,
    HistoryEntry,
    MemoryQueryOptions,
    Message,
    MessageRole,
)
from maiar.memory.service import MemoryService
from maiar.memory.store import ConversationStore
from maiar.memory.stores.inmemory import InMemoryConversationStore

__all__ = [
    # Models
    "CONTEXT_CHAIN",
    "Context",
    "ContextItem",
    "Conversation",
    "HistoryEntry",
    "MemoryQueryOptions",
    "Message",
    "MessageRole",
    # Service
    "KeyedLock",
    "MemoryService",
    # Stores
    "ConversationStore",
    "InMemoryConversationStore",
]
