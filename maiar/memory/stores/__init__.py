"""Conversation stores."""

from maiar.memory.store import ConversationStore
from maiar.memory.stores.inmemory import InMemoryConversationStore

__all__ = [
    "ConversationStore",
    "InMemoryConversationStore",
]
