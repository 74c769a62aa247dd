"""Test factories for memory models."""

from maiar.memory.models import Context, ContextItem, Message, MessageRole


class MessageFactory:
    """Factory for creating Message instances for testing."""

    @staticmethod
    def create(
        *,
        id: str = "web-1000",
        role: MessageRole = MessageRole.USER,
        content: str = "hi",
        timestamp: int = 1000,
        context_id: str | None = None,
        user_message_id: str | None = None,
    ) -> Message:
        """Create a Message with sensible defaults."""
        return Message(
            id=id,
            role=role,
            content=content,
            timestamp=timestamp,
            context_id=context_id,
            user_message_id=user_message_id,
        )


class ContextFactory:
    """Factory for creating Context instances for testing."""

    @staticmethod
    def create(
        *,
        id: str = "web-alice-context-2000",
        type: str = "context_chain",
        content: str = "[]",
        timestamp: int = 2000,
    ) -> Context:
        return Context(id=id, type=type, content=content, timestamp=timestamp)


class ContextChainFactory:
    """Factory for processing chains as the runtime builds them."""

    @staticmethod
    def create(
        user_message_id: str = "web-1000",
        user_text: str = "hi",
        steps: int = 1,
    ) -> list[ContextItem]:
        """Create a chain headed by the user message, followed by plugin steps.

        Args:
            user_message_id: Id of the triggering user message
            user_text: Text of the triggering user message
            steps: Number of plugin steps appended after the head

        Returns:
            Ordered chain of ContextItems
        """
        chain = [
            ContextItem(
                id=user_message_id,
                plugin_id="plugin-web",
                action="receive_message",
                type="user_input",
                content=user_text,
                timestamp=1000,
            )
        ]
        for i in range(steps):
            chain.append(
                ContextItem(
                    id=f"step-{i}",
                    plugin_id="plugin-character",
                    action="inject_character",
                    type="plugin_result",
                    content={"character": "helpful"},
                    timestamp=1001 + i,
                )
            )
        return chain
