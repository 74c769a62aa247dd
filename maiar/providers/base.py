"""Model provider base class.

A ModelProvider owns a capability table keyed by capability id and
dispatches execution requests against it. Concrete providers attach
their capabilities in __init__ or in init(), and implement check_health().
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from maiar.errors import NotFoundError
from maiar.observability.events import EventSink, NullEventSink
from maiar.providers.models import ModelCapability, ModelRequestConfig


class ModelProvider(ABC):
    """Abstract base for model providers.

    Example:
        provider = MyProvider("openai", "OpenAI", "OpenAI chat models")
        text = await provider.execute_capability("text-generation", "Hello")
    """

    def __init__(
        self,
        id: str,
        name: str,
        description: str,
        events: EventSink | None = None,
    ) -> None:
        """Initialize the provider with an empty capability table.

        Args:
            id: Provider id used for logging and correlation
            name: Display name
            description: What the provider offers
            events: Sink for events the provider itself wants to publish
        """
        self.id = id
        self.name = name
        self.description = description
        self.events: EventSink = events or NullEventSink()
        self._capabilities: dict[str, ModelCapability] = {}

    @property
    def capabilities(self) -> Mapping[str, ModelCapability]:
        """Read-only view of the capability table."""
        return MappingProxyType(self._capabilities)

    def add_capability(self, capability: ModelCapability) -> None:
        """Add a capability, replacing any existing one with the same id."""
        self._capabilities[capability.id] = capability

    def get_capabilities(self) -> list[ModelCapability]:
        """All capabilities in insertion order."""
        return list(self._capabilities.values())

    def has_capability(self, capability_id: str) -> bool:
        return capability_id in self._capabilities

    def get_capability(self, capability_id: str) -> ModelCapability | None:
        return self._capabilities.get(capability_id)

    async def execute_capability(
        self,
        capability_id: str,
        input: Any,
        config: ModelRequestConfig | None = None,
    ) -> Any:
        """Execute a capability by id.

        Args:
            capability_id: Id of the capability to run
            input: Capability input, passed through unchanged
            config: Optional request configuration

        Returns:
            Whatever the capability returns

        Raises:
            NotFoundError: If this provider has no such capability
        """
        capability = self._capabilities.get(capability_id)
        if capability is None:
            raise NotFoundError(
                f"Capability {capability_id} not found on model {self.id}"
            )
        return await capability.execute(input, config)

    async def init(self) -> None:
        """Perform any setup needed before use."""
        return None

    @abstractmethod
    async def check_health(self) -> None:
        """Raise if the provider is not usable."""
        pass

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, "
            f"capabilities={list(self._capabilities)!r})"
        )
