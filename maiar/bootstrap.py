"""Bootstrap module for wiring a Maiar runtime from configuration.

Handles:
- Configuring structlog from settings
- Building the monitor service that every component publishes to
- Creating the memory service over a conversation store
- Creating the plugin registry
- Adding model providers, instrumented when configured

Example usage:

    from maiar.bootstrap import bootstrap
    from maiar.providers import MockModelProvider

    runtime = bootstrap()
    await runtime.add_provider(MockModelProvider())
    await runtime.memory.store_user_interaction("alice", "web", "hi", 1000)
    reply = await runtime.execute_capability("text-generation", "hi")
"""

from dataclasses import dataclass, field
from typing import Any

from maiar.config import Settings, get_settings
from maiar.errors import NotFoundError
from maiar.memory.service import MemoryService
from maiar.memory.store import ConversationStore
from maiar.memory.stores.inmemory import InMemoryConversationStore
from maiar.observability.events import LoggingEventSink, MonitorService
from maiar.observability.logging import get_logger, setup_logging
from maiar.observability.metrics import setup_metrics
from maiar.providers.base import ModelProvider
from maiar.providers.instrumentation import InstrumentedModelProvider
from maiar.providers.models import ModelRequestConfig
from maiar.registry.registry import PluginRegistry

logger = get_logger(__name__)


@dataclass
class Runtime:
    """The wired components of one runtime instance."""

    settings: Settings
    monitor: MonitorService
    memory: MemoryService
    plugins: PluginRegistry
    providers: list[ModelProvider] = field(default_factory=list)

    async def add_provider(self, provider: ModelProvider) -> ModelProvider:
        """Initialize a provider and make it available for dispatch.

        init() runs before wrapping so that capabilities attached during
        init are part of the instrumented snapshot.

        Returns:
            The provider as registered (instrumented when configured)
        """
        await provider.init()
        if self.settings.providers.instrument:
            provider = InstrumentedModelProvider(provider, self.monitor)
        self.providers.append(provider)
        logger.info(
            "model_provider_added",
            provider_id=provider.id,
            capabilities=[c.id for c in provider.get_capabilities()],
            instrumented=self.settings.providers.instrument,
        )
        return provider

    def find_provider(self, capability_id: str) -> ModelProvider | None:
        """First added provider that offers the capability."""
        for provider in self.providers:
            if provider.has_capability(capability_id):
                return provider
        return None

    async def execute_capability(
        self,
        capability_id: str,
        input: Any,
        config: ModelRequestConfig | None = None,
    ) -> Any:
        """Execute a capability on the first provider that offers it.

        Raises:
            NotFoundError: If no provider offers the capability
        """
        provider = self.find_provider(capability_id)
        if provider is None:
            raise NotFoundError(
                f"No model provider offers capability {capability_id}; "
                f"providers: {', '.join(p.id for p in self.providers) or 'none'}"
            )
        return await provider.execute_capability(capability_id, input, config)

    async def check_health(self) -> None:
        """Check every provider, raising the first failure."""
        for provider in self.providers:
            await provider.check_health()


def bootstrap(
    settings: Settings | None = None,
    store: ConversationStore | None = None,
) -> Runtime:
    """Build a Runtime from settings.

    Args:
        settings: Configuration (default: get_settings())
        store: Conversation store (default: in-memory)

    Returns:
        A Runtime with a structlog-backed monitor subscribed to all events
    """
    settings = settings or get_settings()

    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    metrics_config = settings.observability.metrics
    if metrics_config.expose:
        setup_metrics(metrics_config.port)

    monitor = MonitorService()
    monitor.subscribe("*", LoggingEventSink())

    memory = MemoryService(
        store or InMemoryConversationStore(),
        monitor,
        history_limit=settings.memory.history_limit,
        serialize_first_access=settings.memory.serialize_first_access,
    )

    logger.info("runtime_bootstrapped", app_name=settings.app_name)

    return Runtime(
        settings=settings,
        monitor=monitor,
        memory=memory,
        plugins=PluginRegistry(monitor),
    )
