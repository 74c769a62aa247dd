"""Plugin identity registry."""

from typing import Any, NoReturn

from maiar.errors import CollisionError, ValidationError
from maiar.observability.events import EventSink, emit_event
from maiar.observability.metrics import PLUGIN_REGISTRATIONS
from maiar.plugins.base import PLUGIN_ID_PREFIX, Plugin


class PluginRegistry:
    """Validates and stores plugins by id.

    Ids must be non-empty strings starting with "plugin-" and are unique:
    registering an id twice is rejected and the first plugin stays.
    """

    def __init__(self, events: EventSink) -> None:
        self._events = events
        self._plugins: dict[str, Plugin] = {}

    async def _reject(
        self,
        error: ValidationError | CollisionError,
        event_type: str,
        message: str,
        metadata: dict[str, Any],
    ) -> NoReturn:
        PLUGIN_REGISTRATIONS.labels(outcome="rejected").inc()
        await emit_event(
            self._events, event_type, message, log_level="error", metadata=metadata
        )
        raise error

    async def _validate_plugin_id(self, id: Any) -> None:
        if not isinstance(id, str):
            await self._reject(
                ValidationError("Plugin ID must be a string"),
                "registry.plugin.validation.failed",
                "Plugin ID validation failed",
                {"error": "ID must be a string", "received": type(id).__name__},
            )
        if not id:
            await self._reject(
                ValidationError("Plugin ID cannot be empty"),
                "registry.plugin.validation.failed",
                "Plugin ID validation failed",
                {"error": "ID cannot be empty"},
            )
        if not id.startswith(PLUGIN_ID_PREFIX):
            await self._reject(
                ValidationError(f'Plugin ID must start with "{PLUGIN_ID_PREFIX}"'),
                "registry.plugin.validation.failed",
                "Plugin ID validation failed",
                {"error": f'ID must start with "{PLUGIN_ID_PREFIX}"', "id": id},
            )

    async def register(self, plugin: Plugin | None) -> None:
        """Register a plugin.

        Raises:
            ValidationError: If plugin is None or its id is malformed
            CollisionError: If a plugin with the same id is registered
        """
        if plugin is None:
            await self._reject(
                ValidationError("Cannot register null plugin"),
                "registry.plugin.registration.failed",
                "Plugin registration failed",
                {"error": "Plugin is None"},
            )

        await self._validate_plugin_id(getattr(plugin, "id", None))

        if plugin.id in self._plugins:
            existing = list(self._plugins)
            await self._reject(
                CollisionError(
                    f"Plugin ID collision: {plugin.id} is already registered.\n"
                    f"Currently registered plugins: {', '.join(existing)}"
                ),
                "registry.plugin.id.collision",
                "Plugin ID collision",
                {"id": plugin.id, "existing_plugins": existing},
            )

        self._plugins[plugin.id] = plugin
        PLUGIN_REGISTRATIONS.labels(outcome="registered").inc()
        await emit_event(
            self._events,
            "registry.plugin.registered",
            f"Registered plugin {plugin.id}",
            metadata={"id": plugin.id, "name": plugin.name},
        )

    async def get_plugin(self, id: str) -> Plugin | None:
        """Get a plugin by id; None (with a warning event) when absent."""
        plugin = self._plugins.get(id)
        if plugin is None:
            await emit_event(
                self._events,
                "registry.plugin.not_found",
                "Plugin not found",
                log_level="warn",
                metadata={"id": id, "available_plugins": list(self._plugins)},
            )
        return plugin

    def get_all_plugins(self) -> list[Plugin]:
        """All plugins in registration order."""
        return list(self._plugins.values())

    def __contains__(self, id: object) -> bool:
        return id in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)
