"""Plugin contract: identities, executors and results."""

from maiar.plugins.base import (
    PLUGIN_ID_PREFIX,
    Executor,
    Plugin,
    PluginBase,
    PluginResult,
)

__all__ = [
    "PLUGIN_ID_PREFIX",
    "Executor",
    "Plugin",
    "PluginBase",
    "PluginResult",
]
