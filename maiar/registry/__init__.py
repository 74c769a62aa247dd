"""Plugin identity registry."""

from maiar.registry.registry import PluginRegistry

__all__ = ["PluginRegistry"]
