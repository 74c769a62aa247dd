"""Test factories for creating test data."""

from tests.factories.memory import ContextChainFactory, ContextFactory, MessageFactory
from tests.factories.plugins import PluginFactory, StaticPlugin

__all__ = [
    "ContextChainFactory",
    "ContextFactory",
    "MessageFactory",
    "PluginFactory",
    "StaticPlugin",
]
