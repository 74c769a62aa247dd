"""Configuration section models."""

from maiar.config.models.memory import MemoryConfig
from maiar.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from maiar.config.models.providers import ProvidersConfig

__all__ = [
    "LoggingConfig",
    "MemoryConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "ProvidersConfig",
]
