"""Model providers and capability dispatch.

Providers expose capabilities keyed by id. InstrumentedModelProvider adds
monitor events around every capability call without changing behaviour.
"""

from maiar.providers.base import ModelProvider
from maiar.providers.instrumentation import InstrumentedModelProvider, instrument
from maiar.providers.mock import MockModelProvider
from maiar.providers.models import (
    IMAGE_GENERATION,
    TEXT_GENERATION,
    CapabilityHandler,
    ModelCapability,
    ModelRequestConfig,
)

__all__ = [
    # Models
    "CapabilityHandler",
    "ModelCapability",
    "ModelRequestConfig",
    "TEXT_GENERATION",
    "IMAGE_GENERATION",
    # Providers
    "ModelProvider",
    "InstrumentedModelProvider",
    "MockModelProvider",
    "instrument",
]
