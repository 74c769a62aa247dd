"""Capability definitions and request configuration.

A capability is one named unit of model functionality, e.g. text
generation. Providers dispatch capabilities by id; input_type and
output_type document the contract but are not checked at runtime.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Well-known capability ids
TEXT_GENERATION = "text-generation"
IMAGE_GENERATION = "image-generation"


class ModelRequestConfig(BaseModel):
    """Per-request generation options, passed through to capabilities."""

    model_config = ConfigDict(frozen=True)

    temperature: float | None = Field(
        default=None, ge=0.0, le=2.0, description="Sampling temperature"
    )
    max_tokens: int | None = Field(
        default=None, gt=0, description="Maximum tokens to generate"
    )
    stop_sequences: list[str] | None = Field(
        default=None, description="Strings that stop generation"
    )


CapabilityHandler = Callable[[Any, ModelRequestConfig | None], Awaitable[Any]]


@dataclass(frozen=True)
class ModelCapability:
    """A typed unit of model functionality exposed by a provider."""

    id: str
    name: str
    description: str
    execute: CapabilityHandler
    input_type: Any = Any
    output_type: Any = Any
