"""Capability instrumentation.

instrument() wraps a single capability so that every call publishes a
capability.prompt event before running and exactly one of
capability.response or capability.error afterwards. Results and errors
pass through untouched.

InstrumentedModelProvider applies instrument() to every capability of
another provider. The capability set is copied once when the wrapper is
built: capabilities added to the wrapped provider afterwards are not
visible through the wrapper.
"""

import time
from datetime import UTC, datetime
from typing import Any

from maiar.observability.events import EventSink, emit_event
from maiar.observability.metrics import CAPABILITY_EXECUTIONS, CAPABILITY_LATENCY
from maiar.providers.base import ModelProvider
from maiar.providers.models import ModelCapability, ModelRequestConfig


def _dump_config(config: ModelRequestConfig | None) -> dict[str, Any] | None:
    if config is None:
        return None
    return config.model_dump(exclude_none=True)


def instrument(
    capability: ModelCapability,
    provider_id: str,
    events: EventSink,
) -> ModelCapability:
    """Return a copy of capability whose execution publishes monitor events.

    Args:
        capability: Capability to wrap
        provider_id: Id of the provider the capability belongs to
        events: Sink receiving the events

    Returns:
        A new ModelCapability with the same id, name, description and types
    """
    inner = capability.execute

    async def execute(input: Any, config: ModelRequestConfig | None = None) -> Any:
        await emit_event(
            events,
            "capability.prompt",
            f"Model {provider_id} sending prompt to capability {capability.id}",
            log_level="debug",
            metadata={
                "provider_id": provider_id,
                "capability_id": capability.id,
                "input": input,
                "config": _dump_config(config),
            },
        )

        started = time.perf_counter()
        try:
            response = await inner(input, config)
        except Exception as e:
            CAPABILITY_EXECUTIONS.labels(
                provider=provider_id, capability=capability.id, status="error"
            ).inc()
            await emit_event(
                events,
                "capability.error",
                f"Model {provider_id} encountered error with capability {capability.id}",
                log_level="error",
                metadata={
                    "provider_id": provider_id,
                    "capability_id": capability.id,
                    "error": str(e),
                    "input": input,
                },
            )
            raise

        CAPABILITY_LATENCY.labels(
            provider=provider_id, capability=capability.id
        ).observe(time.perf_counter() - started)
        CAPABILITY_EXECUTIONS.labels(
            provider=provider_id, capability=capability.id, status="success"
        ).inc()
        await emit_event(
            events,
            "capability.response",
            f"Model {provider_id} received response from capability {capability.id}",
            log_level="debug",
            metadata={
                "provider_id": provider_id,
                "capability_id": capability.id,
                "response": response,
                "timestamp": datetime.now(UTC).isoformat(),
                "config": _dump_config(config),
            },
        )
        return response

    return ModelCapability(
        id=capability.id,
        name=capability.name,
        description=capability.description,
        execute=execute,
        input_type=capability.input_type,
        output_type=capability.output_type,
    )


class InstrumentedModelProvider(ModelProvider):
    """Provider adapter that publishes events around capability calls.

    Identity matches the wrapped provider. Health checks and init are
    forwarded unchanged and publish nothing.
    """

    def __init__(self, provider: ModelProvider, events: EventSink) -> None:
        super().__init__(provider.id, provider.name, provider.description, events)
        self._provider = provider

        # Snapshot: later additions to provider stay invisible here
        for capability in provider.get_capabilities():
            self.add_capability(instrument(capability, provider.id, events))

    @property
    def wrapped(self) -> ModelProvider:
        """The underlying provider."""
        return self._provider

    async def check_health(self) -> None:
        return await self._provider.check_health()

    async def init(self) -> None:
        return await self._provider.init()
