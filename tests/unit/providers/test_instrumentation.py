"""Unit tests for capability instrumentation."""

from typing import Any

import pytest
from prometheus_client import REGISTRY

from maiar.errors import NotFoundError
from maiar.providers import (
    TEXT_GENERATION,
    InstrumentedModelProvider,
    MockModelProvider,
    ModelCapability,
    ModelRequestConfig,
    instrument,
)


def executions(provider: str, capability: str, status: str) -> float:
    value = REGISTRY.get_sample_value(
        "maiar_capability_executions_total",
        {"provider": provider, "capability": capability, "status": status},
    )
    return value or 0.0


class TestInstrument:
    """Tests for wrapping a single capability."""

    async def test_success_publishes_prompt_then_response(self, events) -> None:
        async def execute(input: Any, config: ModelRequestConfig | None = None) -> str:
            return input.upper()

        capability = ModelCapability(
            id="shout", name="Shout", description="Upper-case", execute=execute
        )
        wrapped = instrument(capability, "p1", events)

        result = await wrapped.execute("hi", ModelRequestConfig(temperature=0.1))

        assert result == "HI"
        assert events.types() == ["capability.prompt", "capability.response"]
        prompt, response = events.events
        assert prompt.log_level == "debug"
        assert prompt.metadata == {
            "provider_id": "p1",
            "capability_id": "shout",
            "input": "hi",
            "config": {"temperature": 0.1},
        }
        assert response.metadata["response"] == "HI"
        assert response.metadata["capability_id"] == "shout"
        assert "timestamp" in response.metadata

    async def test_failure_publishes_error_and_reraises_same_object(self, events) -> None:
        error = ValueError("bad prompt")

        async def execute(input: Any, config: ModelRequestConfig | None = None) -> str:
            raise error

        capability = ModelCapability(id="bad", name="Bad", description="", execute=execute)
        wrapped = instrument(capability, "p1", events)

        with pytest.raises(ValueError) as exc_info:
            await wrapped.execute("hi")

        assert exc_info.value is error
        assert events.types() == ["capability.prompt", "capability.error"]
        error_event = events.events[1]
        assert error_event.log_level == "error"
        assert error_event.metadata["error"] == "bad prompt"
        assert error_event.metadata["input"] == "hi"

    def test_preserves_descriptor(self, events) -> None:
        async def execute(input: Any, config: ModelRequestConfig | None = None) -> int:
            return 1

        capability = ModelCapability(
            id="count",
            name="Count",
            description="Counts",
            execute=execute,
            input_type=str,
            output_type=int,
        )

        wrapped = instrument(capability, "p1", events)

        assert wrapped is not capability
        assert wrapped.execute is not execute
        assert (wrapped.id, wrapped.name, wrapped.description) == ("count", "Count", "Counts")
        assert (wrapped.input_type, wrapped.output_type) == (str, int)

    async def test_failing_sink_does_not_break_call(self) -> None:
        class BrokenSink:
            async def publish_event(self, event: Any) -> None:
                raise RuntimeError("sink down")

        async def execute(input: Any, config: ModelRequestConfig | None = None) -> str:
            return "ok"

        capability = ModelCapability(id="ok", name="Ok", description="", execute=execute)

        assert await instrument(capability, "p1", BrokenSink()).execute(None) == "ok"


class TestInstrumentedModelProvider:
    """Tests for the provider adapter."""

    async def test_identity_and_capabilities(self, events) -> None:
        inner = MockModelProvider(id="mock-a")

        wrapped = InstrumentedModelProvider(inner, events)

        assert (wrapped.id, wrapped.name, wrapped.description) == (
            inner.id,
            inner.name,
            inner.description,
        )
        assert wrapped.wrapped is inner
        assert [c.id for c in wrapped.get_capabilities()] == [TEXT_GENERATION]

    async def test_execute_publishes_two_events(self, events) -> None:
        wrapped = InstrumentedModelProvider(
            MockModelProvider(responses={"hi": "hello"}), events
        )

        assert await wrapped.execute_capability(TEXT_GENERATION, "hi") == "hello"
        assert events.types() == ["capability.prompt", "capability.response"]

    async def test_error_passes_through(self, events) -> None:
        inner = MockModelProvider()
        error = RuntimeError("quota exceeded")
        inner.fail_with(error)
        wrapped = InstrumentedModelProvider(inner, events)

        with pytest.raises(RuntimeError) as exc_info:
            await wrapped.execute_capability(TEXT_GENERATION, "hi")

        assert exc_info.value is error
        assert events.types() == ["capability.prompt", "capability.error"]

    async def test_unknown_capability_publishes_nothing(self, events) -> None:
        wrapped = InstrumentedModelProvider(MockModelProvider(), events)

        with pytest.raises(NotFoundError):
            await wrapped.execute_capability("image-generation", "a cat")
        assert events.events == []

    async def test_capability_set_fixed_at_wrap_time(self, events) -> None:
        """Capabilities added to the inner provider later are not visible."""
        inner = MockModelProvider()
        wrapped = InstrumentedModelProvider(inner, events)

        async def execute(input: Any, config: ModelRequestConfig | None = None) -> str:
            return "img"

        inner.add_capability(
            ModelCapability(id="image-generation", name="Image", description="", execute=execute)
        )

        assert inner.has_capability("image-generation")
        assert not wrapped.has_capability("image-generation")

    async def test_health_and_init_forwarded_silently(self, events) -> None:
        wrapped = InstrumentedModelProvider(MockModelProvider(healthy=False), events)

        await wrapped.init()
        with pytest.raises(ConnectionError):
            await wrapped.check_health()

        assert events.events == []

    async def test_records_execution_metrics(self, events) -> None:
        inner = MockModelProvider(id="metrics-mock")
        wrapped = InstrumentedModelProvider(inner, events)
        ok_before = executions("metrics-mock", TEXT_GENERATION, "success")
        err_before = executions("metrics-mock", TEXT_GENERATION, "error")

        await wrapped.execute_capability(TEXT_GENERATION, "hi")
        inner.fail_with(RuntimeError("down"))
        with pytest.raises(RuntimeError):
            await wrapped.execute_capability(TEXT_GENERATION, "hi")

        assert executions("metrics-mock", TEXT_GENERATION, "success") == ok_before + 1
        assert executions("metrics-mock", TEXT_GENERATION, "error") == err_before + 1
