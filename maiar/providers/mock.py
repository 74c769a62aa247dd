"""Mock model provider for testing and local development."""

from typing import Any

from maiar.providers.base import ModelProvider
from maiar.providers.models import (
    TEXT_GENERATION,
    ModelCapability,
    ModelRequestConfig,
)


class MockModelProvider(ModelProvider):
    """Provider with a canned text-generation capability.

    Returns configurable responses without making API calls and records
    every call for assertions.
    """

    def __init__(
        self,
        id: str = "mock",
        default_response: str = "Mock response",
        responses: dict[str, str] | None = None,
        healthy: bool = True,
    ) -> None:
        """Initialize mock provider.

        Args:
            id: Provider id
            default_response: Response when no trigger matches
            responses: Maps prompt text to the response to return
            healthy: Whether check_health() succeeds
        """
        super().__init__(id, "Mock", "Canned responses for tests")
        self._default_response = default_response
        self._responses = dict(responses or {})
        self._healthy = healthy
        self._failure: Exception | None = None
        self._call_history: list[dict[str, Any]] = []

        self.add_capability(
            ModelCapability(
                id=TEXT_GENERATION,
                name="Text generation",
                description="Return a canned completion for a prompt",
                execute=self._generate_text,
                input_type=str,
                output_type=str,
            )
        )

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """History of capability calls."""
        return self._call_history

    def set_response(self, trigger: str, response: str) -> None:
        """Set the response returned for a specific prompt."""
        self._responses[trigger] = response

    def fail_with(self, error: Exception | None) -> None:
        """Make text generation raise error; None restores normal behaviour."""
        self._failure = error

    async def _generate_text(
        self, prompt: str, config: ModelRequestConfig | None = None
    ) -> str:
        self._call_history.append({
            "capability": TEXT_GENERATION,
            "input": prompt,
            "config": config,
        })
        if self._failure is not None:
            raise self._failure

        content = self._responses.get(prompt, self._default_response)
        if config is not None and config.max_tokens is not None:
            # ~4 chars per token
            content = content[: config.max_tokens * 4]
        return content

    async def check_health(self) -> None:
        if not self._healthy:
            raise ConnectionError(f"Mock provider {self.id} is unhealthy")
