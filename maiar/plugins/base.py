"""Plugin contract.

A plugin is an identity plus a list of executors. Each executor is a
named async action the agent can decide to run; it reports back with a
PluginResult.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

PLUGIN_ID_PREFIX = "plugin-"


class PluginResult(BaseModel):
    """Outcome of running an executor."""

    success: bool = Field(..., description="Whether the executor succeeded")
    data: Any = Field(default=None, description="Payload on success")
    error: str | None = Field(default=None, description="Reason on failure")


@dataclass(frozen=True)
class Executor:
    """A named action exposed by a plugin."""

    name: str
    description: str
    execute: Callable[[], Awaitable[PluginResult]]


@runtime_checkable
class Plugin(Protocol):
    """What the registry needs from a plugin."""

    id: str
    name: str
    description: str

    @property
    def executors(self) -> tuple[Executor, ...]: ...


class PluginBase:
    """Convenience base class for plugins.

    Example:
        class PluginTime(PluginBase):
            def __init__(self) -> None:
                super().__init__("plugin-time", "Time", "Current time")
                self.add_executor(Executor("get_time", "Current time", self._now))
    """

    def __init__(self, id: str, name: str, description: str) -> None:
        self.id = id
        self.name = name
        self.description = description
        self._executors: dict[str, Executor] = {}

    @property
    def executors(self) -> tuple[Executor, ...]:
        return tuple(self._executors.values())

    def add_executor(self, executor: Executor) -> None:
        """Add an executor, replacing any with the same name."""
        self._executors[executor.name] = executor

    def get_executor(self, name: str) -> Executor | None:
        return self._executors.get(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
