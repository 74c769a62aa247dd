"""Monitor events and the sinks that receive them.

Every component takes an EventSink in its constructor and reports what
it is doing as MonitorEvents. Publishing is fire-and-forget: emit_event()
isolates callers from sink failures, and MonitorService isolates sinks
from each other.

Event types use category.name format, e.g. "capability.prompt" or
"memory.context.stored". Subscriptions match:
- "*" for every event
- "memory.*" for every event whose type starts with "memory."
- "capability.error" for one exact type
"""

import asyncio
from collections import defaultdict
from datetime import UTC, datetime
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from maiar.observability.logging import get_logger

logger = get_logger(__name__)

EventLogLevel = Literal["debug", "info", "warn", "error"]

# structlog method for each event log level
_LOG_METHODS: dict[str, str] = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "error": "error",
}


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class MonitorEvent(BaseModel):
    """A structured observability event."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Event type in category.name format")
    message: str = Field(..., description="Human readable summary")
    log_level: EventLogLevel = Field(default="info", description="Severity")
    metadata: dict[str, Any] | None = Field(
        default=None, description="Arbitrary structured payload"
    )
    timestamp: datetime = Field(default_factory=utc_now)

    @property
    def category(self) -> str:
        """Leading segment of the type. Example: 'memory.context.stored' → 'memory'"""
        return self.type.split(".", 1)[0]

    def matches_pattern(self, pattern: str) -> bool:
        """Check if the event matches '*', 'category.*' or an exact type."""
        if pattern == "*" or pattern == self.type:
            return True
        if pattern.endswith(".*"):
            return self.type.startswith(pattern[:-1])
        return False


@runtime_checkable
class EventSink(Protocol):
    """Anything that accepts monitor events."""

    async def publish_event(self, event: MonitorEvent) -> None:
        """Accept an event. Must not block the caller for long."""
        ...


class NullEventSink:
    """Sink that discards every event."""

    async def publish_event(self, event: MonitorEvent) -> None:
        return None


class LoggingEventSink:
    """Sink that renders events through structlog.

    The event type becomes the structlog event name and the log level
    picks the logger method (warn maps to warning).
    """

    def __init__(self, logger_name: str = "maiar.monitor") -> None:
        self._logger = get_logger(logger_name)

    async def publish_event(self, event: MonitorEvent) -> None:
        method = getattr(self._logger, _LOG_METHODS[event.log_level])
        method(
            event.type,
            message=event.message,
            metadata=event.metadata or {},
            event_timestamp=event.timestamp.isoformat(),
        )


class MonitorService:
    """Fans events out to subscribed sinks.

    Sinks are subscribed under a pattern and receive every event that
    matches it. Matching sinks run concurrently; a failing sink is logged
    and never affects the publisher or the other sinks.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[EventSink]] = defaultdict(list)

    def subscribe(self, pattern: str, sink: EventSink) -> None:
        """Subscribe a sink to events matching a pattern."""
        self._subscriptions[pattern].append(sink)
        logger.debug(
            "event_sink_subscribed",
            pattern=pattern,
            total_sinks=len(self._subscriptions[pattern]),
        )

    def unsubscribe(self, pattern: str, sink: EventSink) -> bool:
        """Remove a sink from a pattern. Returns False if it was not there."""
        sinks = self._subscriptions.get(pattern)
        if not sinks or sink not in sinks:
            logger.warning("event_sink_not_found", pattern=pattern)
            return False
        sinks.remove(sink)
        return True

    def sinks_for(self, event: MonitorEvent) -> list[EventSink]:
        """All sinks whose pattern matches the event, without duplicates."""
        matching: list[EventSink] = []
        for pattern, sinks in self._subscriptions.items():
            if event.matches_pattern(pattern):
                matching.extend(s for s in sinks if s not in matching)
        return matching

    async def publish_event(self, event: MonitorEvent) -> None:
        sinks = self.sinks_for(event)
        if not sinks:
            return
        await asyncio.gather(*(self._dispatch(sink, event) for sink in sinks))

    async def _dispatch(self, sink: EventSink, event: MonitorEvent) -> None:
        try:
            await sink.publish_event(event)
        except Exception as e:
            logger.error(
                "event_sink_failed",
                event_type=event.type,
                sink=type(sink).__name__,
                error=str(e),
            )


async def emit_event(
    sink: EventSink,
    type: str,
    message: str,
    log_level: EventLogLevel = "info",
    metadata: dict[str, Any] | None = None,
) -> None:
    """Build a MonitorEvent and publish it without ever raising.

    Args:
        sink: Destination sink
        type: Event type in category.name format
        message: Human readable summary
        log_level: debug, info, warn or error
        metadata: Structured payload
    """
    event = MonitorEvent(
        type=type, message=message, log_level=log_level, metadata=metadata
    )
    try:
        await sink.publish_event(event)
    except Exception as e:
        logger.error("event_publish_failed", event_type=type, error=str(e))
