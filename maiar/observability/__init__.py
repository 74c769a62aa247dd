"""Observability: monitor events, structured logging, metrics.

Components publish MonitorEvents to an injected EventSink. Sinks render
them through structlog; execution counters are exported with Prometheus.
"""

from maiar.observability.events import (
    EventSink,
    LoggingEventSink,
    MonitorEvent,
    MonitorService,
    NullEventSink,
    emit_event,
)
from maiar.observability.logging import get_logger, setup_logging

__all__ = [
    "EventSink",
    "LoggingEventSink",
    "MonitorEvent",
    "MonitorService",
    "NullEventSink",
    "emit_event",
    "get_logger",
    "setup_logging",
]
