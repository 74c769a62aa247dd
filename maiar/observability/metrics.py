"""Prometheus metrics for Maiar.

Tracks capability executions, memory writes and plugin registrations.
"""

from prometheus_client import Counter, Histogram, start_http_server

from maiar.observability.logging import get_logger

logger = get_logger(__name__)

# Capability metrics
CAPABILITY_EXECUTIONS = Counter(
    "maiar_capability_executions_total",
    "Total number of instrumented capability executions",
    labelnames=["provider", "capability", "status"],
)

CAPABILITY_LATENCY = Histogram(
    "maiar_capability_latency_seconds",
    "Capability execution latency in seconds",
    labelnames=["provider", "capability"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

# Memory metrics
MEMORY_WRITES = Counter(
    "maiar_memory_writes_total",
    "Messages and contexts written through the memory service",
    labelnames=["kind"],
)

# Registry metrics
PLUGIN_REGISTRATIONS = Counter(
    "maiar_plugin_registrations_total",
    "Plugin registration attempts",
    labelnames=["outcome"],
)


def setup_metrics(port: int = 9090) -> None:
    """Expose the default registry over HTTP on the given port."""
    start_http_server(port)
    logger.info("metrics_server_started", port=port)
