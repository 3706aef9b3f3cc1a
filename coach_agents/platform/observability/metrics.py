"""Shared Prometheus configuration for agent metrics."""

from collections.abc import Sequence

import prometheus_client
from prometheus_client import CollectorRegistry

# Agent work ranges from millisecond tool calls to multi-minute planning runs,
# so buckets are coarser and reach further than typical request latencies.
BUCKETS = (
    0.005,
    0.01,  # 10 ms: a cached file read
    0.05,
    0.1,
    0.5,
    1,
    2.5,
    5,  # a single LLM turn
    10,
    30,
    60,
    120,
    300,  # a long planning run
    600,
    float("inf"),
)


def duration_histogram(
    name: str,
    documentation: str,
    labelnames: Sequence[str],
    registry: CollectorRegistry = prometheus_client.REGISTRY,
) -> prometheus_client.Histogram:
    """Create a duration histogram with the shared bucket layout.

    Args:
        name: Metric name (e.g., "agent_run_duration_seconds")
        documentation: Human-readable metric description
        labelnames: Label names for the histogram
        registry: Prometheus registry to register the metric with

    Returns:
        Configured Prometheus Histogram instance
    """
    return prometheus_client.Histogram(
        name=name,
        documentation=documentation,
        labelnames=labelnames,
        registry=registry,
        buckets=BUCKETS,
    )


def metrics(registry: CollectorRegistry = prometheus_client.REGISTRY) -> tuple[bytes, str]:
    """Render the registry in the Prometheus text exposition format.

    Returns:
        Tuple of (metrics_body, content_type)
    """
    return prometheus_client.generate_latest(registry), prometheus_client.CONTENT_TYPE_LATEST
