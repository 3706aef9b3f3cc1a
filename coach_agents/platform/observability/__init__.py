"""Observability infrastructure module.

This module provides monitoring and error tracking:
- Structured logging with run IDs
- Prometheus metrics
- Bugsnag error reporting
"""

from coach_agents.platform.observability.errors import initialize_bugsnag
from coach_agents.platform.observability.logging import (
    configure_logging,
    get_logger,
    run_id_ctx,
)
from coach_agents.platform.observability.metrics import BUCKETS, duration_histogram, metrics

__all__ = [
    "BUCKETS",
    "configure_logging",
    "duration_histogram",
    "get_logger",
    "initialize_bugsnag",
    "metrics",
    "run_id_ctx",
]
