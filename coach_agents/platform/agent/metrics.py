"""Prometheus metrics for agent runs, tool calls and token usage."""

from time import monotonic
from typing import NamedTuple, Self

import prometheus_client

from coach_agents.platform.observability.metrics import duration_histogram


class AgentMetricsLabels(NamedTuple):
    agent: str


class ToolMetricsLabels(NamedTuple):
    agent: str
    tool_name: str


agent_runs_total = prometheus_client.Counter(
    "agent_runs_total",
    "Agent runs by terminal status",
    labelnames=(*AgentMetricsLabels._fields, "status"),
)

agent_run_duration = duration_histogram(
    "agent_run_duration_seconds",
    "Agent run duration (seconds)",
    AgentMetricsLabels._fields,
)

agent_turns_total = prometheus_client.Counter(
    "agent_turns_total",
    "LLM turns consumed by agent runs",
    labelnames=AgentMetricsLabels._fields,
)

tool_calls_total = prometheus_client.Counter(
    "agent_tool_calls_total",
    "Tool calls by status",
    labelnames=(*ToolMetricsLabels._fields, "status"),
)

tool_call_duration = duration_histogram(
    "agent_tool_call_duration_seconds",
    "Tool call duration (seconds)",
    ToolMetricsLabels._fields,
)

agent_tokens_total = prometheus_client.Counter(
    "agent_tokens_total",
    "LLM tokens by direction",
    labelnames=("agent", "model", "direction"),
)


def record_tool_call(labels: ToolMetricsLabels, duration: float, error: bool = False) -> None:
    """Record one tool call and its duration."""
    status = "error" if error else "success"
    tool_calls_total.labels(*labels, status).inc()
    tool_call_duration.labels(*labels).observe(duration)


def record_agent_turn(labels: AgentMetricsLabels) -> None:
    agent_turns_total.labels(*labels).inc()


def record_agent_tokens(agent: str, model: str, input_tokens: int, output_tokens: int) -> None:
    """Record token usage for one LLM call. Zero counts are skipped."""
    if input_tokens > 0:
        agent_tokens_total.labels(agent, model, "input").inc(input_tokens)
    if output_tokens > 0:
        agent_tokens_total.labels(agent, model, "output").inc(output_tokens)


class collect_agent_metrics:
    """Async context manager that records run duration and terminal status.

    The status is "success" unless the block raises or ``mark_failed`` is
    called.
    """

    def __init__(self, labels: AgentMetricsLabels):
        self.labels = labels
        self._start = 0.0
        self._failed = False

    def mark_failed(self) -> None:
        self._failed = True

    async def __aenter__(self) -> Self:
        self._start = monotonic()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        agent_run_duration.labels(*self.labels).observe(monotonic() - self._start)
        status = "error" if exc_type is not None or self._failed else "success"
        agent_runs_total.labels(*self.labels, status).inc()
        return False
