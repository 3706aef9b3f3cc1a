"""Unit tests for agent metrics collection.

This module tests the metrics NamedTuples, helper functions, and context managers.
"""

import prometheus_client
import pytest

from coach_agents.platform.agent.metrics import (
    AgentMetricsLabels,
    ToolMetricsLabels,
    collect_agent_metrics,
    record_agent_tokens,
    record_agent_turn,
    record_tool_call,
)


def sample(name: str, labels: dict[str, str]) -> float:
    return prometheus_client.REGISTRY.get_sample_value(name, labels) or 0.0


class TestLabels:
    def test_agent_labels(self):
        labels = AgentMetricsLabels(agent="planning")
        assert labels._fields == ("agent",)

    def test_tool_labels_immutable(self):
        labels = ToolMetricsLabels(agent="review", tool_name="git_diff")
        with pytest.raises(AttributeError):
            labels.agent = "other"  # type: ignore


class TestRecordHelpers:
    def test_record_tool_call_status(self):
        labels = ToolMetricsLabels(agent="metrics-test", tool_name="read_file")
        before = sample("agent_tool_calls_total", {"agent": "metrics-test", "tool_name": "read_file", "status": "error"})

        record_tool_call(labels, duration=0.2, error=True)

        after = sample("agent_tool_calls_total", {"agent": "metrics-test", "tool_name": "read_file", "status": "error"})
        assert after == before + 1

    def test_record_agent_turn(self):
        before = sample("agent_turns_total", {"agent": "metrics-test"})
        record_agent_turn(AgentMetricsLabels("metrics-test"))
        assert sample("agent_turns_total", {"agent": "metrics-test"}) == before + 1

    def test_record_agent_tokens_skips_zero(self):
        input_labels = {"agent": "metrics-test", "model": "m", "direction": "input"}
        output_labels = {"agent": "metrics-test", "model": "m", "direction": "output"}
        before_in = sample("agent_tokens_total", input_labels)
        before_out = sample("agent_tokens_total", output_labels)

        record_agent_tokens("metrics-test", "m", input_tokens=120, output_tokens=0)

        assert sample("agent_tokens_total", input_labels) == before_in + 120
        assert sample("agent_tokens_total", output_labels) == before_out


class TestCollectAgentMetrics:
    """Tests for the collect_agent_metrics context manager."""

    async def test_success(self):
        labels = {"agent": "collect-ok", "status": "success"}
        before = sample("agent_runs_total", labels)

        async with collect_agent_metrics(AgentMetricsLabels("collect-ok")) as run:
            assert run.labels == AgentMetricsLabels("collect-ok")

        assert sample("agent_runs_total", labels) == before + 1

    async def test_mark_failed(self):
        labels = {"agent": "collect-failed", "status": "error"}
        before = sample("agent_runs_total", labels)

        async with collect_agent_metrics(AgentMetricsLabels("collect-failed")) as run:
            run.mark_failed()

        assert sample("agent_runs_total", labels) == before + 1

    async def test_exception_is_recorded_and_propagated(self):
        labels = {"agent": "collect-raised", "status": "error"}
        before = sample("agent_runs_total", labels)

        with pytest.raises(RuntimeError):
            async with collect_agent_metrics(AgentMetricsLabels("collect-raised")):
                raise RuntimeError("boom")

        assert sample("agent_runs_total", labels) == before + 1
        assert sample("agent_run_duration_seconds_count", {"agent": "collect-raised"}) == 1
