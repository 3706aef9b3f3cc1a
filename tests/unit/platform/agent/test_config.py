"""Unit tests for run configuration.

This module tests RunConfig validation, and RunCallbacks defaults.
"""

from pathlib import Path

import pytest
from pydantic import BaseModel

from coach_agents.platform.agent.config import (
    ExtractionFailurePolicy,
    RunCallbacks,
    RunConfig,
)
from coach_agents.platform.agent.messages import ProgressEvent
from coach_agents.platform.tools.definitions import ToolName, get_tools


class Output(BaseModel):
    value: str


def noop(*args):
    return None


@pytest.fixture
def callbacks() -> RunCallbacks:
    return RunCallbacks(on_progress=noop, on_complete=noop, on_error=noop)


def make_config(callbacks: RunCallbacks, **overrides) -> RunConfig:
    values = {
        "agent_slug": "test",
        "system_prompt": "system",
        "user_prompt": "user",
        "tools": get_tools(ToolName.READ_FILE, ToolName.GIT_DIFF),
        "output_schema": Output,
        "callbacks": callbacks,
        "project_root": Path("/tmp/project"),
        "model": "test-model",
    }
    values.update(overrides)
    return RunConfig(**values)


class TestRunConfig:
    """Tests for RunConfig."""

    def test_defaults(self, callbacks):
        config = make_config(callbacks)
        assert config.max_turns == 20
        assert config.max_tokens == 8192
        assert config.extraction_failure_policy is ExtractionFailurePolicy.FAIL
        assert config.fallback_result is None
        assert config.cancel_event is None

    def test_tool_names(self, callbacks):
        assert make_config(callbacks).tool_names == frozenset({"read_file", "git_diff"})

    @pytest.mark.parametrize("max_turns", [0, -1])
    def test_max_turns_must_be_positive(self, callbacks, max_turns):
        with pytest.raises(ValueError, match="max_turns"):
            make_config(callbacks, max_turns=max_turns)

    def test_fallback_policy_requires_fallback_result(self, callbacks):
        with pytest.raises(ValueError, match="fallback_result"):
            make_config(callbacks, extraction_failure_policy=ExtractionFailurePolicy.FALLBACK_RAW_TEXT)

    def test_fallback_policy_with_fallback_result(self, callbacks):
        config = make_config(
            callbacks,
            extraction_failure_policy=ExtractionFailurePolicy.FALLBACK_RAW_TEXT,
            fallback_result=lambda text: Output(value=text),
        )
        assert config.fallback_result("raw") == Output(value="raw")

    def test_is_frozen(self, callbacks):
        config = make_config(callbacks)
        with pytest.raises(AttributeError):
            config.max_turns = 5  # type: ignore[misc]


class TestRunCallbacks:
    def test_optional_hooks_default_to_noops(self, callbacks):
        assert callbacks.on_tool_use(1, ProgressEvent(message="x")) is None
        assert callbacks.on_finalizing() is None


class TestExtractionFailurePolicy:
    def test_values(self):
        assert ExtractionFailurePolicy("fail") is ExtractionFailurePolicy.FAIL
        assert ExtractionFailurePolicy("fallback-raw-text") is ExtractionFailurePolicy.FALLBACK_RAW_TEXT
