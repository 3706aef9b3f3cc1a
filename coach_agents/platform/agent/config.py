"""Configuration dataclasses for agent runs.

This module provides immutable configuration objects for a single run of the
conversation driver.
"""

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from coach_agents.platform.agent.messages import ProgressEvent
from coach_agents.platform.tools.definitions import ToolDefinition


class ExtractionFailurePolicy(StrEnum):
    """What a run does when no JSON can be found in the final response."""

    FAIL = "fail"
    FALLBACK_RAW_TEXT = "fallback-raw-text"


def _ignore_tool_use(count: int, event: ProgressEvent) -> None:
    return None


def _ignore_finalizing() -> None:
    return None


@dataclass(frozen=True)
class RunCallbacks:
    """Callback bundle through which a run reports to its caller.

    Attributes:
        on_progress: Called zero or more times, before each tool runs
        on_complete: Called at most once with the validated result
        on_error: Called at most once with a failure message; mutually
            exclusive with on_complete
        on_tool_use: Called with the running tool count before each tool runs;
            call sites hang their own extras (e.g. phase updates) on it
        on_finalizing: Called once when the model produces its terminal turn,
            before the output is extracted
    """

    on_progress: Callable[[ProgressEvent], None]
    on_complete: Callable[[Any], None]
    on_error: Callable[[str], None]
    on_tool_use: Callable[[int, ProgressEvent], None] = _ignore_tool_use
    on_finalizing: Callable[[], None] = _ignore_finalizing


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration for one conversation driver run.

    Attributes:
        agent_slug: Identifier of the call site, used for logs and metrics
        system_prompt: System prompt text
        user_prompt: Initial user message, built by the call site's prompt builder
        tools: Tools the model may call during this run
        output_schema: Pydantic model the final JSON must satisfy
        callbacks: Progress and terminal callbacks
        project_root: Directory all tools are sandboxed to
        model: Model identifier passed to the LLM client
        max_turns: Maximum LLM calls before the run fails
        max_tokens: Maximum output tokens per LLM call
        extraction_failure_policy: Behavior when no JSON is found
        fallback_result: Builds a result from the raw text under
            ExtractionFailurePolicy.FALLBACK_RAW_TEXT
        max_tool_output_chars: Tool outputs longer than this are truncated
        cancel_event: When set, the run stops before its next turn
    """

    agent_slug: str
    system_prompt: str
    user_prompt: str
    tools: Sequence[ToolDefinition]
    output_schema: type[BaseModel]
    callbacks: RunCallbacks
    project_root: Path
    model: str
    max_turns: int = 20
    max_tokens: int = 8192
    extraction_failure_policy: ExtractionFailurePolicy = ExtractionFailurePolicy.FAIL
    fallback_result: Callable[[str], BaseModel] | None = None
    max_tool_output_chars: int = 50_000
    cancel_event: asyncio.Event | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.max_turns < 1:
            raise ValueError("max_turns must be at least 1")
        if (
            self.extraction_failure_policy is ExtractionFailurePolicy.FALLBACK_RAW_TEXT
            and self.fallback_result is None
        ):
            raise ValueError("fallback_result is required for the fallback-raw-text policy")

    @property
    def tool_names(self) -> frozenset[str]:
        return frozenset(tool.name for tool in self.tools)
