"""Integration test fixtures.

This module provides shared fixtures for driving full agent runs:
- A scripted LLM client that replays canned responses and records requests
- A recorder for run callbacks
- A small sample project on disk for the tools to inspect
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from coach_agents.platform.agent.config import RunCallbacks
from coach_agents.platform.agent.messages import (
    ConversationMessage,
    LlmResponse,
    ProgressEvent,
    TextBlock,
    ToolUseBlock,
)
from coach_agents.platform.tools.definitions import ToolDefinition

# =============================================================================
# LLM Fixtures
# =============================================================================


class ScriptedLlmClient:
    """LlmClient that replays responses in order and records every request.

    Exceptions in the script are raised instead of returned. With
    ``repeat_last`` the final response is replayed once the script runs out.
    """

    def __init__(self, responses: Sequence[LlmResponse | Exception], repeat_last: bool = False):
        self._responses = list(responses)
        self._repeat_last = repeat_last
        self.calls: list[dict[str, Any]] = []

    @staticmethod
    def text(text: str) -> LlmResponse:
        """A terminal response with a single text block."""
        return LlmResponse(content=(TextBlock(text),), stop_reason="stop", input_tokens=10, output_tokens=5)

    @staticmethod
    def tools(*calls: tuple[str, str, dict[str, Any]], text: str | None = None) -> LlmResponse:
        """A response requesting tools, given as (id, name, input) tuples."""
        blocks: list[TextBlock | ToolUseBlock] = [TextBlock(text)] if text else []
        blocks.extend(ToolUseBlock(id=id_, name=name, input=tool_input) for id_, name, tool_input in calls)
        return LlmResponse(content=tuple(blocks), stop_reason="tool_calls", input_tokens=10, output_tokens=5)

    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[ConversationMessage],
        tools: Sequence[ToolDefinition],
        max_tokens: int,
        model: str,
    ) -> LlmResponse:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "messages": list(messages),
                "tools": [tool.name for tool in tools],
                "max_tokens": max_tokens,
                "model": model,
            }
        )
        if len(self._responses) > 1 or (self._responses and not self._repeat_last):
            item = self._responses.pop(0)
        elif self._responses:
            item = self._responses[0]
        else:
            raise AssertionError("LLM called more often than scripted")
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def scripted_llm() -> type[ScriptedLlmClient]:
    """The scripted client class, with its response builders."""
    return ScriptedLlmClient


# =============================================================================
# Callback Fixtures
# =============================================================================


class CallbackRecorder:
    """Records everything a run reports through its callbacks."""

    def __init__(self):
        self.progress: list[ProgressEvent] = []
        self.tool_uses: list[int] = []
        self.completed: list[Any] = []
        self.errors: list[str] = []
        self.finalizing = 0

    def as_run_callbacks(self) -> RunCallbacks:
        return RunCallbacks(
            on_progress=self.progress.append,
            on_complete=self.completed.append,
            on_error=self.errors.append,
            on_tool_use=lambda count, event: self.tool_uses.append(count),
            on_finalizing=self._on_finalizing,
        )

    def _on_finalizing(self) -> None:
        self.finalizing += 1

    @property
    def terminal_calls(self) -> int:
        return len(self.completed) + len(self.errors)


@pytest.fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


# =============================================================================
# Project Fixtures
# =============================================================================


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small project with a source package and a README."""
    root = tmp_path / "project"
    (root / "src" / "app").mkdir(parents=True)
    (root / "README.md").write_text("# Sample\n\nA sample project.\n")
    (root / "src" / "app" / "__init__.py").write_text("")
    (root / "src" / "app" / "main.py").write_text(
        "def greet(name):\n    return f'Hello, {name}!'\n\n\ndef main():\n    print(greet('world'))\n"
    )
    (root / "node_modules").mkdir()
    (root / "node_modules" / "dep.js").write_text("function greet() {}\n")
    return root
