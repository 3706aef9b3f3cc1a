"""Tool node that dispatches the model's tool invocations."""

import asyncio
import logging
from time import monotonic
from typing import Any

from coach_agents.platform.agent import governor
from coach_agents.platform.agent.config import RunConfig
from coach_agents.platform.agent.messages import (
    ConversationMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from coach_agents.platform.agent.metrics import ToolMetricsLabels, record_tool_call
from coach_agents.platform.agent.progress import describe
from coach_agents.platform.agent.state import RunState
from coach_agents.platform.tools.definitions import ToolName
from coach_agents.platform.tools.dispatch import (
    DEFAULT_MAX_SEARCH_RESULTS,
    ToolOutput,
    execute_tool,
)

from .base import Node

logger = logging.getLogger(__name__)

KNOWN_TOOLS = frozenset(ToolName)
UNKNOWN_TOOL_LABEL = "unknown"


def truncate_output(content: str, limit: int) -> str:
    """Cut tool output down to limit characters, noting how much was dropped."""
    if len(content) <= limit:
        return content
    return f"{content[:limit]}\n... (output truncated, {len(content) - limit} more characters)"


class ToolDispatchNode(Node):
    """Node that runs every tool invocation of the last assistant turn.

    Invocations run sequentially in the order the model requested them. Each
    one is announced through the progress callbacks before it executes, and
    the results are returned in one user message in the same order. When the
    turn budget is nearly spent, a wind-down directive is appended.
    """

    def __init__(self, config: RunConfig, max_search_results: int = DEFAULT_MAX_SEARCH_RESULTS):
        """Initialize the tool node.

        Args:
            config: Configuration of the current run
            max_search_results: Match cap for pattern_search
        """
        self.config = config
        self.max_search_results = max_search_results
        self._allowed = config.tool_names

    async def _execute(self, call: ToolUseBlock) -> ToolOutput:
        if call.name in KNOWN_TOOLS and call.name not in self._allowed:
            return ToolOutput(
                f"Error executing {call.name}: tool is not available in this run",
                is_error=True,
            )

        tool_label = call.name if call.name in KNOWN_TOOLS else UNKNOWN_TOOL_LABEL
        labels = ToolMetricsLabels(self.config.agent_slug, tool_label)
        start_time = monotonic()
        output = await asyncio.to_thread(
            execute_tool,
            call.name,
            call.input,
            self.config.project_root,
            self.max_search_results,
        )
        record_tool_call(labels, duration=monotonic() - start_time, error=output.is_error)
        if output.is_error:
            logger.info("Tool %s returned an error: %s", call.name, output.content)
        return output

    async def __call__(self, state: RunState) -> dict[str, Any]:
        """Dispatch the tool invocations of the last assistant message.

        Args:
            state: Current run state

        Returns:
            State update with the tool-results user message and tool count
        """
        callbacks = self.config.callbacks
        tool_calls = state["tool_calls"]
        content: list[TextBlock | ToolResultBlock] = []

        for call in state["messages"][-1].tool_uses:
            tool_calls += 1
            event = describe(call.name, call.input)
            callbacks.on_progress(event)
            callbacks.on_tool_use(tool_calls, event)

            output = await self._execute(call)
            content.append(
                ToolResultBlock(
                    tool_use_id=call.id,
                    content=truncate_output(output.content, self.config.max_tool_output_chars),
                    is_error=output.is_error,
                )
            )

        if governor.should_nudge(self.config.max_turns - state["turns"]):
            content.append(TextBlock(governor.nudge_text()))

        return {
            "messages": [ConversationMessage(role="user", content=tuple(content))],
            "tool_calls": tool_calls,
        }
