"""Unit tests for driver graph nodes and routing."""

from pathlib import Path
from unittest.mock import AsyncMock, Mock

import prometheus_client
import pytest
from langgraph.graph import END
from pydantic import BaseModel

from coach_agents.platform.agent.config import RunCallbacks, RunConfig
from coach_agents.platform.agent.driver import ConversationDriver, route_after_reasoner
from coach_agents.platform.agent.messages import (
    ConversationMessage,
    LlmResponse,
    TextBlock,
    ToolUseBlock,
)
from coach_agents.platform.agent.nodes import (
    FinalizeNode,
    Node,
    ReasonerNode,
    ToolDispatchNode,
    max_turns_error,
    truncate_output,
)
from coach_agents.platform.agent.state import initial_state
from coach_agents.platform.tools.definitions import ToolName, get_tools


class Output(BaseModel):
    value: int


@pytest.fixture
def config(tmp_path: Path) -> RunConfig:
    return RunConfig(
        agent_slug="node-test",
        system_prompt="system",
        user_prompt="go",
        tools=get_tools(ToolName.LIST_FILES),
        output_schema=Output,
        callbacks=RunCallbacks(on_progress=Mock(), on_complete=Mock(), on_error=Mock()),
        project_root=tmp_path,
        model="m",
        max_turns=4,
    )


class TestTruncateOutput:
    def test_short_output_unchanged(self):
        assert truncate_output("abc", 3) == "abc"

    def test_long_output_truncated(self):
        assert truncate_output("abcdef", 4) == "abcd\n... (output truncated, 2 more characters)"


class TestRouteAfterReasoner:
    def test_error_ends_run(self):
        state = initial_state("go") | {"error": "boom"}
        assert route_after_reasoner(state) == END

    def test_tool_use_routes_to_tools(self):
        state = initial_state("go")
        state["messages"].append(
            ConversationMessage(role="assistant", content=(ToolUseBlock(id="a", name="list_files"),))
        )
        assert route_after_reasoner(state) == "tools"

    def test_text_routes_to_finalize(self):
        state = initial_state("go")
        state["messages"].append(ConversationMessage(role="assistant", content=(TextBlock("{}"),)))
        assert route_after_reasoner(state) == "finalize"


class TestConversationDriverGraph:
    def test_recursion_limit_covers_turn_budget(self, config):
        assert ConversationDriver.recursion_limit(config) == 2 * 4 + 5

    def test_nodes_follow_protocol(self, config):
        llm = Mock()
        assert isinstance(ReasonerNode(llm, config), Node)
        assert isinstance(ToolDispatchNode(config), Node)
        assert isinstance(FinalizeNode(config), Node)

    def test_graph_nodes(self, config):
        graph = ConversationDriver(Mock()).build_graph(config)
        assert {"reasoner", "tools", "finalize"} <= set(graph.nodes)


class TestReasonerNode:
    """Tests for ReasonerNode.__call__."""

    async def test_appends_assistant_message(self, config):
        llm = Mock()
        llm.complete = AsyncMock(return_value=LlmResponse(content=(TextBlock("hi"),), input_tokens=5))
        node = ReasonerNode(llm, config)

        update = await node(initial_state("go"))

        assert update["turns"] == 1
        assert update["messages"] == [ConversationMessage(role="assistant", content=(TextBlock("hi"),))]
        assert llm.complete.call_args.kwargs["max_tokens"] == config.max_tokens

    async def test_budget_spent(self, config):
        llm = Mock()
        llm.complete = AsyncMock()
        state = initial_state("go") | {"turns": 4}

        update = await ReasonerNode(llm, config)(state)

        assert update == {"error": max_turns_error(4)}
        llm.complete.assert_not_called()

    async def test_transport_error(self, config):
        llm = Mock()
        llm.complete = AsyncMock(side_effect=ConnectionError("refused"))

        update = await ReasonerNode(llm, config)(initial_state("go"))

        assert update == {"error": "LLM request failed: refused", "turns": 1}


class TestFinalizeNode:
    async def test_calls_finalizing_hook_once(self, tmp_path):
        on_finalizing = Mock()
        config = RunConfig(
            agent_slug="node-test",
            system_prompt="s",
            user_prompt="u",
            tools=(),
            output_schema=Output,
            callbacks=RunCallbacks(
                on_progress=Mock(), on_complete=Mock(), on_error=Mock(), on_finalizing=on_finalizing
            ),
            project_root=tmp_path,
            model="m",
        )
        state = initial_state("u")
        state["messages"].append(ConversationMessage(role="assistant", content=(TextBlock('{"value": 3}'),)))

        update = await FinalizeNode(config)(state)

        assert update == {"result": Output(value=3)}
        on_finalizing.assert_called_once_with()


class TestToolDispatchNode:
    async def test_results_in_request_order(self, config, tmp_path):
        (tmp_path / "a.txt").write_text("a")
        node = ToolDispatchNode(config)
        state = initial_state("go") | {"turns": 1}
        state["messages"].append(
            ConversationMessage(
                role="assistant",
                content=(
                    ToolUseBlock(id="1", name="list_files", input={}),
                    ToolUseBlock(id="2", name="nope", input={}),
                ),
            )
        )

        update = await node(state)

        (message,) = update["messages"]
        assert [r.tool_use_id for r in message.tool_results] == ["1", "2"]
        assert message.tool_results[0].content == "f a.txt"
        assert message.tool_results[1].content == "Unknown tool: nope"
        assert update["tool_calls"] == 2
        assert config.callbacks.on_progress.call_count == 2

    async def test_unknown_tool_metric_label(self, config):
        node = ToolDispatchNode(config)
        state = initial_state("go") | {"turns": 1}
        state["messages"].append(
            ConversationMessage(
                role="assistant",
                content=(ToolUseBlock(id="1", name="made_up_tool_9f2", input={}),),
            )
        )
        unknown = {"agent": "node-test", "tool_name": "unknown", "status": "error"}
        before = prometheus_client.REGISTRY.get_sample_value("agent_tool_calls_total", unknown) or 0.0

        await node(state)

        assert prometheus_client.REGISTRY.get_sample_value("agent_tool_calls_total", unknown) == before + 1
        assert (
            prometheus_client.REGISTRY.get_sample_value(
                "agent_tool_calls_total", {**unknown, "tool_name": "made_up_tool_9f2"}
            )
            is None
        )
