"""Unit tests for LiteLlmClient message conversion and invocation."""

from unittest.mock import AsyncMock, Mock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from coach_agents.platform.agent.llm_client import LiteLlmClient
from coach_agents.platform.agent.messages import (
    ConversationMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from coach_agents.platform.tools.definitions import ToolName, get_tools


class TestToLangchainMessages:
    """Tests for LiteLlmClient.to_langchain_messages."""

    def test_full_conversation(self):
        messages = [
            ConversationMessage.user_text("Plan this."),
            ConversationMessage(
                role="assistant",
                content=(
                    TextBlock("Looking around."),
                    ToolUseBlock(id="a", name="list_files", input={"path": "."}),
                ),
            ),
            ConversationMessage(
                role="user",
                content=(
                    ToolResultBlock(tool_use_id="a", content="f README.md"),
                    TextBlock("You are running low on turns."),
                ),
            ),
        ]

        converted = LiteLlmClient.to_langchain_messages("system", messages)

        assert [type(m) for m in converted] == [
            SystemMessage,
            HumanMessage,
            AIMessage,
            ToolMessage,
            HumanMessage,
        ]
        assert converted[0].content == "system"
        assert converted[2].content == "Looking around."
        assert converted[2].tool_calls[0]["id"] == "a"
        assert converted[2].tool_calls[0]["args"] == {"path": "."}
        assert converted[3].tool_call_id == "a"
        assert converted[3].status == "success"
        assert converted[4].content == "You are running low on turns."

    def test_error_result_status(self):
        messages = [
            ConversationMessage(
                role="user",
                content=(ToolResultBlock(tool_use_id="a", content="Unknown tool: x", is_error=True),),
            )
        ]
        converted = LiteLlmClient.to_langchain_messages("system", messages)
        assert converted[1].status == "error"


class TestFromAiMessage:
    """Tests for LiteLlmClient.from_ai_message."""

    def test_text_and_tool_calls(self):
        message = AIMessage(
            content="Reading now.",
            tool_calls=[{"id": "c1", "name": "read_file", "args": {"path": "a.py"}}],
            response_metadata={"finish_reason": "tool_calls"},
        )
        message.usage_metadata = {"input_tokens": 30, "output_tokens": 7, "total_tokens": 37}

        response = LiteLlmClient.from_ai_message(message)

        assert response.content == (
            TextBlock("Reading now."),
            ToolUseBlock(id="c1", name="read_file", input={"path": "a.py"}),
        )
        assert response.stop_reason == "tool_calls"
        assert (response.input_tokens, response.output_tokens) == (30, 7)

    def test_content_parts(self):
        message = AIMessage(content=[{"type": "text", "text": "one"}, "two", {"type": "image"}])
        response = LiteLlmClient.from_ai_message(message)
        assert response.text == "one\ntwo"

    def test_missing_tool_call_id_is_generated(self):
        message = AIMessage(content="", tool_calls=[{"id": None, "name": "list_files", "args": {}}])
        (call,) = LiteLlmClient.from_ai_message(message).tool_uses
        assert call.id.startswith("call_")

    def test_no_usage(self):
        assert LiteLlmClient.extract_tokens(AIMessage(content="hi")) == (0, 0)


class TestComplete:
    """Tests for LiteLlmClient.complete."""

    @pytest.fixture
    def chat_model(self):
        model = Mock()
        model.bind_tools.return_value.ainvoke = AsyncMock(return_value=AIMessage(content='{"ok": true}'))
        model.ainvoke = AsyncMock(return_value=AIMessage(content="plain"))
        return model

    async def test_binds_tool_declarations(self, chat_model):
        factory = Mock(return_value=chat_model)
        client = LiteLlmClient(api_key="k", api_base="http://proxy", chat_model_factory=factory)
        tools = get_tools(ToolName.READ_FILE)

        response = await client.complete(
            system_prompt="system",
            messages=[ConversationMessage.user_text("hi")],
            tools=tools,
            max_tokens=512,
            model="test-model",
        )

        factory.assert_called_once_with("test-model")
        (declarations,) = chat_model.bind_tools.call_args.args
        assert declarations[0]["function"]["name"] == "read_file"
        assert chat_model.bind_tools.return_value.ainvoke.call_args.kwargs == {"max_tokens": 512}
        assert response.text == '{"ok": true}'

    async def test_without_tools(self, chat_model):
        client = LiteLlmClient(api_key=None, api_base=None, chat_model_factory=Mock(return_value=chat_model))

        response = await client.complete("system", [], [], 100, "m")

        chat_model.bind_tools.assert_not_called()
        assert response.text == "plain"

    async def test_chat_model_is_cached_per_model(self, chat_model):
        factory = Mock(return_value=chat_model)
        client = LiteLlmClient(api_key=None, api_base=None, chat_model_factory=factory)

        await client.complete("s", [], [], 10, "a")
        await client.complete("s", [], [], 10, "a")
        await client.complete("s", [], [], 10, "b")

        assert [call.args[0] for call in factory.call_args_list] == ["a", "b"]
