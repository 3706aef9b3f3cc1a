"""LLM client interface and a LiteLLM-backed implementation."""

import uuid
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_litellm import ChatLiteLLM

from coach_agents.platform.agent.messages import (
    ConversationMessage,
    LlmResponse,
    TextBlock,
    ToolUseBlock,
)
from coach_agents.platform.tools.definitions import ToolDefinition

type ChatModelFactory = Callable[[str], BaseChatModel]


class LlmClient(Protocol):
    """A stateless LLM transport shared across runs."""

    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[ConversationMessage],
        tools: Sequence[ToolDefinition],
        max_tokens: int,
        model: str,
    ) -> LlmResponse:
        """Send the conversation to the model and return its next turn.

        Args:
            system_prompt: System prompt text
            messages: Full conversation history
            tools: Tool declarations the model may call
            max_tokens: Maximum output tokens
            model: Model identifier

        Raises:
            Exception: Any transport, authentication or provider failure
        """
        ...


class LiteLlmClient:
    """LlmClient that talks to a LiteLLM proxy through ChatLiteLLM.

    Converts the content-block conversation to LangChain messages and the
    model's AIMessage back into an LlmResponse. One chat model is created per
    model identifier and reused.
    """

    def __init__(
        self,
        api_key: str | None,
        api_base: str | None,
        temperature: float = 0.7,
        chat_model_factory: ChatModelFactory | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: API key for the LLM proxy
            api_base: Base URL of the LLM proxy
            temperature: Sampling temperature
            chat_model_factory: Optional factory building a chat model for a
                model identifier (for testing)
        """
        self._api_key = api_key
        self._api_base = api_base
        self._temperature = temperature
        self._chat_model_factory = chat_model_factory or self._default_chat_model
        self._chat_models: dict[str, BaseChatModel] = {}

    def _default_chat_model(self, model: str) -> BaseChatModel:
        return ChatLiteLLM(
            model_name=model,
            api_key=self._api_key,
            api_base=self._api_base,
            temperature=self._temperature,
        )

    def _chat_model(self, model: str) -> BaseChatModel:
        if model not in self._chat_models:
            self._chat_models[model] = self._chat_model_factory(model)
        return self._chat_models[model]

    @staticmethod
    def to_langchain_messages(
        system_prompt: str,
        messages: Sequence[ConversationMessage],
    ) -> list[BaseMessage]:
        """Convert a conversation to LangChain messages.

        Tool results become ToolMessages (in block order); any text in the same
        user turn follows them as a HumanMessage.
        """
        converted: list[BaseMessage] = [SystemMessage(content=system_prompt)]
        for message in messages:
            if message.role == "assistant":
                converted.append(
                    AIMessage(
                        content=message.text,
                        tool_calls=[
                            {"id": block.id, "name": block.name, "args": block.input}
                            for block in message.tool_uses
                        ],
                    )
                )
                continue

            for result in message.tool_results:
                converted.append(
                    ToolMessage(
                        content=result.content,
                        tool_call_id=result.tool_use_id,
                        status="error" if result.is_error else "success",
                    )
                )
            if message.text:
                converted.append(HumanMessage(content=message.text))
        return converted

    @staticmethod
    def _text_parts(content: Any) -> list[str]:
        if isinstance(content, str):
            return [content] if content else []
        parts = []
        for part in content or []:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return [p for p in parts if p]

    @staticmethod
    def extract_tokens(message: AIMessage) -> tuple[int, int]:
        """Extract (input_tokens, output_tokens) from usage metadata, defaulting to 0."""
        usage = getattr(message, "usage_metadata", None)
        if not usage:
            return 0, 0
        return usage.get("input_tokens", 0), usage.get("output_tokens", 0)

    @classmethod
    def from_ai_message(cls, message: AIMessage) -> LlmResponse:
        """Convert a LangChain AIMessage into an LlmResponse."""
        blocks: list[TextBlock | ToolUseBlock] = [
            TextBlock(text) for text in cls._text_parts(message.content)
        ]
        for call in message.tool_calls:
            blocks.append(
                ToolUseBlock(
                    id=call.get("id") or f"call_{uuid.uuid4().hex[:12]}",
                    name=call["name"],
                    input=dict(call.get("args") or {}),
                )
            )
        metadata = message.response_metadata or {}
        input_tokens, output_tokens = cls.extract_tokens(message)
        return LlmResponse(
            content=tuple(blocks),
            stop_reason=metadata.get("finish_reason") or metadata.get("stop_reason"),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[ConversationMessage],
        tools: Sequence[ToolDefinition],
        max_tokens: int,
        model: str,
    ) -> LlmResponse:
        chat_model = self._chat_model(model)
        runnable = chat_model.bind_tools([tool.to_declaration() for tool in tools]) if tools else chat_model
        response = await runnable.ainvoke(
            self.to_langchain_messages(system_prompt, messages),
            max_tokens=max_tokens,
        )
        return self.from_ai_message(response)
