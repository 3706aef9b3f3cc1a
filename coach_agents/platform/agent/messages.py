"""Framework-agnostic conversation, progress and result types.

These types are the common vocabulary of an agent run: the content blocks the
conversation is made of, the response returned by an LLM client, the progress
events streamed to callers, and the terminal result of output extraction.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

type Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class TextBlock:
    """Plain text content."""

    text: str


@dataclass(frozen=True)
class ToolUseBlock:
    """A request from the model to run a named tool.

    Attributes:
        id: Identifier the matching tool result must reference
        name: Tool name as requested by the model
        input: Structured tool arguments
    """

    id: str
    name: str
    input: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResultBlock:
    """The output of a tool invocation, correlated to it by id.

    Attributes:
        tool_use_id: ID of the ToolUseBlock this result answers
        content: Tool output (or error description) as text
        is_error: True when the content describes a failure
    """

    tool_use_id: str
    content: str
    is_error: bool = False


type ContentBlock = TextBlock | ToolUseBlock | ToolResultBlock


@dataclass(frozen=True)
class ConversationMessage:
    """A single user or assistant turn made of ordered content blocks."""

    role: Role
    content: tuple[ContentBlock, ...]

    @classmethod
    def user_text(cls, text: str) -> "ConversationMessage":
        return cls(role="user", content=(TextBlock(text),))

    @property
    def tool_uses(self) -> list[ToolUseBlock]:
        return [block for block in self.content if isinstance(block, ToolUseBlock)]

    @property
    def tool_results(self) -> list[ToolResultBlock]:
        return [block for block in self.content if isinstance(block, ToolResultBlock)]

    @property
    def text(self) -> str:
        """Text blocks joined with newlines."""
        return "\n".join(block.text for block in self.content if isinstance(block, TextBlock))


@dataclass(frozen=True)
class LlmResponse:
    """Response returned by an LLM client for one turn.

    Attributes:
        content: Ordered text and tool-use blocks
        stop_reason: Provider stop/finish reason, if reported
        input_tokens: Prompt tokens consumed by the call
        output_tokens: Completion tokens produced by the call
    """

    content: tuple[TextBlock | ToolUseBlock, ...]
    stop_reason: str | None = None
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def tool_uses(self) -> list[ToolUseBlock]:
        return [block for block in self.content if isinstance(block, ToolUseBlock)]

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content if isinstance(block, TextBlock))

    def to_message(self) -> ConversationMessage:
        return ConversationMessage(role="assistant", content=tuple(self.content))


@dataclass(frozen=True)
class ProgressEvent:
    """Human-readable status emitted just before a tool runs.

    Attributes:
        message: Present-tense description of what the agent is about to do
        tool_name: The tool being invoked, if applicable
        file_path: The file or directory being operated on, if applicable
    """

    message: str
    tool_name: str | None = None
    file_path: str | None = None


class FailureKind(StrEnum):
    """Why output extraction did not produce a validated result."""

    EXTRACTION = "extraction"
    SCHEMA = "schema"


@dataclass(frozen=True)
class AgentResult[T]:
    """Terminal result of output extraction.

    Either ``success=True`` with ``data`` satisfying the run's schema, or
    ``success=False`` with an ``error`` message and the ``failure`` kind.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    failure: FailureKind | None = None

    @classmethod
    def ok(cls, data: T) -> "AgentResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, failure: FailureKind) -> "AgentResult[T]":
        return cls(success=False, error=error, failure=failure)
