"""LangGraph state for a conversation driver run."""

import operator
from typing import Annotated, Any, TypedDict

from coach_agents.platform.agent.messages import ConversationMessage


class RunState(TypedDict):
    """State threaded through the driver's graph.

    Attributes:
        messages: Conversation history; nodes return new messages which are appended
        turns: LLM turns consumed so far
        tool_calls: Tool invocations dispatched so far
        result: Validated output, set by the finalize node on success
        error: Failure message, set by any node that ends the run unsuccessfully
    """

    messages: Annotated[list[ConversationMessage], operator.add]
    turns: int
    tool_calls: int
    result: Any
    error: str | None


def initial_state(user_prompt: str) -> RunState:
    return RunState(
        messages=[ConversationMessage.user_text(user_prompt)],
        turns=0,
        tool_calls=0,
        result=None,
        error=None,
    )
