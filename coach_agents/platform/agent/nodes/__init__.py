"""LangGraph nodes of the conversation driver."""

from coach_agents.platform.agent.nodes.base import Node
from coach_agents.platform.agent.nodes.finalizer import FinalizeNode
from coach_agents.platform.agent.nodes.reasoner import (
    CANCELLED_ERROR,
    ReasonerNode,
    max_turns_error,
)
from coach_agents.platform.agent.nodes.tools import ToolDispatchNode, truncate_output

__all__ = [
    "CANCELLED_ERROR",
    "FinalizeNode",
    "Node",
    "ReasonerNode",
    "ToolDispatchNode",
    "max_turns_error",
    "truncate_output",
]
