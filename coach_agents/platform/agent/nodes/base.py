"""Base protocol for driver graph nodes."""

from typing import Any, Protocol, runtime_checkable

from coach_agents.platform.agent.state import RunState


@runtime_checkable
class Node(Protocol):
    """Protocol for driver graph nodes.

    Nodes are callable objects that take the RunState and return a partial
    state update. They are used as nodes in the LangGraph StateGraph.
    """

    async def __call__(self, state: RunState) -> dict[str, Any]:
        """Process state and return the keys to update."""
        ...
