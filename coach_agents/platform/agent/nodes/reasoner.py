"""Reasoner node that asks the LLM for the next turn."""

import asyncio
import logging
from typing import Any

from coach_agents.platform.agent.config import RunConfig
from coach_agents.platform.agent.llm_client import LlmClient
from coach_agents.platform.agent.messages import LlmResponse
from coach_agents.platform.agent.metrics import (
    AgentMetricsLabels,
    record_agent_tokens,
    record_agent_turn,
)
from coach_agents.platform.agent.state import RunState

from .base import Node

logger = logging.getLogger(__name__)

CANCELLED_ERROR = "Run cancelled"


def max_turns_error(max_turns: int) -> str:
    return f"Agent exceeded maximum turns ({max_turns})"


class RunCancelled(Exception):
    """Raised internally when the run's cancel event fires during an LLM call."""


class ReasonerNode(Node):
    """Node that invokes the LLM for one turn.

    Ends the run with an error when the turn budget is spent, when the run is
    cancelled, or when the LLM call itself fails.
    """

    def __init__(self, llm_client: LlmClient, config: RunConfig):
        """Initialize the reasoner node.

        Args:
            llm_client: Shared LLM transport
            config: Configuration of the current run
        """
        self.llm = llm_client
        self.config = config
        self._labels = AgentMetricsLabels(config.agent_slug)

    def _cancelled(self) -> bool:
        return self.config.cancel_event is not None and self.config.cancel_event.is_set()

    async def _complete(self, state: RunState) -> LlmResponse:
        call = self.llm.complete(
            system_prompt=self.config.system_prompt,
            messages=list(state["messages"]),
            tools=list(self.config.tools),
            max_tokens=self.config.max_tokens,
            model=self.config.model,
        )
        if self.config.cancel_event is None:
            return await call

        completion = asyncio.ensure_future(call)
        cancelled = asyncio.ensure_future(self.config.cancel_event.wait())
        try:
            await asyncio.wait({completion, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
        if not completion.done():
            completion.cancel()
            raise RunCancelled()
        return completion.result()

    async def __call__(self, state: RunState) -> dict[str, Any]:
        """Run one LLM turn.

        Args:
            state: Current run state

        Returns:
            State update with the assistant message and turn count, or an error
        """
        turns = state["turns"]
        if self._cancelled():
            return {"error": CANCELLED_ERROR}
        if turns >= self.config.max_turns:
            logger.warning("Agent %s exceeded %d turns", self.config.agent_slug, turns)
            return {"error": max_turns_error(self.config.max_turns)}

        logger.debug("Turn %d, messages count: %d", turns + 1, len(state["messages"]))
        try:
            response = await self._complete(state)
        except RunCancelled:
            return {"error": CANCELLED_ERROR, "turns": turns + 1}
        except Exception as e:
            logger.warning("LLM request failed on turn %d: %s", turns + 1, e)
            return {"error": f"LLM request failed: {e}", "turns": turns + 1}

        record_agent_turn(self._labels)
        record_agent_tokens(
            self.config.agent_slug,
            self.config.model,
            response.input_tokens,
            response.output_tokens,
        )
        return {
            "messages": [response.to_message()],
            "turns": turns + 1,
        }
