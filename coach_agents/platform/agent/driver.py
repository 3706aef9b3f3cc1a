"""Conversation driver: the bounded, tool-augmented agent loop.

The loop is a LangGraph StateGraph with three nodes::

    START -> reasoner -> tools -> reasoner -> ... -> finalize -> END
    reasoner -> END  (transport failure, cancellation, turn budget spent)

The driver never raises. Every run ends in exactly one call to either
``on_complete`` or ``on_error`` on the run's callbacks.
"""

import logging
import uuid
from typing import Any

from langgraph.graph import END, START, StateGraph
from langgraph.graph.state import CompiledStateGraph
from opentelemetry import trace

from coach_agents.platform.agent.config import RunCallbacks, RunConfig
from coach_agents.platform.agent.llm_client import LlmClient
from coach_agents.platform.agent.metrics import AgentMetricsLabels, collect_agent_metrics
from coach_agents.platform.agent.nodes import FinalizeNode, ReasonerNode, ToolDispatchNode
from coach_agents.platform.agent.state import RunState, initial_state
from coach_agents.platform.observability.logging import run_id_ctx
from coach_agents.platform.tools.dispatch import DEFAULT_MAX_SEARCH_RESULTS

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

NO_RESULT_ERROR = "Agent returned no result"


def route_after_reasoner(state: RunState) -> str:
    """Pick the next node after an LLM turn."""
    if state.get("error"):
        return END
    if state["messages"][-1].tool_uses:
        return "tools"
    return "finalize"


class ConversationDriver:
    """Runs agent loops against an injected LLM client.

    The client is shared and stateless; every run owns its own conversation
    state, so independent runs may execute concurrently.
    """

    def __init__(
        self,
        llm_client: LlmClient,
        max_search_results: int = DEFAULT_MAX_SEARCH_RESULTS,
    ) -> None:
        """Initialize the driver.

        Args:
            llm_client: LLM transport used for every turn
            max_search_results: Match cap for the pattern_search tool
        """
        self.llm_client = llm_client
        self.max_search_results = max_search_results

    def build_graph(self, config: RunConfig) -> CompiledStateGraph:
        """Assemble the reasoner/tools/finalize graph for one run."""
        workflow = StateGraph(RunState)

        workflow.add_node("reasoner", ReasonerNode(self.llm_client, config))  # type: ignore
        workflow.add_node("tools", ToolDispatchNode(config, self.max_search_results))  # type: ignore
        workflow.add_node("finalize", FinalizeNode(config))  # type: ignore

        workflow.add_edge(START, "reasoner")
        workflow.add_conditional_edges(
            "reasoner",
            route_after_reasoner,
            {"tools": "tools", "finalize": "finalize", END: END},
        )
        workflow.add_edge("tools", "reasoner")
        workflow.add_edge("finalize", END)

        return workflow.compile()

    @staticmethod
    def recursion_limit(config: RunConfig) -> int:
        # reasoner + tools per turn, plus the closing reasoner and finalize steps
        return 2 * config.max_turns + 5

    async def run(self, config: RunConfig) -> None:
        """Run the agent loop to completion.

        Never raises. The outcome is delivered through ``config.callbacks``:
        ``on_complete`` with the validated result, or ``on_error`` with a
        failure message.

        Args:
            config: Configuration of this run
        """
        run_id = uuid.uuid4().hex[:12]
        token = run_id_ctx.set(run_id)
        result: Any = None
        error: str | None = None
        try:
            logger.info(
                "Starting %s run (model=%s, max_turns=%d)",
                config.agent_slug,
                config.model,
                config.max_turns,
            )
            with tracer.start_as_current_span(f"agent.{config.agent_slug}") as span:
                span.set_attribute("agent.run_id", run_id)
                async with collect_agent_metrics(AgentMetricsLabels(config.agent_slug)) as run_metrics:
                    graph = self.build_graph(config)
                    final_state = await graph.ainvoke(
                        initial_state(config.user_prompt),
                        config={"recursion_limit": self.recursion_limit(config)},
                    )
                    error = final_state.get("error")
                    result = final_state.get("result")
                    if error is None and result is None:
                        error = NO_RESULT_ERROR
                    if error is not None:
                        run_metrics.mark_failed()
                    span.set_attribute("agent.turns", final_state.get("turns", 0))
                    span.set_attribute("agent.tool_calls", final_state.get("tool_calls", 0))
        except Exception as e:
            logger.exception("Agent run %s failed unexpectedly", config.agent_slug)
            error = f"Agent run failed: {e}"

        try:
            self._deliver(config.callbacks, result, error)
        finally:
            run_id_ctx.reset(token)

    @staticmethod
    def _deliver(callbacks: RunCallbacks, result: Any, error: str | None) -> None:
        """Invoke exactly one terminal callback, containing any exception it raises."""
        try:
            if error is not None:
                logger.warning("Agent run failed: %s", error)
                callbacks.on_error(error)
            else:
                logger.info("Agent run completed")
                callbacks.on_complete(result)
        except Exception:
            logger.exception("Terminal callback raised")
