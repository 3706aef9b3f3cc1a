"""Planning agent: explores a repository and produces a phased implementation plan.

Progress is streamed to the caller while the agent works: one progress event
per tool invocation, plus coarse phase updates that drive a loading
indicator. The run never raises; the outcome arrives through the callbacks.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Self

from coach_agents.agents.planning.prompt import (
    PLANNING_SYSTEM_PROMPT,
    IssueInput,
    build_planning_prompt,
)
from coach_agents.agents.planning.schemas import AgentPlanOutput
from coach_agents.platform.agent.config import ExtractionFailurePolicy, RunCallbacks, RunConfig
from coach_agents.platform.agent.driver import ConversationDriver
from coach_agents.platform.agent.llm_client import LlmClient
from coach_agents.platform.agent.messages import ProgressEvent
from coach_agents.platform.settings import AgentRunSettings, Settings
from coach_agents.platform.tools.definitions import ToolName, get_tools

logger = logging.getLogger(__name__)


class PlanningPhase(StrEnum):
    """Loading phases shown while a plan is produced."""

    FETCHING = "fetching"
    EXPLORING = "exploring"
    PLANNING = "planning"
    WRITING_HINTS = "writing_hints"


# Tool count -> phase update. Exploration is the bulk of a planning run, so
# progress is a heuristic on how many tools the model has used.
PHASE_MILESTONES: dict[int, tuple[PlanningPhase, int]] = {
    1: (PlanningPhase.EXPLORING, 25),
    5: (PlanningPhase.EXPLORING, 50),
    10: (PlanningPhase.PLANNING, 75),
}


@dataclass(frozen=True)
class PlanningCallbacks:
    """Callbacks the caller provides to receive streaming updates.

    Attributes:
        on_progress: Called before each tool runs and while the plan is parsed
        on_phase_update: Called with a phase and a 0-100 progress value
        on_complete: Called once with the validated plan
        on_error: Called once with a failure message
    """

    on_progress: Callable[[ProgressEvent], None]
    on_phase_update: Callable[[PlanningPhase, int], None]
    on_complete: Callable[[AgentPlanOutput], None]
    on_error: Callable[[str], None]


class PlanningAgent:
    """Configures and runs planning runs on a conversation driver."""

    SLUG = "planning"
    TOOLS = get_tools(ToolName.READ_FILE, ToolName.LIST_FILES, ToolName.PATTERN_SEARCH)

    def __init__(
        self,
        driver: ConversationDriver,
        run_settings: AgentRunSettings,
        max_tool_output_chars: int = 50_000,
    ) -> None:
        """Initialize the agent.

        Args:
            driver: Conversation driver owning the LLM client
            run_settings: Model and budgets for planning runs
            max_tool_output_chars: Tool outputs longer than this are truncated
        """
        self.driver = driver
        self.run_settings = run_settings
        self.max_tool_output_chars = max_tool_output_chars

    @classmethod
    def from_settings(cls, llm_client: LlmClient, settings: Settings) -> Self:
        """Create a planning agent from application settings."""
        return cls(
            driver=ConversationDriver(llm_client, settings.tools.max_search_results),
            run_settings=settings.planning,
            max_tool_output_chars=settings.tools.max_output_chars,
        )

    @staticmethod
    def _run_callbacks(callbacks: PlanningCallbacks) -> RunCallbacks:
        def on_tool_use(count: int, event: ProgressEvent) -> None:
            milestone = PHASE_MILESTONES.get(count)
            if milestone is not None:
                callbacks.on_phase_update(*milestone)

        def on_finalizing() -> None:
            callbacks.on_phase_update(PlanningPhase.WRITING_HINTS, 90)
            callbacks.on_progress(ProgressEvent(message="Parsing implementation plan..."))

        def on_complete(plan: AgentPlanOutput) -> None:
            try:
                callbacks.on_phase_update(PlanningPhase.WRITING_HINTS, 100)
            except Exception:
                logger.exception("Phase update callback raised")
            callbacks.on_complete(plan)

        return RunCallbacks(
            on_progress=callbacks.on_progress,
            on_complete=on_complete,
            on_error=callbacks.on_error,
            on_tool_use=on_tool_use,
            on_finalizing=on_finalizing,
        )

    def build_run_config(
        self,
        issue: IssueInput,
        repo_path: str | Path,
        callbacks: PlanningCallbacks,
    ) -> RunConfig:
        """Build the driver configuration for one planning run."""
        return RunConfig(
            agent_slug=self.SLUG,
            system_prompt=PLANNING_SYSTEM_PROMPT,
            user_prompt=build_planning_prompt(issue),
            tools=self.TOOLS,
            output_schema=AgentPlanOutput,
            callbacks=self._run_callbacks(callbacks),
            project_root=Path(repo_path),
            model=self.run_settings.model,
            max_turns=self.run_settings.max_turns,
            max_tokens=self.run_settings.max_tokens,
            extraction_failure_policy=ExtractionFailurePolicy.FAIL,
            max_tool_output_chars=self.max_tool_output_chars,
        )

    async def run(
        self,
        issue: IssueInput,
        repo_path: str | Path,
        callbacks: PlanningCallbacks,
    ) -> None:
        """Produce an implementation plan for an issue. Never raises.

        Args:
            issue: The GitHub issue to plan for
            repo_path: Root of the repository to explore
            callbacks: Receives progress, phase updates and the outcome
        """
        logger.info("Planning issue #%d in %s", issue.number, repo_path)
        try:
            callbacks.on_phase_update(PlanningPhase.EXPLORING, 0)
        except Exception as e:
            logger.exception("Phase update callback raised")
            try:
                callbacks.on_error(f"Planning failed to start: {e}")
            except Exception:
                logger.exception("Error callback raised")
            return
        await self.driver.run(self.build_run_config(issue, repo_path, callbacks))


async def run_planning_agent(
    issue: IssueInput,
    repo_path: str | Path,
    callbacks: PlanningCallbacks,
    llm_client: LlmClient,
    settings: Settings | None = None,
) -> None:
    """Run the planning agent to produce an implementation plan for an issue.

    The agent uses read_file, list_files and pattern_search to explore the
    codebase, then outputs a structured JSON plan. Any failure, including
    unparseable output, is reported through ``callbacks.on_error``.
    """
    agent = PlanningAgent.from_settings(llm_client, settings or Settings())
    await agent.run(issue, repo_path, callbacks)
