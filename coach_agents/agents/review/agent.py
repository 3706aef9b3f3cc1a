"""Review agent: inspects a git diff and produces coaching-oriented feedback.

Unlike planning, a review whose final response holds no JSON at all still
succeeds: the model's raw text becomes the overall feedback.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Self

from coach_agents.agents.review.prompt import (
    REVIEW_SYSTEM_PROMPT,
    ReviewRequest,
    build_review_prompt,
)
from coach_agents.agents.review.schemas import ReviewResult
from coach_agents.platform.agent.config import ExtractionFailurePolicy, RunCallbacks, RunConfig
from coach_agents.platform.agent.driver import ConversationDriver
from coach_agents.platform.agent.llm_client import LlmClient
from coach_agents.platform.agent.messages import ProgressEvent
from coach_agents.platform.settings import AgentRunSettings, Settings
from coach_agents.platform.tools.definitions import ToolName, get_tools

logger = logging.getLogger(__name__)

STARTING_MESSAGE = "Starting review..."
FINALIZING_MESSAGE = "Generating review feedback..."


@dataclass(frozen=True)
class ReviewCallbacks:
    on_progress: Callable[[ProgressEvent], None]
    on_complete: Callable[[ReviewResult], None]
    on_error: Callable[[str], None]


class ReviewAgent:
    """Configures and runs review runs on a conversation driver."""

    SLUG = "review"
    TOOLS = get_tools(ToolName.READ_FILE, ToolName.GIT_DIFF, ToolName.LIST_FILES)

    def __init__(
        self,
        driver: ConversationDriver,
        run_settings: AgentRunSettings,
        max_tool_output_chars: int = 50_000,
    ) -> None:
        self.driver = driver
        self.run_settings = run_settings
        self.max_tool_output_chars = max_tool_output_chars

    @classmethod
    def from_settings(cls, llm_client: LlmClient, settings: Settings) -> Self:
        """Create a review agent from application settings."""
        return cls(
            driver=ConversationDriver(llm_client, settings.tools.max_search_results),
            run_settings=settings.review,
            max_tool_output_chars=settings.tools.max_output_chars,
        )

    def build_run_config(self, request: ReviewRequest, callbacks: ReviewCallbacks) -> RunConfig:
        """Build the driver configuration for one review run."""

        def on_finalizing() -> None:
            callbacks.on_progress(ProgressEvent(message=FINALIZING_MESSAGE))

        return RunConfig(
            agent_slug=self.SLUG,
            system_prompt=REVIEW_SYSTEM_PROMPT,
            user_prompt=build_review_prompt(request),
            tools=self.TOOLS,
            output_schema=ReviewResult,
            callbacks=RunCallbacks(
                on_progress=callbacks.on_progress,
                on_complete=callbacks.on_complete,
                on_error=callbacks.on_error,
                on_finalizing=on_finalizing,
            ),
            project_root=request.project_dir,
            model=self.run_settings.model,
            max_turns=self.run_settings.max_turns,
            max_tokens=self.run_settings.max_tokens,
            extraction_failure_policy=ExtractionFailurePolicy.FALLBACK_RAW_TEXT,
            fallback_result=ReviewResult.from_raw_text,
            max_tool_output_chars=self.max_tool_output_chars,
        )

    async def run(self, request: ReviewRequest, callbacks: ReviewCallbacks) -> None:
        """Review the project's changes. Never raises.

        Args:
            request: Review scope, project directory and context
            callbacks: Receives progress and the outcome
        """
        logger.info("Reviewing %s scope in %s", request.scope, request.project_dir)
        try:
            callbacks.on_progress(ProgressEvent(message=STARTING_MESSAGE))
        except Exception as e:
            logger.exception("Progress callback raised")
            try:
                callbacks.on_error(f"Review failed to start: {e}")
            except Exception:
                logger.exception("Error callback raised")
            return
        await self.driver.run(self.build_run_config(request, callbacks))


async def run_review_agent(
    request: ReviewRequest,
    callbacks: ReviewCallbacks,
    llm_client: LlmClient,
    settings: Settings | None = None,
) -> None:
    """Run the review agent against the project in ``request.project_dir``.

    The agent uses git_diff, read_file and list_files to inspect the changes,
    then outputs a ReviewResult. A final response without JSON degrades to a
    result carrying the raw text; a response whose JSON fails validation is
    reported through ``callbacks.on_error``.
    """
    agent = ReviewAgent.from_settings(llm_client, settings or Settings())
    await agent.run(request, callbacks)
