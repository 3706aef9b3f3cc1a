"""Finalize node that turns the terminal response into a validated result."""

import logging
from typing import Any

from coach_agents.platform.agent.config import ExtractionFailurePolicy, RunConfig
from coach_agents.platform.agent.extraction import extract
from coach_agents.platform.agent.messages import FailureKind
from coach_agents.platform.agent.state import RunState

from .base import Node

logger = logging.getLogger(__name__)


class FinalizeNode(Node):
    """Node that extracts and validates the structured output.

    Applies the run's extraction-failure policy: under FALLBACK_RAW_TEXT a
    response with no JSON at all becomes a minimal result built from the raw
    text. Schema violations always fail the run.
    """

    def __init__(self, config: RunConfig):
        self.config = config

    async def __call__(self, state: RunState) -> dict[str, Any]:
        self.config.callbacks.on_finalizing()

        text = state["messages"][-1].text
        result = extract(text, self.config.output_schema)
        if result.success:
            return {"result": result.data}

        if (
            result.failure is FailureKind.EXTRACTION
            and self.config.extraction_failure_policy is ExtractionFailurePolicy.FALLBACK_RAW_TEXT
            and self.config.fallback_result is not None
        ):
            logger.info("No JSON in %s output, falling back to raw text", self.config.agent_slug)
            return {"result": self.config.fallback_result(text)}

        logger.warning("Output of %s rejected: %s", self.config.agent_slug, result.error)
        return {"error": result.error}
