"""coach-agents - Tool-using LLM agents that plan and review work for junior developers."""

from .agents.planning import run_planning_agent
from .agents.review import run_review_agent
from .platform.settings import Settings

__all__ = ["Settings", "run_planning_agent", "run_review_agent"]
