"""Review agent."""

from coach_agents.agents.review.agent import ReviewAgent, ReviewCallbacks, run_review_agent
from coach_agents.agents.review.prompt import (
    ReviewRequest,
    ReviewScope,
    ReviewTask,
    build_review_prompt,
)
from coach_agents.agents.review.schemas import CodeComment, ReviewResult, TaskFeedback

__all__ = [
    "CodeComment",
    "ReviewAgent",
    "ReviewCallbacks",
    "ReviewRequest",
    "ReviewResult",
    "ReviewScope",
    "ReviewTask",
    "TaskFeedback",
    "build_review_prompt",
    "run_review_agent",
]
