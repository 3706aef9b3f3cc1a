"""Planning agent."""

from coach_agents.agents.planning.agent import (
    PlanningAgent,
    PlanningCallbacks,
    PlanningPhase,
    run_planning_agent,
)
from coach_agents.agents.planning.prompt import IssueInput, build_planning_prompt
from coach_agents.agents.planning.schemas import AgentPlanOutput

__all__ = [
    "AgentPlanOutput",
    "IssueInput",
    "PlanningAgent",
    "PlanningCallbacks",
    "PlanningPhase",
    "build_planning_prompt",
    "run_planning_agent",
]
