"""Structured plan output produced by the planning agent."""

from pydantic import BaseModel, Field


class Hints(BaseModel):
    """Three hint levels for a task, from subtle nudge to near-explicit."""

    low: str = Field(min_length=1)
    medium: str = Field(min_length=1)
    high: str = Field(min_length=1)


class Task(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    target_files: list[str] = Field(min_length=1)
    hints: Hints


class Phase(BaseModel):
    number: int = Field(gt=0, strict=True)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    hint: str = Field(min_length=1)
    tasks: list[Task] = Field(min_length=1)


class AgentPlanOutput(BaseModel):
    """The validated plan: a title, a summary and one or more phases."""

    title: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    relevant_files: list[str]
    phases: list[Phase] = Field(min_length=1)
