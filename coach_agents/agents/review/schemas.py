"""Structured review output produced by the review agent.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON the model is asked to produce.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

type Severity = Literal["suggestion", "issue", "praise"]

NO_STRUCTURED_OUTPUT = "Review completed but no structured output was produced."


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CodeComment(_CamelModel):
    """An inline comment anchored to a file location."""

    file_path: str
    start_line: int
    end_line: int
    comment: str
    severity: Severity


class TaskFeedback(_CamelModel):
    task_title: str
    feedback: str
    task_complete: bool


class ReviewResult(_CamelModel):
    """Review feedback for a phase, task or set of files.

    Attributes:
        overall_feedback: High-level summary, encouraging but honest
        code_comments: Inline comments anchored to file locations
        task_feedback: Per-task completion assessment, when tasks were given
        phase_complete: Whether the phase is considered done
    """

    overall_feedback: str
    code_comments: list[CodeComment]
    task_feedback: list[TaskFeedback] | None = None
    phase_complete: bool | None = None

    @classmethod
    def from_raw_text(cls, text: str) -> "ReviewResult":
        """Minimal result carrying the model's free-form text as feedback."""
        return cls(overall_feedback=text or NO_STRUCTURED_OUTPUT, code_comments=[])
