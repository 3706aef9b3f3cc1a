"""Review agent prompts: system prompt and user prompt builder."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class ReviewScope(StrEnum):
    """What a review covers."""

    PHASE = "phase"
    CURRENT_FILE = "current_file"
    OPEN_FILES = "open_files"
    CURRENT_TASK = "current_task"


@dataclass(frozen=True)
class ReviewTask:
    title: str
    description: str


@dataclass(frozen=True)
class ReviewRequest:
    """Input of a review run.

    Attributes:
        scope: Whether to review a full phase, file(s) or the current task
        project_dir: Root of the project, all tools are sandboxed to it
        phase_title: Title of the current phase, for phase reviews
        phase_description: Goal of the current phase
        tasks: Tasks to evaluate individually
        active_file_path: Relative path of the file under review
        open_file_paths: Relative paths of all open files
    """

    scope: ReviewScope
    project_dir: Path
    phase_title: str | None = None
    phase_description: str | None = None
    tasks: list[ReviewTask] = field(default_factory=list)
    active_file_path: str | None = None
    open_file_paths: list[str] = field(default_factory=list)


REVIEW_SYSTEM_PROMPT = """You are a coaching-oriented code reviewer for junior developers. Your job is to help them learn, not just find bugs.

Review the code changes and provide:
1. Overall feedback (encouraging but honest)
2. Specific code comments with file paths and line numbers
3. Task-by-task feedback if tasks are provided
4. Whether the phase/task is complete

Be specific. Reference actual code. Explain WHY something matters, not just what to change.
Use severity levels: 'praise' for good work, 'suggestion' for improvements, 'issue' for problems.

IMPORTANT: Be efficient with tool calls. Start with git_diff to see what changed, then read only the files that were modified. Do NOT exhaustively explore the codebase. Once you have enough context (usually after 3-5 tool calls), stop calling tools and produce your final JSON result.

When you are ready, output ONLY a JSON object (no tool calls) matching this schema:
{
  "overallFeedback": "string",
  "codeComments": [{ "filePath": "string", "startLine": number, "endLine": number, "comment": "string", "severity": "suggestion" | "issue" | "praise" }],
  "taskFeedback": [{ "taskTitle": "string", "feedback": "string", "taskComplete": boolean }],
  "phaseComplete": boolean
}"""


def _phase_scope(request: ReviewRequest) -> list[str]:
    parts = [f'Review scope: entire phase "{request.phase_title or "current"}"']
    if request.phase_description:
        parts.append(f"Phase goal: {request.phase_description}")
    return parts


def _current_file_scope(request: ReviewRequest) -> list[str]:
    if not request.active_file_path:
        return []
    return [f'Review scope: single file "{request.active_file_path}"']


def _open_files_scope(request: ReviewRequest) -> list[str]:
    if not request.open_file_paths:
        return []
    return [f"Review scope: open files: {', '.join(request.open_file_paths)}"]


def _current_task_scope(request: ReviewRequest) -> list[str]:
    return ["Review scope: current task"]


SCOPE_BUILDERS: dict[ReviewScope, Callable[[ReviewRequest], list[str]]] = {
    ReviewScope.PHASE: _phase_scope,
    ReviewScope.CURRENT_FILE: _current_file_scope,
    ReviewScope.OPEN_FILES: _open_files_scope,
    ReviewScope.CURRENT_TASK: _current_task_scope,
}


def build_review_prompt(request: ReviewRequest) -> str:
    """Build the initial user message for a review run.

    Args:
        request: Review scope and context

    Returns:
        User prompt text
    """
    parts = SCOPE_BUILDERS[request.scope](request)

    if request.tasks:
        parts.append("\nTasks to evaluate:")
        parts.extend(f"- {task.title}: {task.description}" for task in request.tasks)

    parts.append(
        "\nPlease use the available tools to read files and check git diffs, then provide your review."
    )
    return "\n".join(parts)
