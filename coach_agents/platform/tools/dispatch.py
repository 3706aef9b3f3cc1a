"""Tool dispatcher that runs a named tool against a sandboxed project root.

Dispatching never raises: unknown tools, invalid input and any failure of the
underlying filesystem or git operation are rendered as descriptive strings so
the agent loop always has a result to feed back to the model.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from coach_agents.platform.tools import filesystem, git
from coach_agents.platform.tools.definitions import (
    TOOL_REGISTRY,
    GitDiffInput,
    ListFilesInput,
    PatternSearchInput,
    ReadFileInput,
    ToolName,
)
from coach_agents.platform.tools.sandbox import resolve_within_root

logger = logging.getLogger(__name__)

DEFAULT_MAX_SEARCH_RESULTS = 100


@dataclass(frozen=True)
class ToolOutput:
    content: str
    is_error: bool = False


def _read_file(args: ReadFileInput, root: Path) -> str:
    return filesystem.read_file(resolve_within_root(args.path, root))


def _list_files(args: ListFilesInput, root: Path) -> str:
    entries = filesystem.list_directory(resolve_within_root(args.path, root))
    if not entries:
        return "(empty directory)"
    return "\n".join(f"{'d' if e.is_directory else 'f'} {e.name}" for e in entries)


def _pattern_search(args: PatternSearchInput, root: Path, max_results: int) -> str:
    resolved_root = Path(root).resolve()
    target = resolve_within_root(args.path or ".", resolved_root)
    matches, truncated = filesystem.search_files(args.pattern, target, resolved_root, max_results)
    if not matches:
        return f"No matches found for '{args.pattern}'"
    lines = [f"{m.path}:{m.line_number}: {m.line}" for m in matches]
    if truncated:
        lines.append(f"(results truncated at {max_results} matches)")
    return "\n".join(lines)


def _git_diff(args: GitDiffInput, root: Path) -> str:
    resolved_root = Path(root).resolve()
    path = None
    if args.path:
        path = resolve_within_root(args.path, resolved_root).relative_to(resolved_root).as_posix()
    return git.diff(resolved_root, path) or "(no changes)"


def execute_tool(
    name: str,
    tool_input: dict[str, Any],
    project_root: str | Path,
    max_search_results: int = DEFAULT_MAX_SEARCH_RESULTS,
) -> ToolOutput:
    """Run a tool and report whether its output describes an error.

    Args:
        name: Tool name requested by the model
        tool_input: Tool arguments requested by the model
        project_root: Directory the tool is sandboxed to
        max_search_results: Match cap for pattern_search

    Returns:
        ToolOutput with the tool's text result or an error description
    """
    try:
        tool_name = ToolName(name)
    except ValueError:
        return ToolOutput(f"Unknown tool: {name}", is_error=True)

    root = Path(project_root)
    try:
        args = TOOL_REGISTRY[tool_name].input_model.model_validate(tool_input or {})
        match tool_name:
            case ToolName.READ_FILE:
                content = _read_file(args, root)  # type: ignore[arg-type]
            case ToolName.LIST_FILES:
                content = _list_files(args, root)  # type: ignore[arg-type]
            case ToolName.PATTERN_SEARCH:
                content = _pattern_search(args, root, max_search_results)  # type: ignore[arg-type]
            case ToolName.GIT_DIFF:
                content = _git_diff(args, root)  # type: ignore[arg-type]
    except ValidationError as e:
        message = "; ".join(f"{'.'.join(map(str, err['loc'])) or 'input'}: {err['msg']}" for err in e.errors())
        return ToolOutput(f"Error executing {name}: invalid input ({message})", is_error=True)
    except Exception as e:
        logger.debug("Tool %s failed: %s", name, e)
        return ToolOutput(f"Error executing {name}: {e}", is_error=True)

    return ToolOutput(content)


def dispatch(
    name: str,
    tool_input: dict[str, Any],
    project_root: str | Path,
    max_search_results: int = DEFAULT_MAX_SEARCH_RESULTS,
) -> str:
    """Run a named tool and return its result as a string. Never raises."""
    return execute_tool(name, tool_input, project_root, max_search_results).content
