"""Human-readable descriptions of tool invocations."""

from collections.abc import Callable
from typing import Any

from coach_agents.platform.agent.messages import ProgressEvent
from coach_agents.platform.tools.definitions import ToolName

type ToolDescriber = Callable[[dict[str, Any]], str]


def _str_arg(tool_input: dict[str, Any], key: str) -> str | None:
    value = tool_input.get(key)
    return value if isinstance(value, str) and value else None


def _describe_search(tool_input: dict[str, Any]) -> str:
    pattern = _str_arg(tool_input, "pattern") or "pattern"
    path = _str_arg(tool_input, "path")
    if path:
        return f'Searching for "{pattern}" in {path}...'
    return f'Searching for "{pattern}"...'


def _describe_listing(tool_input: dict[str, Any]) -> str:
    path = _str_arg(tool_input, "path")
    if path in (None, ".", "./"):
        return "Listing files in the project root..."
    return f"Listing files in {path}..."


def _describe_diff(tool_input: dict[str, Any]) -> str:
    path = _str_arg(tool_input, "path")
    return f"Checking diff for {path}..." if path else "Checking git diff..."


TOOL_DESCRIPTIONS: dict[str, ToolDescriber] = {
    ToolName.READ_FILE: lambda i: f"Reading {_str_arg(i, 'path') or 'file'}...",
    ToolName.LIST_FILES: _describe_listing,
    ToolName.PATTERN_SEARCH: _describe_search,
    ToolName.GIT_DIFF: _describe_diff,
}


def describe(tool_name: str, tool_input: dict[str, Any]) -> ProgressEvent:
    """Describe a tool invocation that is about to run.

    Args:
        tool_name: Tool name as requested by the model
        tool_input: Tool arguments as requested by the model

    Returns:
        ProgressEvent naming the tool and, when present, the path it touches
    """
    tool_input = tool_input if isinstance(tool_input, dict) else {}
    describer = TOOL_DESCRIPTIONS.get(tool_name)
    message = describer(tool_input) if describer else f"Using {tool_name}..."
    return ProgressEvent(
        message=message,
        tool_name=tool_name,
        file_path=_str_arg(tool_input, "path"),
    )
