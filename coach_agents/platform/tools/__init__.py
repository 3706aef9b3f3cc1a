"""Read-only tools the agents use to inspect a project.

- Tool declarations (closed ToolName enum, pydantic input models)
- Sandboxed path resolution
- Filesystem and git helpers
- A dispatcher that never raises
"""

from coach_agents.platform.tools.definitions import (
    TOOL_REGISTRY,
    ToolDefinition,
    ToolName,
    get_tools,
)
from coach_agents.platform.tools.dispatch import ToolOutput, dispatch, execute_tool
from coach_agents.platform.tools.git import GitCommandError
from coach_agents.platform.tools.sandbox import PathOutsideRootError, resolve_within_root

__all__ = [
    "TOOL_REGISTRY",
    "GitCommandError",
    "PathOutsideRootError",
    "ToolDefinition",
    "ToolName",
    "ToolOutput",
    "dispatch",
    "execute_tool",
    "get_tools",
    "resolve_within_root",
]
