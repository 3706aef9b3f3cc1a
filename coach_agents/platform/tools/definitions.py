"""Static declarations of the read-only tools available to agents.

Every tool the model can call is a member of the closed ToolName enum and has
a ToolDefinition with a pydantic input model. The registry is read-only,
process-wide configuration.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ToolName(StrEnum):
    """Names of the tools the dispatcher knows how to run."""

    READ_FILE = "read_file"
    LIST_FILES = "list_files"
    PATTERN_SEARCH = "pattern_search"
    GIT_DIFF = "git_diff"


class ReadFileInput(BaseModel):
    path: str = Field(description="Relative path from project root")


class ListFilesInput(BaseModel):
    path: str = Field(".", description="Relative directory path")


class PatternSearchInput(BaseModel):
    pattern: str = Field(description="Regular expression to search file contents for")
    path: str | None = Field(None, description="Optional file or directory to limit the search to")


class GitDiffInput(BaseModel):
    path: str | None = Field(None, description="Optional file path to diff")


@dataclass(frozen=True)
class ToolDefinition:
    """Declaration of a tool as presented to the model.

    Attributes:
        name: Tool name
        description: Human description shown to the model
        input_model: Pydantic model describing and validating the tool input
    """

    name: ToolName
    description: str
    input_model: type[BaseModel]

    @property
    def input_fields(self) -> tuple[str, ...]:
        return tuple(self.input_model.model_fields)

    @property
    def input_schema(self) -> dict[str, Any]:
        schema = self.input_model.model_json_schema()
        schema.pop("title", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        return schema

    def to_declaration(self) -> dict[str, Any]:
        """Return the tool declaration in OpenAI function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": str(self.name),
                "description": self.description,
                "parameters": self.input_schema,
            },
        }


TOOL_REGISTRY: dict[ToolName, ToolDefinition] = {
    ToolName.READ_FILE: ToolDefinition(
        name=ToolName.READ_FILE,
        description="Read the contents of a file from the project directory",
        input_model=ReadFileInput,
    ),
    ToolName.LIST_FILES: ToolDefinition(
        name=ToolName.LIST_FILES,
        description="List files in a directory. Entries are prefixed with 'd' (directory) or 'f' (file).",
        input_model=ListFilesInput,
    ),
    ToolName.PATTERN_SEARCH: ToolDefinition(
        name=ToolName.PATTERN_SEARCH,
        description=(
            "Search file contents for a regular expression. "
            "Optionally limit the search to a file or directory."
        ),
        input_model=PatternSearchInput,
    ),
    ToolName.GIT_DIFF: ToolDefinition(
        name=ToolName.GIT_DIFF,
        description="Get the git diff for uncommitted changes. Optionally filter to a specific file.",
        input_model=GitDiffInput,
    ),
}


def get_tools(*names: ToolName) -> tuple[ToolDefinition, ...]:
    """Return the definitions for the given tool names, in the given order."""
    return tuple(TOOL_REGISTRY[name] for name in names)
