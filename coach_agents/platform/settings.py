"""Application settings and configuration.

This module provides Pydantic settings classes for application configuration,
loaded from environment variables with support for nested configuration
(e.g. ``PLANNING__MAX_TURNS=40``).
"""

import logging

import pydantic_settings
from pydantic import BaseModel, Field, field_validator

DEFAULT_MODEL = "litellm_proxy/anthropic/claude-sonnet-4-5"


class LoggingSettings(BaseModel):
    level: str = Field("INFO")
    json_output: bool = Field(False, description="True=JSON lines, False=console")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, v):
        v_upper = v.upper()
        if v_upper not in logging._nameToLevel:
            raise ValueError(f'invalid value "{v}"')
        return v_upper


class BugsnagSettings(BaseModel):
    api_key: str
    release_stage: str = Field("development")

    @field_validator("release_stage")
    @classmethod
    def _validate_bugsnag_release_stage(cls, v):
        if v not in ["development", "production", "local"]:
            raise ValueError(f'invalid bugsnag release stage "{v}"')
        return v


class LitellmSettings(BaseModel):
    proxy_api_base: str | None = None
    proxy_api_key: str | None = None
    temperature: float = Field(0.7, ge=0.0, le=1.0)


class AgentRunSettings(BaseModel):
    """Budgets for one kind of agent run.

    Attributes:
        model: Model identifier passed to the LLM proxy
        max_turns: Maximum LLM calls before the run fails
        max_tokens: Maximum output tokens per LLM call
    """

    model: str = DEFAULT_MODEL
    max_turns: int = Field(20, ge=1)
    max_tokens: int = Field(8192, ge=1)


class PlanningRunSettings(AgentRunSettings):
    """Planning explores a whole repository, so it gets a larger budget."""

    max_turns: int = Field(30, ge=1)
    max_tokens: int = Field(16384, ge=1)


class ToolSettings(BaseModel):
    """Limits applied to tool output.

    Attributes:
        max_output_chars: Tool outputs longer than this are truncated
        max_search_results: Maximum matches returned by pattern_search
    """

    max_output_chars: int = Field(50_000, ge=1)
    max_search_results: int = Field(100, ge=1)


class Settings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_nested_delimiter="__")

    log: LoggingSettings = LoggingSettings()

    # LiteLLM proxy configuration
    litellm: LitellmSettings = LitellmSettings()

    # Error reporting is off unless configured
    bugsnag: BugsnagSettings | None = None

    planning: PlanningRunSettings = PlanningRunSettings()
    review: AgentRunSettings = AgentRunSettings()

    tools: ToolSettings = ToolSettings()
