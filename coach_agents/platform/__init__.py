"""Agent platform infrastructure.

This module provides the shared infrastructure the planning and review
agents are built on:
- The conversation driver and its configuration
- LLM client interface and LiteLLM integration
- Read-only, sandboxed project tools
- Settings and observability utilities
"""

from coach_agents.platform.agent.config import (
    ExtractionFailurePolicy,
    RunCallbacks,
    RunConfig,
)
from coach_agents.platform.agent.driver import ConversationDriver
from coach_agents.platform.agent.llm_client import LiteLlmClient, LlmClient
from coach_agents.platform.agent.messages import AgentResult, ProgressEvent
from coach_agents.platform.settings import Settings

__all__ = [
    # Driver
    "ConversationDriver",
    # Configuration
    "ExtractionFailurePolicy",
    "RunCallbacks",
    "RunConfig",
    "Settings",
    # LLM
    "LiteLlmClient",
    "LlmClient",
    # Result types
    "AgentResult",
    "ProgressEvent",
]
