"""Agent infrastructure module.

This module provides the core of every agent run:
- Run configuration and callback bundle
- Conversation, progress and result types
- LLM client interface and LiteLLM implementation
- The conversation driver (LangGraph reasoner/tools loop)
- Output extraction and validation
- Agent-specific metrics
"""

from coach_agents.platform.agent.config import (
    ExtractionFailurePolicy,
    RunCallbacks,
    RunConfig,
)
from coach_agents.platform.agent.driver import ConversationDriver
from coach_agents.platform.agent.extraction import extract, extract_json
from coach_agents.platform.agent.llm_client import LiteLlmClient, LlmClient
from coach_agents.platform.agent.messages import (
    AgentResult,
    ConversationMessage,
    FailureKind,
    LlmResponse,
    ProgressEvent,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

__all__ = [
    "AgentResult",
    "ConversationDriver",
    "ConversationMessage",
    "ExtractionFailurePolicy",
    "FailureKind",
    "LiteLlmClient",
    "LlmClient",
    "LlmResponse",
    "ProgressEvent",
    "RunCallbacks",
    "RunConfig",
    "TextBlock",
    "ToolResultBlock",
    "ToolUseBlock",
    "extract",
    "extract_json",
]
