"""Extraction and validation of structured output from model text.

Models are asked to finish with a JSON object, but they wrap it in many ways.
Three strategies are tried in priority order and the first one that parses
wins:

1. JSON wrapped in a markdown code fence (with or without a language tag)
2. The entire trimmed text as JSON
3. The substring between the first ``{`` and the last ``}``
"""

import json
import re
from typing import Any

from pydantic import BaseModel, ValidationError

from coach_agents.platform.agent.messages import AgentResult, FailureKind

NO_JSON_ERROR = "No valid JSON found in agent output"

_FENCE_RE = re.compile(r"```(?:[\w-]+)?[ \t]*\n?([\s\S]*?)\n?```")


def _try_parse(candidate: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(candidate)
    except json.JSONDecodeError:
        return False, None


def extract_json(text: str) -> Any | None:
    """Find and parse the JSON value embedded in text.

    Returns:
        The parsed value, or None when no strategy yields valid JSON
    """
    fence = _FENCE_RE.search(text)
    if fence is not None:
        ok, value = _try_parse(fence.group(1).strip())
        if ok:
            return value

    ok, value = _try_parse(text.strip())
    if ok:
        return value

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        ok, value = _try_parse(text[start : end + 1])
        if ok:
            return value

    return None


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"]) or "(root)"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def extract[T: BaseModel](text: str, schema: type[T]) -> AgentResult[T]:
    """Extract JSON from text and validate it against schema.

    Args:
        text: The model's final free-text response
        schema: Pydantic model the JSON must satisfy

    Returns:
        AgentResult with the validated model, or a failure of kind
        EXTRACTION (no JSON) or SCHEMA (JSON present but invalid)
    """
    value = extract_json(text)
    if value is None:
        return AgentResult.fail(NO_JSON_ERROR, FailureKind.EXTRACTION)

    try:
        data = schema.model_validate(value)
    except ValidationError as e:
        return AgentResult.fail(
            f"Validation failed: {_format_validation_error(e)}",
            FailureKind.SCHEMA,
        )
    return AgentResult.ok(data)
