"""Schema planning: ask the API for a response-shape contract before executing an agent.

Planning never fails the pipeline. When the planning request cannot be
completed, a default schema built for the agent type is used instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from .agents import CODE_AGENT_TYPES, ENDPOINT_PATHS, AgentType

logger = logging.getLogger(__name__)

SCHEMA_PLANNING_PATH = ENDPOINT_PATHS[AgentType.SCHEMA_GENERATOR]

SCHEMA_PLANNING_QUERY = (
    'Generate a JSON schema for {agent_type} agent to respond to this query: "{query}"'
)


class Transport(Protocol):
    async def post(self, path: str, body: dict[str, Any]) -> dict[str, Any]: ...


# -- Default schemas ----------------------------------------------------------


def _field(type_: str, description: str) -> dict[str, Any]:
    return {"type": type_, "description": description}


def _string_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def _base_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "response": _field("string", "Main response to the query"),
            "includesCode": _field("boolean", "Whether response includes code"),
            "code": _field("string", "Code snippet if applicable"),
            "continue": _field("boolean", "Whether agent needs to continue"),
            "questionForUser": _field("boolean", "Whether agent has a question"),
            "question": _field("string", "Follow-up question if applicable"),
            "missingContext": _string_list("List of missing information needed for perfection"),
        },
        "required": [
            "response",
            "includesCode",
            "code",
            "continue",
            "questionForUser",
            "missingContext",
        ],
    }


def _email_schema() -> dict[str, Any]:
    schema = _base_schema()
    schema["properties"]["subject"] = _field("string", "Email subject line")
    schema["properties"]["tone"] = _field("string", "Email tone (formal, casual, etc.)")
    schema["required"] += ["subject", "tone"]
    return schema


def _summary_schema() -> dict[str, Any]:
    schema = _base_schema()
    schema["properties"]["keyPoints"] = _string_list("Key points from the content")
    schema["required"].append("keyPoints")
    return schema


_SCHEMA_BUILDERS: dict[AgentType, Callable[[], dict[str, Any]]] = {
    AgentType.EMAIL: _email_schema,
    AgentType.SUMMARY: _summary_schema,
}


def default_schema(agent_type: str | AgentType) -> dict[str, Any]:
    """Build the fallback schema for an agent type.

    Every agent gets the self-awareness base fields; email and summary agents
    get their extra fields. Unknown agent types get the base schema. A fresh
    dict is returned on every call.
    """
    builder = _SCHEMA_BUILDERS.get(AgentType.parse(agent_type), _base_schema)
    return builder()


# -- Planning -----------------------------------------------------------------


def default_schema_hints(agent_type: str | AgentType) -> dict[str, bool]:
    produces_code = AgentType.parse(agent_type) in CODE_AGENT_TYPES
    return {
        "includeResponseField": True,
        "includeIncludesCodeField": produces_code,
        "includeCodeField": produces_code,
        "includeContinueField": True,
        "includeQuestionForUserField": True,
        "includeMissingContextField": True,
    }


def build_planning_request(
    agent_type: str | AgentType,
    query: str,
    context: dict[str, Any] | None = None,
    hints: dict[str, Any] | None = None,
) -> dict[str, Any]:
    agent_name = agent_type.value if isinstance(agent_type, AgentType) else agent_type
    return {
        "query": SCHEMA_PLANNING_QUERY.format(agent_type=agent_name, query=query),
        "context": {
            "agentType": agent_name,
            "originalQuery": query,
            **(context or {}),
            "schemaHints": {**default_schema_hints(agent_type), **(hints or {})},
        },
    }


async def plan_schema(
    client: Transport,
    agent_type: str | AgentType,
    query: str,
    context: dict[str, Any] | None = None,
    hints: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Plan the response schema for an agent call.

    Args:
        client: Transport used for the planning request
        agent_type: Agent the schema is for
        query: The user's query
        context: Context forwarded to the planner (accumulated across retries)
        hints: Overrides for the schema hint flags

    Returns:
        The planned schema, or the default schema for ``agent_type`` when the
        planner fails or returns no schema
    """
    request_body = build_planning_request(agent_type, query, context, hints)
    try:
        data = await client.post(SCHEMA_PLANNING_PATH, request_body)
    except Exception as err:
        logger.warning("Schema planning failed, using default schema: %s", err)
        return default_schema(agent_type)

    schema = data.get("schema") if isinstance(data, dict) else None
    if not isinstance(schema, dict) or not schema:
        logger.debug("Planner returned no schema for %s, using default schema", agent_type)
        return default_schema(agent_type)
    return schema
