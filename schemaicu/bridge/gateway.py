"""Execution gateway: send the agent request with its planned schema embedded."""

from __future__ import annotations

import logging
from typing import Any

from ..types.types import ExecutionResult
from ..utils.errors import ExecutionFailedError, SchemaICUError
from .agents import (
    AgentType,
    SignatureAlgorithm,
    normalize_signature_algorithm,
    resolve_endpoint_path,
)
from .schema_planner import Transport

logger = logging.getLogger(__name__)


def build_execution_request(
    query: str,
    schema: dict[str, Any],
    context: dict[str, Any] | None = None,
    signature_algorithm: str | SignatureAlgorithm | None = None,
) -> dict[str, Any]:
    """Build the agent request body.

    The schema travels in ``context.expectedSchema`` with ``selfAwareMode``
    switched on; the signature algorithm sits at the top level of the body.
    """
    request_body: dict[str, Any] = {
        "query": query,
        "context": {
            **(context or {}),
            "expectedSchema": schema,
            "selfAwareMode": True,
        },
    }
    algorithm = normalize_signature_algorithm(signature_algorithm)
    if algorithm is not None:
        request_body["signatureAlgorithm"] = algorithm.value
    return request_body


async def execute_with_schema(
    client: Transport,
    agent_type: str | AgentType,
    query: str,
    schema: dict[str, Any],
    context: dict[str, Any] | None = None,
    signature_algorithm: str | SignatureAlgorithm | None = None,
) -> ExecutionResult:
    """Execute one agent call.

    Raises:
        ValueError: If ``signature_algorithm`` is not accepted by the API
        ExecutionFailedError: If the request fails or the response cannot be parsed
    """
    request_body = build_execution_request(query, schema, context, signature_algorithm)
    path = resolve_endpoint_path(agent_type)

    try:
        data = await client.post(path, request_body)
        return ExecutionResult.model_validate(data)
    except Exception as err:
        logger.debug("Agent execution on %s failed: %s", path, err)
        status_code, response = (
            (err.status_code, err.response) if isinstance(err, SchemaICUError) else (None, None)
        )
        raise ExecutionFailedError(
            f"Agent execution failed: {err}", status_code, response
        ) from err
