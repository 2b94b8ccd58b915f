"""Future Self Bridge: plan a schema, execute against it, check completeness, retry.

Each cycle runs three steps:

1. Planning - the "current self" asks for a response schema
2. Executing - the "future self" answers with that schema as a contract
3. Analyzing - the answer's own completeness flags decide whether to stop

Incomplete answers are retried with the previous attempt's gaps folded into
the request context, up to ``max_retries`` extra cycles.
"""

from __future__ import annotations

import json
import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..types.types import BridgeMetadata, BridgeResult, ExecutionResult, SelfAwareness
from ..utils.errors import ExecutionFailedError
from .agents import AgentType, SignatureAlgorithm, normalize_signature_algorithm
from .awareness import analyze
from .gateway import execute_with_schema
from .schema_planner import Transport, plan_schema

if TYPE_CHECKING:
    from ..memory.manager import MemoryManager

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3


class BridgeState(str, Enum):
    PLANNING = "planning"
    EXECUTING = "executing"
    ANALYZING = "analyzing"
    DONE = "done"
    EXHAUSTED = "exhausted"


def next_state(
    awareness: SelfAwareness,
    attempt: int,
    auto_retry: bool,
    max_retries: int,
) -> tuple[BridgeState, str | None]:
    """Decide what follows an analysis.

    Returns:
        ``(state, reason)`` where state is DONE, EXHAUSTED or PLANNING and
        reason is set only for EXHAUSTED
    """
    if awareness.complete:
        return BridgeState.DONE, None
    if attempt >= max_retries:
        return BridgeState.EXHAUSTED, "max_retries_reached"
    if not auto_retry:
        return BridgeState.EXHAUSTED, "auto_retry_disabled"
    return BridgeState.PLANNING, None


def accumulate_context(
    context: dict[str, Any],
    schema: dict[str, Any],
    awareness: SelfAwareness,
    execution: ExecutionResult,
) -> dict[str, Any]:
    """Return a new context carrying what the previous attempt was missing.

    The input context is not modified.
    """
    return {
        **context,
        "previousAttempts": context.get("previousAttempts", 0) + 1,
        "missingContextFromPreviousRun": list(awareness.missing_context),
        "previousSchema": schema,
        "previousResponse": execution.response,
    }


class FutureSelfBridge:
    """Runs agents through the plan / execute / analyze loop.

    Usage::

        bridge = FutureSelfBridge(client)
        result = await bridge.execute("code-generator", "Parse a CSV file")
        if not result.complete:
            print(result.future_self_bridge.self_awareness.missing_context)
    """

    def __init__(self, client: Transport):
        self.client = client

    async def plan_schema(
        self,
        agent_type: str | AgentType,
        query: str,
        context: dict[str, Any] | None = None,
        hints: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await plan_schema(self.client, agent_type, query, context=context, hints=hints)

    async def execute_with_schema(
        self,
        agent_type: str | AgentType,
        query: str,
        schema: dict[str, Any],
        context: dict[str, Any] | None = None,
        signature_algorithm: str | SignatureAlgorithm | None = None,
    ) -> ExecutionResult:
        return await execute_with_schema(
            self.client,
            agent_type,
            query,
            schema=schema,
            context=context,
            signature_algorithm=signature_algorithm,
        )

    async def execute(
        self,
        agent_type: str | AgentType,
        query: str,
        context: dict[str, Any] | None = None,
        signature_algorithm: str | SignatureAlgorithm | None = None,
        auto_retry: bool = True,
        max_retries: int = DEFAULT_MAX_RETRIES,
        schema_hints: dict[str, Any] | None = None,
    ) -> BridgeResult:
        """Execute an agent with schema planning and self-aware retries.

        Args:
            agent_type: Agent to run (e.g. "code-generator", "email")
            query: The user's query
            context: Initial request context
            signature_algorithm: "ecdsa", "ml-dsa-65", "ml-dsa-87" or "pq";
                omitted means the server default (ECDSA)
            auto_retry: Retry while the agent reports missing context
            max_retries: Extra cycles allowed after the first one
            schema_hints: Overrides for the schema planner's hint flags

        Returns:
            BridgeResult with the last execution and how the loop ended

        Raises:
            ValueError: For a negative ``max_retries`` or an unknown signature algorithm
            ExecutionFailedError: If any agent execution fails; no partial result
                is returned
        """
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        algorithm = normalize_signature_algorithm(signature_algorithm)

        attempt = 0
        accumulated_context = dict(context or {})

        while True:
            cycle = attempt + 1
            logger.debug("Cycle %d: planning schema for %s", cycle, agent_type)
            schema = await self.plan_schema(
                agent_type, query, context=accumulated_context, hints=schema_hints
            )

            logger.debug("Cycle %d: executing %s with planned schema", cycle, agent_type)
            try:
                execution = await self.execute_with_schema(
                    agent_type,
                    query,
                    schema=schema,
                    context=accumulated_context,
                    signature_algorithm=algorithm,
                )
            except ExecutionFailedError as err:
                raise ExecutionFailedError(
                    f"Future Self Bridge execution failed: {err}",
                    err.status_code,
                    err.response,
                ) from err

            awareness = analyze(execution)
            state, reason = next_state(awareness, attempt, auto_retry, max_retries)

            if state is not BridgeState.PLANNING:
                if state is BridgeState.DONE:
                    logger.info("%s complete after %d attempt(s)", agent_type, cycle)
                else:
                    logger.warning(
                        "%s incomplete after %d attempt(s): %s", agent_type, cycle, reason
                    )
                return BridgeResult(
                    execution=execution,
                    future_self_bridge=BridgeMetadata(
                        schema_planned=schema,
                        self_awareness=awareness,
                        attempts=cycle,
                        complete=state is BridgeState.DONE,
                        reason=reason,
                    ),
                )

            logger.info(
                "Retrying %s (attempt %d), missing context: %s",
                agent_type,
                cycle + 1,
                awareness.missing_context,
            )
            accumulated_context = accumulate_context(
                accumulated_context, schema, awareness, execution
            )
            attempt += 1

    async def execute_with_memory(
        self,
        memory: MemoryManager | None,
        agent_type: str | AgentType,
        query: str,
        context: dict[str, Any] | None = None,
        **options: Any,
    ) -> BridgeResult:
        """Execute with memory context attached, then record the exchange in memory.

        The memory view goes into the request context under ``memory``. After
        the run, the query is stored as a user turn and the response as an
        assistant turn whose metadata carries the signature and bridge metadata.
        """
        request_context = dict(context or {})
        if memory is not None:
            await memory.initialize()
            request_context["memory"] = memory.build_context().to_dict()

        result = await self.execute(agent_type, query, context=request_context, **options)

        if memory is not None:
            agent_name = agent_type.value if isinstance(agent_type, AgentType) else agent_type
            execution = result.execution
            await memory.add_interaction("user", query, ts=_now_ms())
            await memory.add_interaction(
                "assistant",
                _response_text(execution.response),
                ts=_now_ms(),
                metadata={
                    "agentType": agent_name,
                    "signature": (
                        execution.signature.model_dump(mode="json", by_alias=True)
                        if execution.signature
                        else None
                    ),
                    "signatureAlgorithm": execution.signature_algorithm,
                    "futureSelfBridge": result.future_self_bridge.model_dump(
                        mode="json", by_alias=True, exclude_none=True
                    ),
                },
            )

        return result


def _now_ms() -> int:
    return int(time.time() * 1000)


def _response_text(response: Any) -> str:
    if response is None:
        return ""
    if isinstance(response, str):
        return response
    return json.dumps(response)
