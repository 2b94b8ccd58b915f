"""Self-awareness analysis of an execution result."""

from typing import Any

from ..types.types import ExecutionResult, SelfAwareness

MISSING_CONTEXT_PENALTY = 0.2
MAX_PENALIZED_MISSING_CONTEXT = 3
CONTINUE_PENALTY = 0.15
QUESTION_PENALTY = 0.15


def _as_execution(execution: ExecutionResult | dict[str, Any]) -> ExecutionResult:
    if isinstance(execution, ExecutionResult):
        return execution
    return ExecutionResult.model_validate(execution)


def calculate_confidence(execution: ExecutionResult | dict[str, Any]) -> float:
    """Score how complete a response is, between 0 and 1.

    Starts at 1.0; each missing-context item costs 0.2 (at most three are
    counted), a continuation request costs 0.15 and a question for the user
    costs 0.15.
    """
    result = _as_execution(execution)
    score = 1.0
    if result.missing_context:
        score -= MISSING_CONTEXT_PENALTY * min(
            len(result.missing_context), MAX_PENALIZED_MISSING_CONTEXT
        )
    if result.continue_ is True:
        score -= CONTINUE_PENALTY
    if result.question_for_user is True:
        score -= QUESTION_PENALTY
    return max(0.0, min(1.0, score))


def analyze(execution: ExecutionResult | dict[str, Any]) -> SelfAwareness:
    """Derive the self-awareness record for an execution result."""
    result = _as_execution(execution)
    needs_continue = result.continue_ is True
    has_question = result.question_for_user is True
    return SelfAwareness(
        complete=not result.missing_context and not needs_continue and not has_question,
        missing_context=list(result.missing_context),
        needs_continue=needs_continue,
        has_question=has_question,
        question=result.question,
        confidence=calculate_confidence(result),
    )
