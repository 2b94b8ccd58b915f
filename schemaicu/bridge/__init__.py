"""Future Self Bridge - schema planning, self-aware execution and bounded retries."""

from .agents import (
    ENDPOINT_PATHS,
    AgentType,
    SignatureAlgorithm,
    normalize_signature_algorithm,
    resolve_endpoint_path,
    resolve_signature_algorithm,
)
from .awareness import analyze, calculate_confidence
from .gateway import build_execution_request, execute_with_schema
from .orchestrator import (
    DEFAULT_MAX_RETRIES,
    BridgeState,
    FutureSelfBridge,
    accumulate_context,
    next_state,
)
from .schema_planner import build_planning_request, default_schema, plan_schema
from .wrapper import FutureSelfWrapper, MemoryAwareAgent, WrappedAgent

__all__ = [
    "AgentType",
    "BridgeState",
    "DEFAULT_MAX_RETRIES",
    "ENDPOINT_PATHS",
    "FutureSelfBridge",
    "FutureSelfWrapper",
    "MemoryAwareAgent",
    "SignatureAlgorithm",
    "WrappedAgent",
    "accumulate_context",
    "analyze",
    "build_execution_request",
    "build_planning_request",
    "calculate_confidence",
    "default_schema",
    "execute_with_schema",
    "next_state",
    "normalize_signature_algorithm",
    "plan_schema",
    "resolve_endpoint_path",
    "resolve_signature_algorithm",
]
