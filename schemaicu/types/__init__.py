from .types import (
    BridgeMetadata,
    BridgeResult,
    ExecutionResult,
    SelfAwareness,
    SignatureDescriptor,
)

__all__ = [
    "BridgeMetadata",
    "BridgeResult",
    "ExecutionResult",
    "SelfAwareness",
    "SignatureDescriptor",
]
