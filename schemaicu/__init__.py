__version__ = "0.1.0"

from .agents.summary import SummaryAgent
from .bridge import (
    AgentType,
    BridgeState,
    FutureSelfBridge,
    FutureSelfWrapper,
    MemoryAwareAgent,
    SignatureAlgorithm,
    WrappedAgent,
    analyze,
    default_schema,
)
from .client import SchemaICU
from .memory import (
    FileMemoryStorage,
    InMemoryStorage,
    Interaction,
    MemoryContext,
    MemoryManager,
    MemoryStorage,
    Summary,
    SummaryRange,
)
from .runtime.client import SchemaICUClient
from .types.types import (
    BridgeMetadata,
    BridgeResult,
    ExecutionResult,
    SelfAwareness,
    SignatureDescriptor,
)
from .utils.config import SchemaICUConfig
from .utils.errors import (
    APIError,
    AuthenticationError,
    ExecutionFailedError,
    RateLimitError,
    SchemaICUError,
    ValidationError,
)

__all__ = [
    "SchemaICU",
    "SchemaICUClient",
    "SchemaICUConfig",
    # Future Self Bridge
    "AgentType",
    "BridgeState",
    "FutureSelfBridge",
    "FutureSelfWrapper",
    "MemoryAwareAgent",
    "SignatureAlgorithm",
    "WrappedAgent",
    "analyze",
    "default_schema",
    "BridgeMetadata",
    "BridgeResult",
    "ExecutionResult",
    "SelfAwareness",
    "SignatureDescriptor",
    # Memory
    "FileMemoryStorage",
    "InMemoryStorage",
    "Interaction",
    "MemoryContext",
    "MemoryManager",
    "MemoryStorage",
    "Summary",
    "SummaryRange",
    "SummaryAgent",
    # Errors
    "APIError",
    "AuthenticationError",
    "ExecutionFailedError",
    "RateLimitError",
    "SchemaICUError",
    "ValidationError",
]
