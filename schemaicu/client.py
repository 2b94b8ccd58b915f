"""Unified SchemaICU class combining the transport, the Future Self Bridge and memory sessions."""

import logging
from typing import Any

from .agents.summary import SummaryAgent
from .bridge.agents import (
    POST_QUANTUM_ALGORITHMS,
    AgentType,
    SignatureAlgorithm,
    normalize_signature_algorithm,
)
from .bridge.orchestrator import FutureSelfBridge
from .bridge.wrapper import FutureSelfWrapper, MemoryAwareAgent, WrappedAgent
from .memory.manager import MemoryManager
from .runtime.client import SchemaICUClient
from .types.types import BridgeResult

logger = logging.getLogger(__name__)


def _configure_file_logging(log_file: str) -> None:
    """Redirect all SDK logs to a file instead of stdout/stderr."""
    handler = logging.FileHandler(log_file, mode="a")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s"))
    sdk_logger = logging.getLogger("schemaicu")
    sdk_logger.handlers.clear()
    sdk_logger.addHandler(handler)
    sdk_logger.setLevel(logging.INFO)
    sdk_logger.propagate = False


class SchemaICU:
    """Schema.ICU SDK entry point.

    Usage::

        from schemaicu import SchemaICU

        async with SchemaICU(api_key="...") as sdk:
            sdk.use_post_quantum("ml-dsa-65")
            memory = sdk.create_memory_session(owner_name="alice")
            agent = sdk.wrap_agent_with_memory("code-generator")
            result = await agent.execute("Write a CSV parser in Python")
            print(result.response, result.complete)
    """

    def __init__(
        self,
        api_key: str | None = None,
        jwt_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        log_file: str | None = None,
        client: SchemaICUClient | None = None,
    ):
        if log_file:
            _configure_file_logging(log_file)

        self.client = client or SchemaICUClient(
            api_key=api_key,
            jwt_token=jwt_token,
            base_url=base_url,
            timeout=timeout,
        )
        self.config = self.client.config
        self.summary_agent = SummaryAgent(self.client)

        # None means the API default (ECDSA)
        self.signature_algorithm: SignatureAlgorithm | None = None

        self._bridge: FutureSelfBridge | None = None
        self._wrapper: FutureSelfWrapper | None = None
        self._memory: MemoryManager | None = None

    async def __aenter__(self) -> "SchemaICU":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # -- Configuration ---------------------------------------------------------

    def is_authenticated(self) -> bool:
        return self.config.has_credentials()

    def get_config(self) -> dict[str, Any]:
        return {
            "base_url": self.config.base_url,
            "has_api_key": bool(self.config.api_key),
            "has_jwt_token": bool(self.config.jwt_token),
            "email": self.config.email,
        }

    def use_post_quantum(self, algorithm: str = "ml-dsa-87") -> "SchemaICU":
        """Sign responses with ML-DSA ("ml-dsa-65", "ml-dsa-87" or "pq")."""
        normalized = normalize_signature_algorithm(algorithm)
        if normalized not in POST_QUANTUM_ALGORITHMS:
            valid = ", ".join(sorted(a.value for a in POST_QUANTUM_ALGORITHMS))
            raise ValueError(f"Invalid post-quantum algorithm. Use: {valid}")
        self.signature_algorithm = normalized
        return self

    def use_ecdsa(self) -> "SchemaICU":
        """Go back to the API default, ECDSA."""
        self.signature_algorithm = None
        return self

    def set_signature_algorithm(self, algorithm: str | None) -> "SchemaICU":
        self.signature_algorithm = normalize_signature_algorithm(algorithm)
        return self

    def get_signature_algorithm(self) -> str:
        if self.signature_algorithm is None:
            return SignatureAlgorithm.ECDSA.value
        return self.signature_algorithm.value

    # -- Future Self Bridge ----------------------------------------------------

    @property
    def bridge(self) -> FutureSelfBridge:
        if self._bridge is None:
            self._bridge = FutureSelfBridge(self.client)
        return self._bridge

    @property
    def wrapper(self) -> FutureSelfWrapper:
        if self._wrapper is None:
            self._wrapper = FutureSelfWrapper(self.bridge)
        return self._wrapper

    async def execute_future_self(
        self, agent_type: str | AgentType, query: str, **options: Any
    ) -> BridgeResult:
        """Run one agent through the bridge. The SDK-wide signature algorithm wins when set."""
        if self.signature_algorithm is not None:
            options["signature_algorithm"] = self.signature_algorithm
        return await self.bridge.execute(agent_type, query, **options)

    def wrap_agent(self, agent_type: str | AgentType) -> WrappedAgent:
        return self.wrapper.wrap(agent_type)

    def wrap_agent_with_memory(
        self, agent_type: str | AgentType, memory: MemoryManager | None = None
    ) -> MemoryAwareAgent:
        memory = memory or self._memory
        if memory is None:
            raise RuntimeError(
                "No memory session available. Call create_memory_session() first."
            )
        return self.wrapper.wrap_with_memory(agent_type, memory)

    def wrap_all_agents(self) -> dict[str, WrappedAgent]:
        return self.wrapper.wrap_all()

    # -- Memory ----------------------------------------------------------------

    def create_memory_session(self, **options: Any) -> MemoryManager:
        """Create the SDK's memory session.

        Defaults the signature algorithm to the SDK's (or "pq" when unset) and
        the summary agent to ``self.summary_agent``; any MemoryManager keyword
        overrides them.
        """
        memory_options: dict[str, Any] = {
            "signature_algorithm": (
                self.signature_algorithm.value if self.signature_algorithm else "pq"
            ),
            "summary_agent": self.summary_agent,
            **options,
        }
        self._memory = MemoryManager(**memory_options)
        return self._memory

    def get_memory_session(self) -> MemoryManager | None:
        return self._memory
