"""Opt-in wrappers that bind an agent type to the Future Self Bridge."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ..types.types import BridgeResult
from .agents import AgentType
from .orchestrator import FutureSelfBridge

if TYPE_CHECKING:
    from ..memory.manager import MemoryManager


class WrappedAgent:
    """One agent type routed through the bridge."""

    def __init__(self, bridge: FutureSelfBridge, agent_type: str | AgentType):
        self.bridge = bridge
        self.agent_type = agent_type

    async def execute(self, query: str, **options: Any) -> BridgeResult:
        return await self.bridge.execute(self.agent_type, query, **options)

    async def execute_with_memory(
        self, memory: MemoryManager, query: str, **options: Any
    ) -> BridgeResult:
        return await self.bridge.execute_with_memory(memory, self.agent_type, query, **options)

    async def plan_schema(self, query: str, **options: Any) -> dict[str, Any]:
        """Plan a schema without executing (useful for debugging)."""
        return await self.bridge.plan_schema(self.agent_type, query, **options)


class MemoryAwareAgent:
    """A wrapped agent whose every execution reads from and writes to one memory."""

    def __init__(self, agent: WrappedAgent, memory: MemoryManager):
        self.agent = agent
        self.memory = memory

    async def execute(self, query: str, **options: Any) -> BridgeResult:
        return await self.agent.execute_with_memory(self.memory, query, **options)

    async def plan_schema(self, query: str, **options: Any) -> dict[str, Any]:
        return await self.agent.plan_schema(query, **options)


class FutureSelfWrapper:
    """Builds wrapped agents on top of a shared FutureSelfBridge.

    Usage::

        wrapper = FutureSelfWrapper(bridge)
        result = await wrapper.wrap("code-generator").execute("Parse a CSV file")
    """

    def __init__(self, bridge: FutureSelfBridge):
        self.bridge = bridge

    def wrap(self, agent_type: str | AgentType) -> WrappedAgent:
        return WrappedAgent(self.bridge, agent_type)

    def wrap_with_memory(self, agent_type: str | AgentType, memory: MemoryManager) -> MemoryAwareAgent:
        return MemoryAwareAgent(self.wrap(agent_type), memory)

    def wrap_multiple(self, agent_types: Iterable[str | AgentType]) -> dict[str, WrappedAgent]:
        wrapped = {}
        for agent_type in agent_types:
            key = agent_type.value if isinstance(agent_type, AgentType) else agent_type
            wrapped[key] = self.wrap(agent_type)
        return wrapped

    def wrap_all(self) -> dict[str, WrappedAgent]:
        """Wrap every known agent type, keyed by its name."""
        return self.wrap_multiple(AgentType)
