"""Rolling signed memory: a bounded window of hashed interactions plus compressed summaries.

Keeps the last ``max_interactions`` turns verbatim. Older turns are folded
into summaries; once there are more than ``max_summaries`` summaries, the
oldest are folded into a meta-summary. State is saved after every write to
the configured storage, keyed by owner and calendar day.

A single MemoryManager must not receive concurrent ``add_interaction``
calls; callers that share one across tasks serialize access themselves.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from typing import Any

from ..bridge.agents import normalize_signature_algorithm
from .compaction import Summarizer, fold_count, fold_interactions, fold_summaries, now_ms
from .integrity import interaction_hash, verify_interaction, verify_summary
from .storage import FileMemoryStorage, MemoryStorage
from .types import (
    ContextSummary,
    Interaction,
    MemoryContext,
    MemoryKey,
    MemoryState,
    MemoryStats,
    RecentInteraction,
    Summary,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_INTERACTIONS = 21
DEFAULT_MAX_SUMMARIES = 3
RECENT_CONTEXT_SIZE = 10


def _today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


class MemoryManager:
    """Bounded, hashed ledger of interactions with summary compression.

    Usage::

        memory = MemoryManager(owner_name="alice", summary_agent=sdk.summary_agent)
        await memory.add_interaction("user", "Write a CSV parser")
        context = memory.build_context()

    Args:
        max_interactions: Active interactions kept verbatim (>= 1)
        max_summaries: Summaries kept before folding into a meta-summary (>= 1)
        owner_name: Owner used in the storage key
        signature_algorithm: Signature algorithm recorded on entries and
            requested from the summary agent
        summary_agent: Optional summarizer used for compression
        storage: Storage backend; defaults to ``FileMemoryStorage(memory_dir)``
            when ``persist`` is true
        persist: Whether to persist state at all
        memory_dir: Directory for the default file storage
    """

    def __init__(
        self,
        max_interactions: int = DEFAULT_MAX_INTERACTIONS,
        max_summaries: int = DEFAULT_MAX_SUMMARIES,
        owner_name: str = "default",
        signature_algorithm: str | None = "pq",
        summary_agent: Summarizer | None = None,
        storage: MemoryStorage | None = None,
        persist: bool = True,
        memory_dir: str = "./memory",
    ):
        if max_interactions < 1:
            raise ValueError(f"max_interactions must be at least 1, got {max_interactions}")
        if max_summaries < 1:
            raise ValueError(f"max_summaries must be at least 1, got {max_summaries}")

        algorithm = normalize_signature_algorithm(signature_algorithm)

        self.max_interactions = max_interactions
        self.max_summaries = max_summaries
        self.owner_name = owner_name
        self.signature_algorithm = algorithm.value if algorithm else None
        self.summary_agent = summary_agent
        self.memory_dir = memory_dir

        if storage is None and persist:
            storage = FileMemoryStorage(memory_dir)
        self.storage = storage
        self.persist = storage is not None

        self._interactions: list[Interaction] = []
        self._summaries: list[Summary] = []
        self._total_count = 0
        self._initialized = False

    # -- Lifecycle -------------------------------------------------------------

    @property
    def storage_key(self) -> MemoryKey:
        return MemoryKey(owner_name=self.owner_name, day=_today())

    async def initialize(self) -> None:
        """Load today's state for this owner. Runs once; later calls are no-ops."""
        if self._initialized:
            return
        self._initialized = True
        if not self.persist:
            return

        key = self.storage_key
        try:
            await self.storage.prepare()
            state = await self.storage.load(key)
        except Exception as err:
            logger.error(
                "Failed to load memory for %s on %s, disabling persistence: %s",
                key.owner_name,
                key.day,
                err,
            )
            self.persist = False
            return

        if state is not None:
            self._interactions = list(state.interactions)
            self._summaries = list(state.summaries)
            self._total_count = state.total_count
            logger.info(
                "Memory loaded: %d interactions, %d summaries, totalCount: %d",
                len(self._interactions),
                len(self._summaries),
                self._total_count,
            )
            await self._compress_if_needed()

    async def __aenter__(self) -> MemoryManager:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    # -- Writes ----------------------------------------------------------------

    def _create_interaction(
        self,
        role: str,
        text: str,
        ts: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Interaction:
        ts = now_ms() if ts is None else ts
        return Interaction(
            role=role,
            text=text,
            ts=ts,
            hash=interaction_hash(role, text, ts),
            metadata=dict(metadata or {}),
            signature_algorithm=self.signature_algorithm,
        )

    async def add_interaction(
        self,
        role: str,
        text: str,
        ts: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Interaction:
        """Record one turn, compress if the window overflows, then save.

        Args:
            role: "user", "assistant" or "system"
            text: Turn text
            ts: Epoch milliseconds (default: now)
            metadata: Free-form metadata stored with the turn

        Returns:
            The hashed Interaction that was recorded
        """
        await self.initialize()
        interaction = self._create_interaction(role, text, ts, metadata)

        self._interactions.append(interaction)
        self._total_count += 1
        logger.debug(
            "Added %s interaction (%d/%d)",
            role,
            len(self._interactions),
            self.max_interactions,
        )

        await self._compress_if_needed()
        await self._save()
        return interaction

    async def add_interactions(self, interactions: Iterable[dict[str, Any]]) -> list[Interaction]:
        """Record several turns at once, compressing and saving a single time.

        Each item takes the keyword arguments of ``add_interaction``. All items
        are validated before any of them is recorded.
        """
        await self.initialize()
        created = [self._create_interaction(**item) for item in interactions]
        if not created:
            return []

        self._interactions.extend(created)
        self._total_count += len(created)

        await self._compress_if_needed()
        await self._save()
        return created

    async def clear_memory(self) -> None:
        """Drop every interaction and summary and reset the total count."""
        await self.initialize()
        self._interactions = []
        self._summaries = []
        self._total_count = 0
        await self._save()
        logger.info("Memory cleared for %s", self.owner_name)

    # -- Compression -----------------------------------------------------------

    async def _compress_if_needed(self) -> None:
        count = fold_count(len(self._interactions), self.max_interactions)
        if count:
            await self._compress_old_interactions(count)

        summary_count = fold_count(len(self._summaries), self.max_summaries)
        if summary_count:
            await self._compress_old_summaries(summary_count)

    async def _compress_old_interactions(self, count: int) -> None:
        logger.info(
            "Compressing old interactions (%d > %d)",
            len(self._interactions),
            self.max_interactions,
        )
        to_compress = self._interactions[:count]
        summary = await fold_interactions(
            to_compress, self.summary_agent, self.signature_algorithm
        )
        self._summaries.append(summary)
        self._interactions = self._interactions[count:]
        logger.info("Compressed %d interactions into summary", count)

    async def _compress_old_summaries(self, count: int) -> None:
        logger.info(
            "Compressing old summaries (%d > %d)", len(self._summaries), self.max_summaries
        )
        to_compress = self._summaries[:count]
        meta_summary = await fold_summaries(
            to_compress, self.summary_agent, self.signature_algorithm
        )
        self._summaries = [meta_summary, *self._summaries[count:]]
        logger.info("Compressed %d summaries into meta-summary", count)

    # -- Persistence -----------------------------------------------------------

    def to_state(self) -> MemoryState:
        return MemoryState(
            interactions=list(self._interactions),
            summaries=list(self._summaries),
            total_count=self._total_count,
            last_updated=datetime.datetime.now(datetime.timezone.utc).isoformat(),
            signature_algorithm=self.signature_algorithm,
        )

    async def _save(self) -> None:
        if not self.persist:
            return
        key = self.storage_key
        try:
            await self.storage.save(key, self.to_state())
        except Exception as err:
            logger.error(
                "Failed to save memory for %s on %s, disabling persistence: %s",
                key.owner_name,
                key.day,
                err,
            )
            self.persist = False
            return
        logger.debug(
            "Memory saved: %d interactions, %d summaries",
            len(self._interactions),
            len(self._summaries),
        )

    # -- Reads -----------------------------------------------------------------

    @property
    def interactions(self) -> tuple[Interaction, ...]:
        return tuple(self._interactions)

    @property
    def summaries(self) -> tuple[Summary, ...]:
        return tuple(self._summaries)

    @property
    def total_count(self) -> int:
        return self._total_count

    def build_context(self) -> MemoryContext:
        """Build the memory view sent along with agent requests. No side effects."""
        recent = self._interactions[-RECENT_CONTEXT_SIZE:]
        return MemoryContext(
            total_interactions=self._total_count,
            recent_interactions=[
                RecentInteraction(role=i.role, text=i.text, ts=i.ts) for i in recent
            ],
            summaries=[
                ContextSummary(text=s.text, range=s.range, ts=s.ts) for s in self._summaries
            ],
            memory_stats=MemoryStats(
                active_interactions=len(self._interactions),
                total_summaries=len(self._summaries),
                total_count=self._total_count,
            ),
        )

    def get_recent_interactions(self, count: int = RECENT_CONTEXT_SIZE) -> list[Interaction]:
        if count <= 0:
            return []
        return self._interactions[-count:]

    def get_summaries(self) -> list[Summary]:
        return list(self._summaries)

    def get_stats(self) -> dict[str, Any]:
        return {
            "active_interactions": len(self._interactions),
            "max_interactions": self.max_interactions,
            "total_summaries": len(self._summaries),
            "max_summaries": self.max_summaries,
            "total_count": self._total_count,
            "signature_algorithm": self.signature_algorithm,
            "persist": self.persist,
            "memory_dir": self.memory_dir,
        }

    def verify_integrity(self) -> bool:
        """Recompute every entry hash; False if any interaction or summary was altered."""
        return all(verify_interaction(i) for i in self._interactions) and all(
            verify_summary(s) for s in self._summaries
        )
