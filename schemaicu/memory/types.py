"""Types for the rolling signed memory.

Three tiers:
- Active interactions kept verbatim (bounded by max_interactions)
- Summaries of folded interactions (bounded by max_summaries)
- Meta-summaries of folded summaries (a Summary with range.meta_level set)
"""

from __future__ import annotations

import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant", "system"]


class Interaction(BaseModel):
    """One hashed conversational turn. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: Role
    text: str
    ts: int
    """Epoch milliseconds."""
    hash: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    signature_algorithm: str | None = Field(default=None, alias="signatureAlgorithm")


class SummaryRange(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: int
    end: int
    count: int
    meta_level: bool = Field(default=False, alias="metaLevel")


class Summary(BaseModel):
    """Compressed block of interactions (or, at meta level, of summaries)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    range: SummaryRange
    text: str
    ts: int
    hash: str
    signature_algorithm: str | None = Field(default=None, alias="signatureAlgorithm")


class MemoryKey(BaseModel):
    """Storage key: one state document per owner per calendar day."""

    model_config = ConfigDict(frozen=True)

    owner_name: str
    day: datetime.date


class MemoryState(BaseModel):
    """Full persisted memory state."""

    model_config = ConfigDict(populate_by_name=True)

    interactions: list[Interaction] = Field(default_factory=list)
    summaries: list[Summary] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")
    last_updated: str | None = Field(default=None, alias="lastUpdated")
    signature_algorithm: str | None = Field(default=None, alias="signatureAlgorithm")


class RecentInteraction(BaseModel):
    role: Role
    text: str
    ts: int


class ContextSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    range: SummaryRange
    ts: int


class MemoryStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    active_interactions: int = Field(alias="activeInteractions")
    total_summaries: int = Field(alias="totalSummaries")
    total_count: int = Field(alias="totalCount")


class MemoryContext(BaseModel):
    """Read-only memory view injected into agent requests."""

    model_config = ConfigDict(populate_by_name=True)

    total_interactions: int = Field(alias="totalInteractions")
    recent_interactions: list[RecentInteraction] = Field(alias="recentInteractions")
    summaries: list[ContextSummary]
    memory_stats: MemoryStats = Field(alias="memoryStats")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
