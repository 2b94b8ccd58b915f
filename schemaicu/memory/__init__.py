"""Memory module - rolling signed memory with summary compression."""

from .compaction import (
    INTERACTION_COMPACTION_PROMPT,
    META_SUMMARY_PROMPT,
    build_basic_meta_summary,
    build_basic_summary,
    fold_interactions,
    fold_summaries,
    format_transcript,
)
from .integrity import content_hash, verify_interaction, verify_summary
from .manager import DEFAULT_MAX_INTERACTIONS, DEFAULT_MAX_SUMMARIES, MemoryManager
from .storage import FileMemoryStorage, InMemoryStorage, MemoryStorage
from .types import (
    Interaction,
    MemoryContext,
    MemoryKey,
    MemoryState,
    MemoryStats,
    Summary,
    SummaryRange,
)

__all__ = [
    "DEFAULT_MAX_INTERACTIONS",
    "DEFAULT_MAX_SUMMARIES",
    "FileMemoryStorage",
    "INTERACTION_COMPACTION_PROMPT",
    "InMemoryStorage",
    "Interaction",
    "META_SUMMARY_PROMPT",
    "MemoryContext",
    "MemoryKey",
    "MemoryManager",
    "MemoryState",
    "MemoryStats",
    "MemoryStorage",
    "Summary",
    "SummaryRange",
    "build_basic_meta_summary",
    "build_basic_summary",
    "content_hash",
    "fold_interactions",
    "fold_summaries",
    "format_transcript",
    "verify_interaction",
    "verify_summary",
]
