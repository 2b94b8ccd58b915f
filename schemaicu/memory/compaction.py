"""Folding of old interactions into summaries and of old summaries into meta-summaries.

Compression goes through the summary agent when one is configured; any
failure there falls back to a summary built locally from the folded entries.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any, Protocol

from .integrity import summary_hash
from .types import Interaction, Summary, SummaryRange

logger = logging.getLogger(__name__)

# -- Constants ----------------------------------------------------------------

INTERACTION_COMPACTION_PROMPT = (
    "Compress this conversation into a concise summary:\n\n{transcript}"
)

META_SUMMARY_PROMPT = (
    "Create a comprehensive meta-summary of these summaries:\n\n{summaries}"
)

TOPIC_SNIPPET_CHARS = 50
META_SUMMARY_SEPARATOR = " | "


class Summarizer(Protocol):
    async def summarize(self, query: str, **context: Any) -> dict[str, Any]: ...


# -- Helpers ------------------------------------------------------------------


def now_ms() -> int:
    return int(time.time() * 1000)


def fold_count(length: int, limit: int) -> int:
    """How many of the oldest entries to fold so that ``length`` drops below ``limit``."""
    if length <= limit:
        return 0
    return length - limit + 1


def format_transcript(interactions: Sequence[Interaction]) -> str:
    """Format interactions as ``role: text`` blocks for the compaction prompt."""
    return "\n\n".join(f"{i.role}: {i.text}" for i in interactions)


def build_basic_summary(interactions: Sequence[Interaction]) -> str:
    """Local fallback summary: turn counts plus a short snippet of each user message."""
    user_messages = [i for i in interactions if i.role == "user"]
    assistant_messages = [i for i in interactions if i.role == "assistant"]
    topics = ", ".join(m.text[:TOPIC_SNIPPET_CHARS] for m in user_messages)
    return (
        f"Summary of {len(interactions)} interactions: "
        f"{len(user_messages)} user queries, "
        f"{len(assistant_messages)} assistant responses. "
        f"Topics discussed: [{topics}...]"
    )


def build_basic_meta_summary(summaries: Sequence[Summary]) -> str:
    return META_SUMMARY_SEPARATOR.join(s.text for s in summaries)


async def summarize_or_fallback(
    summary_agent: Summarizer | None,
    prompt: str,
    fallback: str,
    signature_algorithm: str | None = None,
    label: str = "compression",
) -> str:
    """Ask the summary agent to compress ``prompt``; return ``fallback`` if it cannot."""
    if summary_agent is None:
        return fallback

    try:
        result = await summary_agent.summarize(prompt, signature_algorithm=signature_algorithm)
        text = result.get("summary") or result.get("response")
        if not isinstance(text, str) or not text.strip():
            raise ValueError("summary agent returned an empty summary")
        return text
    except Exception as err:
        logger.warning("Summary agent %s failed, using basic summary: %s", label, err)
        return fallback


# -- Folding ------------------------------------------------------------------


async def fold_interactions(
    interactions: Sequence[Interaction],
    summary_agent: Summarizer | None = None,
    signature_algorithm: str | None = None,
) -> Summary:
    """Compress a contiguous block of interactions into one Summary."""
    if not interactions:
        raise ValueError("Cannot fold an empty block of interactions")

    prompt = INTERACTION_COMPACTION_PROMPT.replace(
        "{transcript}", format_transcript(interactions)
    )
    text = await summarize_or_fallback(
        summary_agent,
        prompt,
        build_basic_summary(interactions),
        signature_algorithm,
        label="compression",
    )
    summary_range = SummaryRange(
        start=interactions[0].ts,
        end=interactions[-1].ts,
        count=len(interactions),
    )
    return _make_summary(summary_range, text, signature_algorithm)


async def fold_summaries(
    summaries: Sequence[Summary],
    summary_agent: Summarizer | None = None,
    signature_algorithm: str | None = None,
) -> Summary:
    """Compress a contiguous block of summaries into one meta-summary."""
    if not summaries:
        raise ValueError("Cannot fold an empty block of summaries")

    prompt = META_SUMMARY_PROMPT.replace(
        "{summaries}", "\n\n".join(s.text for s in summaries)
    )
    text = await summarize_or_fallback(
        summary_agent,
        prompt,
        build_basic_meta_summary(summaries),
        signature_algorithm,
        label="meta-summary compression",
    )
    summary_range = SummaryRange(
        start=summaries[0].range.start,
        end=summaries[-1].range.end,
        count=sum(s.range.count for s in summaries),
        meta_level=True,
    )
    return _make_summary(summary_range, text, signature_algorithm)


def _make_summary(summary_range: SummaryRange, text: str, signature_algorithm: str | None) -> Summary:
    ts = now_ms()
    return Summary(
        range=summary_range,
        text=text,
        ts=ts,
        hash=summary_hash(summary_range.model_dump(by_alias=True), text, ts),
        signature_algorithm=signature_algorithm,
    )
