"""Content hashing for memory entries."""

import hashlib
import json
from typing import Any

from .types import Interaction, Summary


def content_hash(data: dict[str, Any]) -> str:
    """SHA-256 hex digest over the canonical JSON encoding of ``data``."""
    canonical = json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8", "surrogatepass")).hexdigest()


def interaction_hash(role: str, text: str, ts: int) -> str:
    return content_hash({"role": role, "text": text, "ts": ts})


def summary_hash(range_: dict[str, Any], text: str, ts: int) -> str:
    return content_hash({"range": range_, "text": text, "ts": ts})


def verify_interaction(interaction: Interaction) -> bool:
    return interaction.hash == interaction_hash(interaction.role, interaction.text, interaction.ts)


def verify_summary(summary: Summary) -> bool:
    expected = summary_hash(summary.range.model_dump(by_alias=True), summary.text, summary.ts)
    return summary.hash == expected
