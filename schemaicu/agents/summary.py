"""Summary agent - compresses conversations into structured summaries.

Used by MemoryManager to fold old interactions. The response carries
``summary``, ``keyPoints`` and ``contextMeta`` (dominant themes, unresolved
threads, tone) along with the usual signature block.
"""

from typing import Any

from ..bridge.agents import SignatureAlgorithm, normalize_signature_algorithm
from ..runtime.client import SchemaICUClient

SUMMARY_AGENT_PATH = "api/summary-agent"


class SummaryAgent:
    def __init__(self, client: SchemaICUClient):
        self.client = client

    async def summarize(
        self,
        query: str,
        signature_algorithm: str | SignatureAlgorithm | None = None,
        **context: Any,
    ) -> dict[str, Any]:
        """Summarize text or a conversation transcript.

        Args:
            query: Text to summarize
            signature_algorithm: Sent at the top level of the request when set
            **context: Extra request context

        Returns:
            The parsed response body
        """
        request_body: dict[str, Any] = {"query": query, "context": context}
        algorithm = normalize_signature_algorithm(signature_algorithm)
        if algorithm is not None:
            request_body["signatureAlgorithm"] = algorithm.value
        return await self.client.post(SUMMARY_AGENT_PATH, request_body)

    async def compress(
        self,
        query: str,
        signature_algorithm: str | SignatureAlgorithm | None = None,
        **context: Any,
    ) -> dict[str, Any]:
        """Alias for summarize."""
        return await self.summarize(query, signature_algorithm=signature_algorithm, **context)
