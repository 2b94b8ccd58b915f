"""Agents used directly by the SDK."""

from .summary import SummaryAgent

__all__ = ["SummaryAgent"]
