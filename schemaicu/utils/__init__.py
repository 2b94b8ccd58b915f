"""Utility functions for the Schema.ICU SDK."""

from .config import SchemaICUConfig, is_localhost_url
from .errors import (
    APIError,
    AuthenticationError,
    ExecutionFailedError,
    RateLimitError,
    SchemaICUError,
    ValidationError,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "ExecutionFailedError",
    "RateLimitError",
    "SchemaICUConfig",
    "SchemaICUError",
    "ValidationError",
    "is_localhost_url",
]
