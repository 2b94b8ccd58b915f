"""Exception hierarchy raised by the Schema.ICU SDK."""

from typing import Any


class SchemaICUError(Exception):
    """Base class for all SDK errors.

    Attributes:
        status_code: HTTP status code when the error came from the API
        response: Parsed error body returned by the API, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: Any | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class AuthenticationError(SchemaICUError):
    """Missing or rejected credentials (HTTP 401)."""

    def __init__(self, message: str = "Authentication required", response: Any | None = None):
        super().__init__(message, 401, response)


class ValidationError(SchemaICUError):
    """The API rejected the request body (HTTP 400)."""

    def __init__(self, message: str = "Validation failed", response: Any | None = None):
        super().__init__(message, 400, response)


class RateLimitError(SchemaICUError):
    """Too many requests (HTTP 429)."""

    def __init__(self, message: str = "Rate limit exceeded", response: Any | None = None):
        super().__init__(message, 429, response)


class APIError(SchemaICUError):
    """Any other failed request: error status, connection failure, timeout, bad body."""

    def __init__(
        self,
        message: str = "API request failed",
        status_code: int | None = 500,
        response: Any | None = None,
    ):
        super().__init__(message, status_code, response)


class ExecutionFailedError(SchemaICUError):
    """An agent execution failed and the orchestration was aborted."""
