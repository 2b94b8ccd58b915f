"""SDK configuration resolved from explicit arguments and SCHEMA_ICU_* environment variables."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_BASE_URL = "https://api.schema.icu"
DEFAULT_TIMEOUT = 60.0


def is_localhost_url(url: str) -> bool:
    """Check if URL is a localhost address."""
    try:
        if url:
            from urllib.parse import urlparse

            parsed = urlparse(url)
            hostname = parsed.hostname or ""
            return hostname in ("localhost", "127.0.0.1", "::1") or hostname.startswith("127.")
        return False
    except Exception:
        return False


class SchemaICUConfig(BaseModel):
    """Resolved client configuration."""

    api_key: str | None = None
    jwt_token: str | None = None
    email: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    local_mode: bool = False

    @classmethod
    def from_env(
        cls,
        api_key: str | None = None,
        jwt_token: str | None = None,
        email: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> "SchemaICUConfig":
        """Build a config, falling back to environment variables for anything not passed.

        Args:
            api_key: API key (default: SCHEMA_ICU_API_KEY)
            jwt_token: JWT bearer token (default: SCHEMA_ICU_JWT_TOKEN)
            email: Account email (default: SCHEMA_ICU_EMAIL)
            base_url: API base URL (default: SCHEMA_ICU_BASE_URL or https://api.schema.icu)
            timeout: Request timeout in seconds (default: SCHEMA_ICU_TIMEOUT or 60)
        """
        env_timeout = os.getenv("SCHEMA_ICU_TIMEOUT")
        return cls(
            api_key=api_key or os.getenv("SCHEMA_ICU_API_KEY"),
            jwt_token=jwt_token or os.getenv("SCHEMA_ICU_JWT_TOKEN"),
            email=email or os.getenv("SCHEMA_ICU_EMAIL"),
            base_url=(base_url or os.getenv("SCHEMA_ICU_BASE_URL") or DEFAULT_BASE_URL).rstrip(
                "/"
            ),
            timeout=timeout or (float(env_timeout) if env_timeout else DEFAULT_TIMEOUT),
            local_mode=os.getenv("SCHEMA_ICU_LOCAL_MODE", "False").lower() == "true",
        )

    def has_credentials(self) -> bool:
        return bool(self.api_key or self.jwt_token)

    def validate_config(self) -> list[str]:
        """Return a list of configuration problems (empty when usable)."""
        errors = []
        if not self.has_credentials() and not (self.local_mode and is_localhost_url(self.base_url)):
            errors.append("API key or JWT token is required")
        if not self.base_url:
            errors.append("Base URL is required")
        return errors
