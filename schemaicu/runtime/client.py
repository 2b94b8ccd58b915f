import logging
from typing import Any

import httpx

from ..utils.config import SchemaICUConfig, is_localhost_url
from ..utils.errors import (
    APIError,
    AuthenticationError,
    RateLimitError,
    SchemaICUError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class SchemaICUClient:
    """Async JSON transport for the Schema.ICU API.

    Every agent call is a POST of ``{"query": ..., "context": {...}}`` to a
    path under ``base_url``. Error statuses are mapped onto the SDK's error
    hierarchy; no retries are performed here.

    Usage::

        async with SchemaICUClient(api_key="sk-...") as client:
            data = await client.post("code/generate", {"query": "...", "context": {}})
    """

    def __init__(
        self,
        api_key: str | None = None,
        jwt_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        config: SchemaICUConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config or SchemaICUConfig.from_env(
            api_key=api_key,
            jwt_token=jwt_token,
            base_url=base_url,
            timeout=timeout,
        )
        if self.config.local_mode and not is_localhost_url(self.config.base_url):
            logger.warning(
                "SCHEMA_ICU_LOCAL_MODE=True ignored because base_url (%s) is not localhost. "
                "Falling back to normal authentication.",
                self.config.base_url,
            )
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout))
        return self._http_client

    def _get_headers(self, use_auth: bool = True) -> dict[str, str]:
        """Get headers for API requests.

        Credentials are required for authenticated calls unless
        SCHEMA_ICU_LOCAL_MODE=True and the base URL is localhost.
        """
        headers = {"Content-Type": "application/json"}
        if not use_auth:
            return headers

        if self.config.api_key:
            headers["X-API-Key"] = self.config.api_key
        if self.config.jwt_token:
            headers["Authorization"] = f"Bearer {self.config.jwt_token}"

        local_mode = self.config.local_mode and is_localhost_url(self.config.base_url)
        if not self.config.has_credentials() and not local_mode:
            raise AuthenticationError(
                "API key or JWT token is required. Pass api_key=... or set the "
                "SCHEMA_ICU_API_KEY environment variable."
            )
        return headers

    def url_for(self, path: str) -> str:
        return f"{self.config.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        use_auth: bool = True,
    ) -> dict[str, Any]:
        """Send a request and return the parsed JSON body.

        Raises:
            AuthenticationError: 401, or no credentials configured
            ValidationError: 400
            RateLimitError: 429
            APIError: any other error status, connection failure, timeout
                or a body that is not a JSON object
        """
        headers = self._get_headers(use_auth)
        url = self.url_for(path)
        client = self._get_client()

        try:
            response = await client.request(method, url, json=body, headers=headers)
        except httpx.TimeoutException as e:
            raise APIError("Request timeout", status_code=None) from e
        except httpx.HTTPError as e:
            raise APIError(f"Request failed: {e}", status_code=None) from e

        if response.status_code >= 400:
            _raise_for_status(response)

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON response from {path}", response.status_code, response.text
            ) from e
        if not isinstance(data, dict):
            raise APIError(
                f"Expected a JSON object from {path}, got {type(data).__name__}",
                response.status_code,
                data,
            )
        return data

    async def post(
        self, path: str, body: dict[str, Any], use_auth: bool = True
    ) -> dict[str, Any]:
        return await self.request("POST", path, body, use_auth)

    async def get(self, path: str, use_auth: bool = True) -> dict[str, Any]:
        return await self.request("GET", path, None, use_auth)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "SchemaICUClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def _raise_for_status(response: httpx.Response) -> None:
    try:
        body = response.json()
    except ValueError:
        raise APIError(response.text or "Request failed", response.status_code) from None

    message = "Request failed"
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or message

    status = response.status_code
    error: SchemaICUError
    if status == 401:
        error = AuthenticationError(message, body)
    elif status == 400:
        error = ValidationError(message, body)
    elif status == 429:
        error = RateLimitError(message, body)
    else:
        error = APIError(message, status, body)
    raise error
