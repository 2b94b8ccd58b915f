"""Unit tests for schemaicu.runtime.client module."""

import json

import httpx
import pytest

from schemaicu.runtime.client import SchemaICUClient
from schemaicu.utils.config import SchemaICUConfig
from schemaicu.utils.errors import (
    APIError,
    AuthenticationError,
    RateLimitError,
    ValidationError,
)


def make_client(handler, **config):
    config.setdefault("api_key", "sk-test")
    config.setdefault("base_url", "https://api.test")
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SchemaICUClient(config=SchemaICUConfig(**config), http_client=http_client)


def respond(status_code, payload=None, text=None):
    def handler(request):
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=payload)

    return handler


class TestHeaders:
    """Tests for request headers and authentication."""

    @pytest.mark.asyncio
    async def test_sends_json_body_and_credentials(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["method"] = request.method
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "ok"})

        client = make_client(handler, jwt_token="jwt-test")

        data = await client.post("/code/generate", {"query": "q", "context": {}})

        assert data == {"response": "ok"}
        assert seen["url"] == "https://api.test/code/generate"
        assert seen["method"] == "POST"
        assert seen["headers"]["X-API-Key"] == "sk-test"
        assert seen["headers"]["Authorization"] == "Bearer jwt-test"
        assert seen["headers"]["Content-Type"] == "application/json"
        assert seen["body"] == {"query": "q", "context": {}}

    @pytest.mark.asyncio
    async def test_missing_credentials_raise_before_sending(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={})

        client = make_client(handler, api_key=None)

        with pytest.raises(AuthenticationError):
            await client.post("terminal", {"query": "q"})
        assert calls == []

    @pytest.mark.asyncio
    async def test_local_mode_on_localhost_skips_credentials(self):
        client = make_client(
            respond(200, {"response": "ok"}),
            api_key=None,
            base_url="http://localhost:3000",
            local_mode=True,
        )

        assert await client.post("terminal", {"query": "q"}) == {"response": "ok"}

    @pytest.mark.asyncio
    async def test_unauthenticated_request(self):
        client = make_client(respond(200, {"status": "ok"}), api_key=None)
        assert await client.get("health", use_auth=False) == {"status": "ok"}

    def test_local_mode_with_remote_url_warns(self, caplog):
        with caplog.at_level("WARNING", logger="schemaicu.runtime.client"):
            SchemaICUClient(config=SchemaICUConfig(api_key="sk", local_mode=True))
        assert "not localhost" in caplog.text


class TestErrorMapping:
    """Tests for mapping HTTP failures onto SDK errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,error_cls",
        [(401, AuthenticationError), (400, ValidationError), (429, RateLimitError)],
    )
    async def test_known_statuses(self, status, error_cls):
        client = make_client(respond(status, {"message": "nope"}))

        with pytest.raises(error_cls) as exc_info:
            await client.post("terminal", {"query": "q"})

        assert exc_info.value.message == "nope"
        assert exc_info.value.status_code == status
        assert exc_info.value.response == {"message": "nope"}

    @pytest.mark.asyncio
    async def test_other_status_is_api_error(self):
        client = make_client(respond(503, {"error": "maintenance"}))

        with pytest.raises(APIError) as exc_info:
            await client.post("terminal", {"query": "q"})

        assert str(exc_info.value) == "maintenance"
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        client = make_client(respond(502, text="Bad Gateway"))

        with pytest.raises(APIError, match="Bad Gateway") as exc_info:
            await client.post("terminal", {"query": "q"})

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(APIError, match="Request timeout") as exc_info:
            await client.post("terminal", {"query": "q"})

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(APIError, match="Request failed: connection refused"):
            await client.post("terminal", {"query": "q"})

    @pytest.mark.asyncio
    async def test_invalid_json_success_body(self):
        client = make_client(respond(200, text="<html>"))

        with pytest.raises(APIError, match="Invalid JSON response"):
            await client.post("terminal", {"query": "q"})

    @pytest.mark.asyncio
    async def test_non_object_success_body(self):
        client = make_client(respond(200, ["not", "an", "object"]))

        with pytest.raises(APIError, match="Expected a JSON object"):
            await client.post("terminal", {"query": "q"})


class TestLifecycle:
    """Tests for client ownership and closing."""

    @pytest.mark.asyncio
    async def test_does_not_close_injected_client(self):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(respond(200, {})))
        client = SchemaICUClient(config=SchemaICUConfig(api_key="sk"), http_client=http_client)

        await client.aclose()

        assert http_client.is_closed is False
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_closes_own_client(self):
        async with SchemaICUClient(config=SchemaICUConfig(api_key="sk")) as client:
            own = client._get_client()
        assert own.is_closed is True
