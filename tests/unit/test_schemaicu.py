"""Unit tests for the SchemaICU entry point."""

import logging
from unittest.mock import AsyncMock, patch

import pytest

from schemaicu import SchemaICU
from schemaicu.bridge.agents import SignatureAlgorithm
from schemaicu.bridge.wrapper import MemoryAwareAgent, WrappedAgent
from schemaicu.memory.storage import InMemoryStorage
from schemaicu.runtime.client import SchemaICUClient
from schemaicu.utils.config import SchemaICUConfig


@pytest.fixture
def sdk():
    client = SchemaICUClient(
        config=SchemaICUConfig(api_key="sk-test", email="dev@example.com")
    )
    return SchemaICU(client=client)


class TestConfiguration:
    """Tests for configuration accessors."""

    def test_is_authenticated(self, sdk):
        assert sdk.is_authenticated() is True

    def test_get_config_hides_secrets(self, sdk):
        assert sdk.get_config() == {
            "base_url": "https://api.schema.icu",
            "has_api_key": True,
            "has_jwt_token": False,
            "email": "dev@example.com",
        }

    def test_log_file_attaches_handler(self, tmp_dir):
        log_file = f"{tmp_dir}/sdk.log"
        sdk_logger = logging.getLogger("schemaicu")
        previous = list(sdk_logger.handlers)
        previous_level = sdk_logger.level
        previous_propagate = sdk_logger.propagate
        try:
            SchemaICU(client=SchemaICUClient(config=SchemaICUConfig(api_key="sk")), log_file=log_file)
            (handler,) = sdk_logger.handlers
            assert isinstance(handler, logging.FileHandler)
            assert handler.baseFilename.endswith("sdk.log")
            assert sdk_logger.propagate is False
        finally:
            for handler in sdk_logger.handlers:
                handler.close()
            sdk_logger.handlers[:] = previous
            sdk_logger.setLevel(previous_level)
            sdk_logger.propagate = previous_propagate


class TestSignatureAlgorithm:
    """Tests for SDK-wide signature algorithm selection."""

    def test_defaults_to_ecdsa(self, sdk):
        assert sdk.signature_algorithm is None
        assert sdk.get_signature_algorithm() == "ecdsa"

    def test_use_post_quantum(self, sdk):
        assert sdk.use_post_quantum() is sdk
        assert sdk.get_signature_algorithm() == "ml-dsa-87"
        sdk.use_post_quantum("ML-DSA-65")
        assert sdk.signature_algorithm is SignatureAlgorithm.ML_DSA_65

    def test_use_post_quantum_rejects_ecdsa(self, sdk):
        with pytest.raises(ValueError, match="post-quantum"):
            sdk.use_post_quantum("ecdsa")

    def test_use_ecdsa_resets(self, sdk):
        sdk.use_post_quantum("pq").use_ecdsa()
        assert sdk.signature_algorithm is None

    def test_set_signature_algorithm_validates(self, sdk):
        with pytest.raises(ValueError):
            sdk.set_signature_algorithm("rsa")


class TestFutureSelf:
    """Tests for bridge access through the SDK."""

    def test_bridge_is_shared(self, sdk):
        assert sdk.bridge is sdk.bridge
        assert sdk.bridge.client is sdk.client
        assert sdk.wrapper.bridge is sdk.bridge

    @pytest.mark.asyncio
    async def test_sdk_algorithm_overrides_call_option(self, sdk):
        sdk.use_post_quantum("ml-dsa-65")
        with patch.object(sdk.bridge, "execute", AsyncMock(return_value="result")) as execute:
            result = await sdk.execute_future_self("email", "q", signature_algorithm="ecdsa")

        assert result == "result"
        execute.assert_awaited_once_with(
            "email", "q", signature_algorithm=SignatureAlgorithm.ML_DSA_65
        )

    @pytest.mark.asyncio
    async def test_call_option_used_when_sdk_unset(self, sdk):
        with patch.object(sdk.bridge, "execute", AsyncMock(return_value="result")) as execute:
            await sdk.execute_future_self("email", "q", signature_algorithm="pq", max_retries=1)

        execute.assert_awaited_once_with("email", "q", signature_algorithm="pq", max_retries=1)

    def test_wrap_agent(self, sdk):
        agent = sdk.wrap_agent("terminal")
        assert isinstance(agent, WrappedAgent)
        assert agent.bridge is sdk.bridge

    def test_wrap_all_agents(self, sdk):
        assert len(sdk.wrap_all_agents()) == 12

    def test_wrap_with_memory_requires_session(self, sdk):
        with pytest.raises(RuntimeError, match="create_memory_session"):
            sdk.wrap_agent_with_memory("terminal")


class TestMemorySession:
    """Tests for memory sessions created through the SDK."""

    def test_defaults_to_pq_and_summary_agent(self, sdk):
        memory = sdk.create_memory_session(storage=InMemoryStorage())
        assert memory.signature_algorithm == "pq"
        assert memory.summary_agent is sdk.summary_agent
        assert sdk.get_memory_session() is memory

    def test_follows_sdk_algorithm(self, sdk):
        sdk.use_post_quantum("ml-dsa-65")
        memory = sdk.create_memory_session(persist=False)
        assert memory.signature_algorithm == "ml-dsa-65"

    def test_options_override_defaults(self, sdk):
        memory = sdk.create_memory_session(
            persist=False, owner_name="alice", max_interactions=5, summary_agent=None
        )
        assert memory.owner_name == "alice"
        assert memory.max_interactions == 5
        assert memory.summary_agent is None

    def test_wrap_with_memory_uses_session(self, sdk):
        memory = sdk.create_memory_session(persist=False)
        agent = sdk.wrap_agent_with_memory("code-generator")
        assert isinstance(agent, MemoryAwareAgent)
        assert agent.memory is memory
