"""Shared pytest configuration and fixtures."""

import tempfile
from unittest.mock import AsyncMock

import pytest

from schemaicu.memory.storage import InMemoryStorage


@pytest.fixture
def mock_transport():
    """Transport whose post() is an AsyncMock; route responses with side_effect."""
    transport = AsyncMock()
    transport.post = AsyncMock()
    return transport


@pytest.fixture
def memory_storage():
    return InMemoryStorage()


@pytest.fixture
def tmp_dir():
    """Create and clean up a temporary directory."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def mock_summary_agent():
    """Summary agent that answers every compression request with a fixed summary."""
    agent = AsyncMock()
    agent.summarize = AsyncMock(return_value={"summary": "compressed summary"})
    return agent
