"""Storage backends for memory state.

The memory manager only sees the ``MemoryStorage`` interface. The file
backend writes one JSON document per owner per day; the in-memory backend
is for tests and ephemeral sessions.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod

from .types import MemoryKey, MemoryState

logger = logging.getLogger(__name__)


class MemoryStorage(ABC):
    """Abstract interface for loading and saving memory state."""

    async def prepare(self) -> None:
        """Make the backend ready for use (create directories, connect, ...)."""
        return None

    @abstractmethod
    async def load(self, key: MemoryKey) -> MemoryState | None:
        """Load the state stored under ``key``, or None when there is none."""
        ...

    @abstractmethod
    async def save(self, key: MemoryKey, state: MemoryState) -> None:
        """Store ``state`` under ``key``, replacing any previous state."""
        ...


class FileMemoryStorage(MemoryStorage):
    """Stores each state as ``<owner>-memory-<YYYY-MM-DD>.json`` under ``memory_dir``."""

    def __init__(self, memory_dir: str = "./memory"):
        self.memory_dir = memory_dir

    def path_for(self, key: MemoryKey) -> str:
        file_name = f"{key.owner_name}-memory-{key.day.isoformat()}.json"
        return os.path.join(self.memory_dir, file_name)

    async def prepare(self) -> None:
        os.makedirs(self.memory_dir, exist_ok=True)
        logger.info("Memory directory initialized: %s", self.memory_dir)

    async def load(self, key: MemoryKey) -> MemoryState | None:
        file_path = self.path_for(key)
        if not os.path.exists(file_path):
            logger.info("No existing memory file at %s, starting fresh session", file_path)
            return None

        with open(file_path, encoding="utf-8") as f:
            data = f.read()
        return MemoryState.model_validate_json(data)

    async def save(self, key: MemoryKey, state: MemoryState) -> None:
        """Write the state to a temp file, then swap it in with ``os.replace``.

        The previous file stays intact if serialization or the write fails.
        """
        file_path = self.path_for(key)
        data = state.model_dump_json(by_alias=True, indent=2)
        tmp_path = f"{file_path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_path, file_path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class InMemoryStorage(MemoryStorage):
    """Keeps states in a dict. Saved states are deep-copied in and out."""

    def __init__(self):
        self._states: dict[MemoryKey, MemoryState] = {}

    async def load(self, key: MemoryKey) -> MemoryState | None:
        state = self._states.get(key)
        return state.model_copy(deep=True) if state is not None else None

    async def save(self, key: MemoryKey, state: MemoryState) -> None:
        self._states[key] = state.model_copy(deep=True)

    def keys(self) -> list[MemoryKey]:
        return list(self._states)
