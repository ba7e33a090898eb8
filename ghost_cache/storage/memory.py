"""
Ghost Cache - In-Memory Storage Adapter

Process-local adapter backed by a plain dict. Used as the default
persistent mirror when no durable backend is configured.
"""

import logging

from .interface import StorageAdapter

logger = logging.getLogger(__name__)


class InMemoryStorageAdapter(StorageAdapter):
    """Dict-backed storage adapter that lives as long as the process."""

    name = "memory"

    def __init__(self) -> None:
        self._records: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    async def read(self, key: str) -> str | None:
        return self._records.get(key)

    async def write(self, key: str, value: str) -> None:
        self._records[key] = value

    async def remove(self, key: str) -> None:
        self._records.pop(key, None)

    async def clear(self) -> None:
        size = len(self._records)
        self._records.clear()
        logger.debug(f"Cleared {size} records from in-memory storage")
