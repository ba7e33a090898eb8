"""
Ghost Cache - Disk Storage Adapter

Filesystem adapter built on diskcache. Records survive process restarts,
which makes this the durable counterpart of the in-memory adapter.

Requires: diskcache

Example:
    adapter = DiskStorageAdapter("/tmp/ghost-cache")
    await adapter.write("key", '{"timestamp": 0, "data": "{}"}')
    raw = await adapter.read("key")
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import diskcache

from ..errors import StorageError
from .interface import StorageAdapter

logger = logging.getLogger(__name__)


class DiskStorageAdapter(StorageAdapter):
    """
    diskcache-backed storage adapter.

    Notes:
    - Records live under ``<directory>/records``.
    - diskcache is synchronous; calls run in a worker thread so the event
      loop is never blocked on disk I/O.
    - clear() only empties this adapter's directory.
    """

    name = "disk"

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._cache = diskcache.Cache(str(self._directory / "records"))

    @property
    def directory(self) -> Path:
        return self._directory

    async def _run(self, operation: str, key: str | None, func: Any, *args: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except Exception as e:
            logger.error(
                f"Disk storage {operation} failed: {e}",
                extra={"operation": operation, "key": key, "directory": str(self._directory), "error": str(e)},
                exc_info=True,
            )
            raise StorageError(self.name, operation, key, details={"error": str(e)}) from e

    async def read(self, key: str) -> str | None:
        return await self._run("read", key, self._cache.get, key)

    async def write(self, key: str, value: str) -> None:
        await self._run("write", key, self._cache.set, key, value)

    async def remove(self, key: str) -> None:
        await self._run("remove", key, self._cache.delete, key)

    async def clear(self) -> None:
        count = await self._run("clear", None, self._cache.clear)
        logger.info(f"Cleared {count} records from disk storage at {self._directory}")

    async def close(self) -> None:
        self._cache.close()
        logger.debug(f"Disk storage closed at {self._directory}")
