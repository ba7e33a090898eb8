"""
Ghost Cache - Interceptor Base

Shared lookup logic for the interception layers.
"""

import logging

from ..cache.entry import CacheEntry
from ..cache.store import CacheStore
from ..errors import StorageError

logger = logging.getLogger(__name__)


class Interceptor:
    """Base class for interceptors routing requests through a CacheStore."""

    def __init__(self, store: CacheStore):
        self._store = store

    @property
    def store(self) -> CacheStore:
        return self._store

    async def _lookup(self, key: str) -> CacheEntry | None:
        """
        Look up a fresh entry, treating storage failures as misses.

        A failing persistent backend must not fail a request that the
        network can still answer.
        """
        try:
            entry = await self._store.get(key)
        except StorageError as e:
            logger.warning(
                f"Cache lookup failed, falling back to network: {e}",
                extra={"key": key, **e.details},
            )
            return None

        if entry is None:
            logger.debug("Cache miss", extra={"key": key})
        else:
            logger.debug("Cache hit", extra={"key": key, "timestamp": entry.timestamp})
        return entry
