"""
Ghost Cache - Cache Store

TTL-aware in-memory mapping with an optional persistent mirror.

Features:
- Lazy expiry: expired entries are deleted from the layer they were found in
- FIFO eviction over the memory layer after every insertion
- Persistent layer consulted only as a fallback on memory misses
- Awaited mirror writes for the manual API, fire-and-forget writes for
  implicit response caching

All memory-layer operations are synchronous, so between two awaits the map
is never observed half-updated. Only storage adapter I/O suspends.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from ..storage.interface import StorageAdapter
from .entry import CacheEntry
from .eviction import FIFOEvictionPolicy

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


class CacheStore:
    """
    Two-layer cache store shared by every interception path.

    Args:
        ttl: Entry time-to-live in milliseconds
        max_entries: Memory layer capacity
        adapter: Optional persistent mirror
        clock: Millisecond clock, injectable for tests
    """

    def __init__(
        self,
        ttl: int = 60000,
        max_entries: int = 100,
        adapter: StorageAdapter | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self.ttl = ttl
        self.adapter = adapter
        self._clock = clock or now_ms
        self._eviction = FIFOEvictionPolicy(max_entries)

        # key -> CacheEntry, insertion ordered
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

        # Background mirror writes still in flight
        self._pending: set[asyncio.Task[None]] = set()

        # Stats
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._expirations = 0

    @property
    def max_entries(self) -> int:
        return self._eviction.max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[str]:
        """Memory-layer keys, oldest first."""
        return list(self._entries)

    def configure(self, ttl: int, max_entries: int, adapter: StorageAdapter | None) -> None:
        """Apply new options; shrinking max_entries evicts immediately."""
        self.ttl = ttl
        self.adapter = adapter
        self._eviction.max_entries = max_entries
        self.evict()

    # ------------ Reads ------------

    async def get(self, key: str) -> CacheEntry | None:
        """
        Look up a fresh entry.

        Args:
            key: Cache key

        Returns:
            Fresh CacheEntry, or None on miss or expiry

        Raises:
            StorageError: If the persistent adapter fails while reading
        """
        entry = self._entries.get(key)
        if entry is not None:
            if entry.is_fresh(self.ttl, self._clock()):
                self._hits += 1
                return entry
            del self._entries[key]
            self._expirations += 1
            logger.debug("Expired memory entry removed", extra={"key": key})

        adapter = self.adapter
        if adapter is not None:
            raw = await adapter.read(key)
            if raw is not None:
                try:
                    stored = CacheEntry.loads(raw)
                except ValidationError as e:
                    logger.warning(
                        f"Discarding malformed persisted record: {e.error_count()} validation error(s)",
                        extra={"key": key, "storage": adapter.name, "preview": raw[:100]},
                    )
                    await adapter.remove(key)
                    self._misses += 1
                    return None

                if stored.is_fresh(self.ttl, self._clock()):
                    self._hits += 1
                    return stored
                await adapter.remove(key)
                self._expirations += 1
                logger.debug("Expired persisted record removed", extra={"key": key, "storage": adapter.name})

        self._misses += 1
        return None

    # ------------ Writes ------------

    def put(self, key: str, data: str) -> CacheEntry:
        """Write a freshly timestamped entry into the memory layer only."""
        entry = CacheEntry(timestamp=self._clock(), data=data)
        self._entries[key] = entry
        self._sets += 1
        self.evict()
        return entry

    async def set(self, key: str, data: str) -> CacheEntry:
        """
        Write an entry and wait for the persistent mirror.

        Raises:
            StorageError: If the persistent adapter fails while writing
        """
        entry = self.put(key, data)
        if self.adapter is not None:
            await self.adapter.write(key, entry.dumps())
        return entry

    def set_background(self, key: str, data: str) -> CacheEntry:
        """
        Write an entry and mirror it without waiting.

        Mirror failures are logged and suppressed. Must be called from a
        running event loop when an adapter is configured.
        """
        entry = self.put(key, data)
        if self.adapter is not None:
            task = asyncio.get_running_loop().create_task(self._write_quietly(self.adapter, key, entry))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        return entry

    async def _write_quietly(self, adapter: StorageAdapter, key: str, entry: CacheEntry) -> None:
        try:
            await adapter.write(key, entry.dumps())
        except Exception as e:
            logger.warning(
                f"Suppressed persistent write failure: {e}",
                extra={"key": key, "storage": adapter.name, "error": str(e)},
            )

    async def drain(self) -> None:
        """Wait for all background mirror writes to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # ------------ Removal ------------

    def evict(self) -> list[str]:
        """Apply FIFO eviction to the memory layer."""
        return self._eviction.evict(self._entries)

    async def delete(self, key: str) -> bool:
        """Remove a key from both layers. Returns True if it was in memory."""
        removed = self._entries.pop(key, None) is not None
        if self.adapter is not None:
            await self.adapter.remove(key)
        return removed

    async def clear(self) -> None:
        """Empty the memory layer and the persistent mirror."""
        size = len(self._entries)
        self._entries.clear()
        if self.adapter is not None:
            await self.drain()
            await self.adapter.clear()
        logger.info(
            f"Cleared {size} entries from cache",
            extra={"size": size, "persistent": self.adapter is not None},
        )

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        total_requests = self._hits + self._misses
        hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "size": len(self._entries),
            "max_entries": self.max_entries,
            "ttl": self.ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(hit_rate, 2),
            "sets": self._sets,
            "evictions": self._eviction.evictions,
            "expirations": self._expirations,
            "persistent": self.adapter is not None,
            "storage": self.adapter.name if self.adapter is not None else None,
            "pending_writes": len(self._pending),
        }
