"""
Ghost Cache - FIFO Eviction

Size-bounded eviction over the in-memory layer.

Entries leave in insertion order. Reads never refresh an entry's position
and rewriting an existing key keeps its original slot, so the oldest
inserted key is always the next one out.
"""

import logging
from collections import OrderedDict
from typing import Any

logger = logging.getLogger(__name__)


class FIFOEvictionPolicy:
    """Evicts the oldest inserted keys once a mapping exceeds max_entries."""

    def __init__(self, max_entries: int = 100):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.evictions = 0

    def evict(self, entries: "OrderedDict[str, Any]") -> list[str]:
        """
        Remove keys from the front of entries until it fits.

        Args:
            entries: Insertion-ordered mapping, modified in place

        Returns:
            Evicted keys, oldest first
        """
        evicted: list[str] = []
        while len(entries) > self.max_entries:
            key, _ = entries.popitem(last=False)
            evicted.append(key)

        if evicted:
            self.evictions += len(evicted)
            logger.debug(
                f"Evicted {len(evicted)} entries from memory cache",
                extra={"evicted": len(evicted), "max_entries": self.max_entries},
            )
        return evicted
