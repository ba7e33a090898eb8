"""
Ghost Cache - Cache Module

TTL-bounded key/value store shared by the interception layers and the manual API.

- keys.py: Canonical key derivation from (url, method, params)
- entry.py: Timestamped record and its persisted encoding
- eviction.py: Size-bounded FIFO eviction
- store.py: Memory layer plus optional persistent mirror

Usage:
    from ghost_cache.cache import CacheStore, RequestDescriptor, build_cache_key

    store = CacheStore(ttl=5000, max_entries=10)
    key = build_cache_key(RequestDescriptor.from_call("https://api.example.com/items"))
    await store.set(key, '{"items": []}')
    entry = await store.get(key)
"""

from .entry import CacheEntry
from .eviction import FIFOEvictionPolicy
from .keys import RequestDescriptor, build_cache_key, manual_key
from .store import CacheStore, now_ms

__all__ = [
    "CacheEntry",
    "CacheStore",
    "FIFOEvictionPolicy",
    "RequestDescriptor",
    "build_cache_key",
    "manual_key",
    "now_ms",
]
