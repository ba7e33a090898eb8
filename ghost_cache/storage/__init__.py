"""
Ghost Cache - Storage Module

Persistent mirrors for the in-memory cache layer.

- interface.py: Four-operation async contract every adapter implements
- memory.py: Process-local adapter (always available)
- disk.py / redis.py: Durable adapters, loaded lazily by factory.py

Usage:
    from ghost_cache.storage import InMemoryStorageAdapter

    adapter = InMemoryStorageAdapter()
    await adapter.write("key", "value")
"""

from .interface import StorageAdapter
from .memory import InMemoryStorageAdapter

__all__ = [
    "StorageAdapter",
    "InMemoryStorageAdapter",
]
