"""
Ghost Cache - Transparent Request Caching

Serves repeated HTTP requests from a TTL-bounded cache by intercepting a
fetch-like primitive and the event hooks of httpx.AsyncClient instances.
"""

__version__ = "1.0.0"

from .api import clear, disable, enable, get_cache, get_context, register, reset_context, set_cache
from .config import GhostCacheOptions, StoragePreset
from .context import GhostCache
from .errors import (
    CacheError,
    ConfigurationError,
    GhostCacheError,
    InterceptionError,
    SerializationError,
    StorageError,
)
from .storage import InMemoryStorageAdapter, StorageAdapter

__all__ = [
    # Module-level API
    "enable",
    "disable",
    "clear",
    "set_cache",
    "get_cache",
    "register",
    "get_context",
    "reset_context",
    # Context and options
    "GhostCache",
    "GhostCacheOptions",
    "StoragePreset",
    # Storage
    "StorageAdapter",
    "InMemoryStorageAdapter",
    # Errors
    "GhostCacheError",
    "ConfigurationError",
    "InterceptionError",
    "CacheError",
    "StorageError",
    "SerializationError",
]
