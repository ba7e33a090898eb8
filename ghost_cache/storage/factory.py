"""
Ghost Cache - Storage Adapter Factory

Resolves the ``storage`` option into a concrete StorageAdapter.

Key points:
- Non-persistent options resolve to no adapter at all (memory layer only)
- An injected StorageAdapter instance is used as-is
- Presets: memory (default), disk (diskcache directory), redis (needs redis_url)
- Optional backends are imported lazily so their packages are only needed when selected
"""

from __future__ import annotations

import logging

from ..config.schemas import GhostCacheOptions, StoragePreset
from ..errors import ConfigurationError
from .interface import StorageAdapter
from .memory import InMemoryStorageAdapter

logger = logging.getLogger(__name__)


def _create_disk_adapter(options: GhostCacheOptions) -> StorageAdapter:
    """Internal helper to construct a disk adapter with lazy import."""
    try:
        from .disk import DiskStorageAdapter
    except ImportError as e:
        logger.error(
            "Disk storage selected but diskcache is not installed",
            extra={"package": "diskcache", "error": str(e)},
        )
        raise ConfigurationError(
            "Disk storage selected but diskcache is unavailable. Install with: pip install diskcache",
            details={"package": "diskcache", "error": str(e), "storage": "disk"},
        ) from e

    return DiskStorageAdapter(options.disk_path)


def _create_redis_adapter(options: GhostCacheOptions) -> StorageAdapter:
    """Internal helper to construct a redis adapter with lazy import."""
    if not options.redis_url:
        raise ConfigurationError(
            "redis_url must be set when storage is 'redis'",
            details={"env": "REDIS_URL", "storage": "redis"},
        )

    try:
        from .redis import RedisStorageAdapter
    except ImportError as e:
        logger.error(
            "Redis storage selected but redis client is not installed",
            extra={"package": "redis>=5.0.0", "error": str(e)},
        )
        raise ConfigurationError(
            "Redis storage selected but redis client is unavailable. "
            "Install with: pip install 'redis>=5.0.0' or add to dependencies.",
            details={"package": "redis>=5.0.0", "error": str(e), "storage": "redis"},
        ) from e

    return RedisStorageAdapter(redis_url=options.redis_url, namespace=options.namespace)


def create_storage_adapter(options: GhostCacheOptions) -> StorageAdapter | None:
    """
    Create the persistent storage adapter selected by options.

    Args:
        options: Validated cache options

    Returns:
        StorageAdapter when options.persistent is set, None otherwise

    Raises:
        ConfigurationError: If the preset is unknown or its backend is unavailable
    """
    if not options.persistent:
        return None

    storage = options.storage
    if isinstance(storage, StorageAdapter):
        logger.debug("Using injected storage adapter: %s", type(storage).__name__)
        return storage

    if storage == StoragePreset.MEMORY:
        adapter: StorageAdapter = InMemoryStorageAdapter()
    elif storage == StoragePreset.DISK:
        adapter = _create_disk_adapter(options)
    elif storage == StoragePreset.REDIS:
        adapter = _create_redis_adapter(options)
    else:
        raise ConfigurationError(
            f"Unknown storage preset: {storage}",
            details={"storage": str(storage), "supported": [p.value for p in StoragePreset]},
        )

    logger.info(
        "Created '%s' storage adapter",
        adapter.name,
        extra={"storage": adapter.name, "namespace": options.namespace},
    )
    return adapter
