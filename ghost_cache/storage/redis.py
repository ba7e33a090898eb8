"""
Ghost Cache - Redis Storage Adapter

Asynchronous Redis adapter with:
- Namespace prefixing so several caches can share one database
- Namespace-scoped clear (SCAN + DEL) instead of flushing the database
- StorageError wrapping of every client failure

Requires: redis>=5.0 with asyncio support

Example:
    adapter = RedisStorageAdapter(redis_url="redis://localhost:6379/0", namespace="ghost_cache")
    await adapter.write("key", "value")
    raw = await adapter.read("key")
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import ConfigurationError, StorageError
from .interface import StorageAdapter

logger = logging.getLogger(__name__)

try:
    # redis-py asyncio client (v4+)
    from redis.asyncio import Redis
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Redis async client is required but not installed. "
        "Install with: pip install 'redis>=5.0.0' or add 'redis' to your dependencies."
    ) from e


class RedisStorageAdapter(StorageAdapter):
    """
    Redis storage adapter.

    Either pass an existing ``redis.asyncio.Redis`` client (it stays owned by
    the caller) or a ``redis_url`` to let the adapter create and close its own.
    """

    name = "redis"

    def __init__(
        self,
        client: Redis | None = None,
        redis_url: str | None = None,
        namespace: str = "ghost_cache",
        max_connections: int = 10,
        socket_timeout: int = 5,
    ) -> None:
        if client is None and not redis_url:
            raise ConfigurationError(
                "A Redis client or redis_url must be provided",
                details={"backend": "redis"},
            )

        self.namespace = namespace.strip() or "ghost_cache"
        self._owns_client = client is None

        if client is None:
            # Lazy connection; connects on first command
            client = Redis.from_url(  # type: ignore[call-overload]
                url=redis_url,
                decode_responses=True,
                max_connections=max_connections,
                socket_timeout=socket_timeout,
            )
        self._client = client

    # ------------ Helpers ------------

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        return f"{self.namespace}:{key}"

    @staticmethod
    def _decode(data: str | bytes | None) -> str | None:
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data

    def _failure(self, operation: str, key: str | None, error: Exception) -> StorageError:
        logger.error(
            f"Redis {operation} failed: {error}",
            extra={"operation": operation, "key": key, "namespace": self.namespace, "error": str(error)},
            exc_info=True,
        )
        return StorageError(self.name, operation, key, details={"namespace": self.namespace, "error": str(error)})

    # ------------ Adapter contract ------------

    async def read(self, key: str) -> str | None:
        try:
            data: Any = await self._client.get(self._make_key(key))
        except Exception as e:
            raise self._failure("read", key, e) from e
        return self._decode(data)

    async def write(self, key: str, value: str) -> None:
        try:
            await self._client.set(self._make_key(key), value)
        except Exception as e:
            raise self._failure("write", key, e) from e

    async def remove(self, key: str) -> None:
        try:
            await self._client.delete(self._make_key(key))
        except Exception as e:
            raise self._failure("remove", key, e) from e

    async def clear(self) -> None:
        """
        Clear all records under the namespace.

        Implementation: SCAN match "<namespace>:*" and DEL in batches.
        """
        pattern = f"{self.namespace}:*"
        cursor = 0
        total_deleted = 0
        batch_size = 1000

        try:
            while True:
                cursor, keys = await self._client.scan(cursor=cursor, match=pattern, count=batch_size)
                if keys:
                    total_deleted += await self._client.delete(*keys)
                if cursor == 0:
                    break
        except Exception as e:
            raise self._failure("clear", None, e) from e

        logger.info(f"Cleared {total_deleted} records from Redis namespace '{self.namespace}'")

    async def close(self) -> None:
        """Close the Redis client if this adapter created it."""
        if not self._owns_client:
            return
        try:
            await self._client.aclose()
            logger.info(f"Closed Redis storage adapter for namespace '{self.namespace}'")
        except Exception as e:
            logger.error(
                f"Error closing Redis client: {e}", extra={"namespace": self.namespace, "error": str(e)}, exc_info=True
            )
