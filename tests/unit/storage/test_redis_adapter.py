"""
Ghost Cache - Redis Storage Adapter Tests

Tests the adapter contract, namespace isolation and error wrapping.
Requires Redis server running on localhost:6379 (or TEST_REDIS_URL env var).
"""

import os
from collections.abc import AsyncGenerator

import pytest

from ghost_cache.errors import ConfigurationError, StorageError
from ghost_cache.storage.redis import RedisStorageAdapter

# Check if Redis is available
try:
    import socket

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(1)
    redis_available = sock.connect_ex(("localhost", 6379)) == 0
    sock.close()
except Exception:
    redis_available = False


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


def test_requires_client_or_url() -> None:
    with pytest.raises(ConfigurationError):
        RedisStorageAdapter()


async def test_failures_are_wrapped() -> None:
    """Connection failures surface as StorageError naming the operation."""
    adapter = RedisStorageAdapter(redis_url="redis://127.0.0.1:1/0", socket_timeout=1)
    try:
        with pytest.raises(StorageError) as exc_info:
            await adapter.read("key1")
        assert exc_info.value.backend == "redis"
        assert exc_info.value.operation == "read"
    finally:
        await adapter.close()


@pytest.mark.skipif(not redis_available, reason="Redis server not available")
class TestRedisStorageAdapter:
    """Test suite for RedisStorageAdapter."""

    @pytest.fixture
    async def adapter(self, test_redis_url: str) -> AsyncGenerator[RedisStorageAdapter, None]:
        adapter = RedisStorageAdapter(redis_url=test_redis_url, namespace="test")
        await adapter.clear()
        yield adapter
        await adapter.clear()
        await adapter.close()

    async def test_write_and_read(self, adapter: RedisStorageAdapter) -> None:
        await adapter.write("key1", "value1")
        assert await adapter.read("key1") == "value1"

    async def test_read_missing(self, adapter: RedisStorageAdapter) -> None:
        assert await adapter.read("missing") is None

    async def test_remove(self, adapter: RedisStorageAdapter) -> None:
        await adapter.write("key1", "value1")
        await adapter.remove("key1")
        assert await adapter.read("key1") is None

    async def test_clear_only_touches_namespace(self, adapter: RedisStorageAdapter, test_redis_url: str) -> None:
        other = RedisStorageAdapter(redis_url=test_redis_url, namespace="other")
        try:
            await other.write("key1", "kept")
            await adapter.write("key1", "dropped")

            await adapter.clear()

            assert await adapter.read("key1") is None
            assert await other.read("key1") == "kept"
        finally:
            await other.clear()
            await other.close()
