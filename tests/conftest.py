"""
Ghost Cache - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

from collections.abc import Callable, Generator
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from ghost_cache.errors import StorageError
from ghost_cache.storage import InMemoryStorageAdapter

START_MS = 1_700_000_000_000


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = START_MS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FailingStorageAdapter(InMemoryStorageAdapter):
    """In-memory adapter whose reads and/or writes raise StorageError."""

    name = "failing"

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False):
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def read(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError(self.name, "read", key)
        return await super().read(key)

    async def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError(self.name, "write", key)
        await super().write(key, value)


class CountingFetch:
    """Fetch-like primitive answering from a handler and counting network calls."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.calls: list[httpx.Request] = []

    async def __call__(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        request = httpx.Request(kwargs.get("method", "GET"), url, params=kwargs.get("params"))
        self.calls.append(request)
        response = self.handler(request)
        response.request = request
        return response


def json_handler(body: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Build a handler returning the same JSON body for every request."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)

    return handler


@pytest.fixture
def clock() -> FakeClock:
    """Millisecond clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def counting_fetch() -> CountingFetch:
    """Primitive returning {"name": "ditto"} for every call."""
    return CountingFetch(json_handler({"name": "ditto"}))


@pytest.fixture
def fetch_target(counting_fetch: CountingFetch) -> SimpleNamespace:
    """Object holding the primitive the fetch interceptor installs over."""
    return SimpleNamespace(fetch=counting_fetch)


@pytest.fixture
def network_calls() -> list[httpx.Request]:
    """Requests that reached the mock transport."""
    return []


@pytest.fixture
def mock_transport(network_calls: list[httpx.Request]) -> httpx.MockTransport:
    """Transport echoing the request path and query back as JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        network_calls.append(request)
        return httpx.Response(
            200,
            json={"path": request.url.path, "query": dict(request.url.params), "call": len(network_calls)},
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample data for cache testing."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_default_context(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset the default context and loaded options after each test to prevent state leakage."""
    monkeypatch.setattr("ghost_cache.config.loader._options_instance", None)
    yield
    from ghost_cache.api import reset_context

    reset_context()


@pytest.fixture
def temp_cache_dir(tmp_path: Any) -> str:
    """Create a temporary directory for disk storage testing."""
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    return str(cache_dir)


@pytest.fixture
def failing_adapter() -> type[FailingStorageAdapter]:
    """Adapter class whose reads and/or writes raise StorageError."""
    return FailingStorageAdapter


@pytest.fixture
def make_fetch() -> Callable[..., CountingFetch]:
    """Factory for counting fetch primitives: make_fetch(body, status_code=200)."""

    def factory(body: Any, status_code: int = 200) -> CountingFetch:
        return CountingFetch(json_handler(body, status_code))

    return factory
