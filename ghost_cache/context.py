"""
Ghost Cache - Caching Context

GhostCache owns one cache store, one set of options and the interception
state built on top of them. Callers construct and pass it explicitly; the
module-level API in ghost_cache.api is a thin layer over a default instance.

Lifecycle:
- enable(): merge options, (re)configure storage, install the fetch
  interceptor, instrument every registered client
- disable(): restore the captured primitive, detach clients, clear the
  client registry and the cache; manual get/set keep working

Example:
    cache = GhostCache()
    cache.register(client)
    cache.enable(ttl=5000)
    response = await client.get("https://api.example.com/items")
    await cache.disable()
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import Any

import httpx
from pydantic import ValidationError

from . import http as default_http
from .cache.keys import manual_key
from .cache.store import CacheStore
from .config.schemas import GhostCacheOptions
from .errors import ConfigurationError, SerializationError
from .interception.client import ClientInterceptor
from .interception.fetch import FetchCallable, FetchInterceptor, wrap_fetch
from .storage.factory import create_storage_adapter
from .storage.interface import StorageAdapter

logger = logging.getLogger(__name__)

# Options that select the persistent backend
_STORAGE_FIELDS = ("persistent", "storage", "namespace", "redis_url", "disk_path")


@dataclass
class InterceptionState:
    """Interception built by enable() and torn down by disable()."""

    fetch: FetchInterceptor
    clients: ClientInterceptor
    enabled: bool = True


class GhostCache:
    """
    Transparent request cache.

    Args:
        options: Base options (GhostCacheOptions or dict); defaults apply otherwise
        clock: Millisecond clock, injectable for tests
        fetch_target: Object whose attribute holds the fetch primitive to
            intercept (default: the ghost_cache.http module)
        fetch_attribute: Attribute name of the primitive on fetch_target
    """

    def __init__(
        self,
        options: GhostCacheOptions | dict[str, Any] | None = None,
        *,
        clock: Callable[[], int] | None = None,
        fetch_target: ModuleType | object | None = None,
        fetch_attribute: str = "fetch",
    ):
        self._options = self._merge(GhostCacheOptions(), options)
        self._store = CacheStore(
            ttl=self._options.ttl,
            max_entries=self._options.max_entries,
            clock=clock,
        )
        self._registry: list[httpx.AsyncClient] = []
        self._state: InterceptionState | None = None
        self._owned_adapter: StorageAdapter | None = None
        # Owned adapters replaced by a storage change, closed by close()
        self._retired_adapters: list[StorageAdapter] = []
        self._fetch_target = fetch_target if fetch_target is not None else default_http
        self._fetch_attribute = fetch_attribute

    # ------------ Properties ------------

    @property
    def options(self) -> GhostCacheOptions:
        return self._options

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def enabled(self) -> bool:
        return self._state is not None and self._state.enabled

    @property
    def state(self) -> InterceptionState | None:
        return self._state

    @property
    def registered_clients(self) -> list[httpx.AsyncClient]:
        return list(self._registry)

    # ------------ Lifecycle ------------

    @staticmethod
    def _merge(
        base: GhostCacheOptions,
        overrides: GhostCacheOptions | dict[str, Any] | None,
    ) -> GhostCacheOptions:
        try:
            return base.merge(overrides)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid Ghost Cache options",
                details={"validation_errors": e.errors(include_url=False, include_context=False)},
            ) from e

    def enable(self, options: GhostCacheOptions | dict[str, Any] | None = None, **overrides: Any) -> None:
        """
        Install interception, merging options into the current configuration.

        Repeated calls merge again and reconfigure the store; they never
        recapture an already wrapped primitive. A call that raises leaves the
        context as it was.

        Raises:
            ConfigurationError: On invalid options, an unavailable storage backend
                or a missing request primitive
            InterceptionError: If another context already intercepts the primitive
        """
        merged = self._merge(self._options, options)
        if overrides:
            merged = self._merge(merged, overrides)

        state = self._state
        if state is None:
            state = InterceptionState(
                fetch=FetchInterceptor(self._store),
                clients=ClientInterceptor(self._store),
                enabled=False,
            )
        newly_installed = not state.fetch.installed
        state.fetch.install(self._fetch_target, self._fetch_attribute)

        adapter = self._store.adapter
        if adapter is None or self._storage_changed(merged):
            try:
                adapter = create_storage_adapter(merged)
            except ConfigurationError:
                if newly_installed:
                    state.fetch.uninstall()
                raise
            self._replace_owned_adapter(None if isinstance(merged.storage, StorageAdapter) else adapter)

        self._options = merged
        self._store.configure(merged.ttl, merged.max_entries, adapter)
        self._state = state

        attached = sum(1 for client in self._registry if state.clients.attach(client))
        state.enabled = True

        logger.info(
            "Ghost Cache enabled (ttl=%sms, max_entries=%s, persistent=%s)",
            merged.ttl,
            merged.max_entries,
            merged.persistent,
            extra={"ttl": merged.ttl, "max_entries": merged.max_entries, "clients_attached": attached},
        )

    def _replace_owned_adapter(self, adapter: StorageAdapter | None) -> None:
        if self._owned_adapter is not None and self._owned_adapter is not adapter:
            self._retired_adapters.append(self._owned_adapter)
        self._owned_adapter = adapter

    def _storage_changed(self, merged: GhostCacheOptions) -> bool:
        return any(getattr(merged, name) != getattr(self._options, name) for name in _STORAGE_FIELDS)

    async def disable(self) -> None:
        """Restore the original primitive, detach clients and clear all cached data."""
        state = self._state
        if state is not None:
            state.enabled = False
            state.fetch.uninstall()
            detached = state.clients.detach_all()
            self._state = None
            logger.info("Ghost Cache disabled", extra={"clients_detached": detached})

        self._registry.clear()
        await self._store.clear()

    async def close(self) -> None:
        """Release every storage adapter this context created from a preset."""
        await self._store.drain()
        while self._retired_adapters:
            await self._retired_adapters.pop(0).close()
        if self._owned_adapter is not None:
            await self._owned_adapter.close()
            self._owned_adapter = None

    async def __aenter__(self) -> GhostCache:
        self.enable()
        return self

    async def __aexit__(self, *args: object) -> None:
        try:
            await self.disable()
        finally:
            await self.close()

    # ------------ Clients ------------

    def register(self, client: httpx.AsyncClient) -> None:
        """
        Queue an httpx.AsyncClient for instrumentation on the next enable().

        Registering while enabled does not attach hooks until enable() runs again.
        """
        if not isinstance(client, httpx.AsyncClient):
            raise TypeError(f"Expected httpx.AsyncClient, got {type(client).__name__}")
        if any(client is registered for registered in self._registry):
            return

        self._registry.append(client)
        if self.enabled:
            logger.debug("Client registered while enabled; hooks attach on the next enable()")

    # ------------ Cache operations ------------

    def wrap(self, fetch: FetchCallable) -> FetchCallable:
        """Return an opt-in caching wrapper around fetch that uses this context's store."""
        return wrap_fetch(self._store, fetch)

    async def clear(self) -> None:
        """Empty the memory layer and the persistent mirror."""
        await self._store.clear()

    async def set(self, key: str, value: Any) -> None:
        """
        Cache a JSON-serializable value under an application key.

        Raises:
            SerializationError: If value is not JSON-serializable
            StorageError: If the persistent mirror fails
        """
        try:
            data = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Value for key {key!r} is not JSON-serializable: {e}",
                details={"key": key, "value_type": type(value).__name__},
            ) from e

        await self._store.set(manual_key(key), data)

    async def get(self, key: str) -> Any | None:
        """
        Read back a value stored with set().

        Returns:
            The deserialized value, or None when missing or expired

        Raises:
            StorageError: If the persistent mirror fails
        """
        entry = await self._store.get(manual_key(key))
        if entry is None:
            return None
        return json.loads(entry.data)

    async def drain(self) -> None:
        """Wait for background persistent writes to finish."""
        await self._store.drain()

    def stats(self) -> dict[str, Any]:
        """Cache statistics plus interception state."""
        stats = self._store.stats()
        stats.update(
            {
                "enabled": self.enabled,
                "registered_clients": len(self._registry),
                "instrumented_clients": len(self._state.clients) if self._state is not None else 0,
            }
        )
        return stats
