"""
Ghost Cache - HTTP Client Interceptor

Instruments httpx.AsyncClient instances through their event hooks.

Per client:
- request hook: fresh hit raises CachedResponseSignal, miss passes through
- response hook: a genuine 2xx response body is stored under the same key
- send() wrapper: turns CachedResponseSignal into a synthesized 200 response,
  every other exception propagates unchanged

All instrumented clients share one CacheStore and one key space with the
fetch interceptor. Each client gets its own hook registrations, which
detach() removes again.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..cache.keys import RequestDescriptor, build_cache_key
from ..cache.store import CacheStore
from .base import Interceptor
from .sentinel import CachedResponseSignal

logger = logging.getLogger(__name__)


@dataclass
class _Instrumentation:
    client: httpx.AsyncClient
    send: Any


class ClientInterceptor(Interceptor):
    """Attaches caching hooks to httpx.AsyncClient instances."""

    def __init__(self, store: CacheStore):
        super().__init__(store)
        self._clients: dict[int, _Instrumentation] = {}

    def __len__(self) -> int:
        return len(self._clients)

    def is_attached(self, client: httpx.AsyncClient) -> bool:
        return id(client) in self._clients

    # ------------ Hooks ------------

    async def on_request(self, request: httpx.Request) -> None:
        key = build_cache_key(RequestDescriptor.from_request(request))
        entry = await self._lookup(key)
        if entry is not None:
            raise CachedResponseSignal(key, entry.data, request)

    async def on_response(self, response: httpx.Response) -> None:
        if not response.is_success:
            return
        key = build_cache_key(RequestDescriptor.from_request(response.request))
        # Hooks run before the body is loaded
        await response.aread()
        self._store.set_background(key, response.text)

    # ------------ Lifecycle ------------

    def attach(self, client: httpx.AsyncClient) -> bool:
        """
        Instrument client. Returns False if it was already instrumented.
        """
        if self.is_attached(client):
            return False

        client.event_hooks["request"].append(self.on_request)
        client.event_hooks["response"].append(self.on_response)

        original_send = client.send

        @functools.wraps(original_send)
        async def send(request: httpx.Request, **kwargs: Any) -> httpx.Response:
            try:
                return await original_send(request, **kwargs)
            except CachedResponseSignal as signal:
                return signal.to_response()

        # Instance attribute shadows AsyncClient.send for get/post/request/stream
        client.send = send  # type: ignore[method-assign]
        self._clients[id(client)] = _Instrumentation(client=client, send=send)
        logger.debug("Attached cache hooks to client", extra={"client_id": id(client)})
        return True

    def detach(self, client: httpx.AsyncClient) -> bool:
        """Remove hooks and the send() wrapper. Returns False if not instrumented."""
        instrumentation = self._clients.pop(id(client), None)
        if instrumentation is None:
            return False

        hooks = client.event_hooks
        if self.on_request in hooks["request"]:
            hooks["request"].remove(self.on_request)
        if self.on_response in hooks["response"]:
            hooks["response"].remove(self.on_response)
        if vars(client).get("send") is instrumentation.send:
            del client.send

        logger.debug("Detached cache hooks from client", extra={"client_id": id(client)})
        return True

    def detach_all(self) -> int:
        """Detach every instrumented client. Returns how many were detached."""
        clients = [item.client for item in self._clients.values()]
        for client in clients:
            self.detach(client)
        return len(clients)
