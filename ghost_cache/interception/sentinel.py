"""
Ghost Cache - Short-Circuit Signal

httpx request hooks cannot return a response; raising is their only way to
stop a request before it reaches the transport. CachedResponseSignal is the
dedicated exception type used on that channel. The client interceptor raises
it from its request hook and turns it back into a response around send().
"""

import httpx


class CachedResponseSignal(Exception):
    """Raised by a request hook to serve a cached body instead of the network."""

    def __init__(self, key: str, data: str, request: httpx.Request):
        super().__init__(f"Serving cached response for {request.method} {request.url}")
        self.key = key
        self.data = data
        self.request = request

    def to_response(self) -> httpx.Response:
        """Synthesize the success envelope: status 200, no headers, cached body."""
        return httpx.Response(
            status_code=200,
            content=self.data.encode("utf-8"),
            request=self.request,
            extensions={"ghost_cache": "hit"},
        )
