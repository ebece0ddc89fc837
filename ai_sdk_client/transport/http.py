"""HTTP transport boundary.

Architectural role:
    The single request function consumed by `streaming.client` and `mcp.client`.
    Accepts method, URL, headers and a JSON-serializable body, and yields a streamed
    `httpx.Response` exposing status, headers and either a materialized body
    (`aread()`/`json()`) or a sequential chunk source (`aiter_bytes()`).

Request flow:
    `open(...)` -> header merge (bearer token + caller headers) -> `client.send(stream=True)`
    -> caller consumes the response -> response closed on context exit.

Retry behavior:
    No retry loop is implemented. Each request is attempted once.

Timeouts:
    Delegated to `httpx` using `ClientConfig.timeout_seconds`.

Failure handling model:
    `httpx.RequestError` and friends propagate to the caller unchanged. Status
    handling is the caller's concern.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from ai_sdk_client.transport.config import ClientConfig

logger = logging.getLogger(__name__)


class HttpTransport:
    """Shared `httpx.AsyncClient` wrapper with pass-through bearer credentials.

    Args:
        config: Endpoint and credential configuration.
        client: Optional preconfigured client (tests inject `MockTransport`-backed
            clients here). When omitted, a client is created lazily and owned by
            this transport.
    """

    def __init__(self, config: ClientConfig | None = None, client: httpx.AsyncClient | None = None):
        self.config = config or ClientConfig()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout_seconds)
        return self._client

    @asynccontextmanager
    async def open(
        self,
        method: str,
        url: str,
        *,
        headers: dict | None = None,
        json_body=None,
    ) -> AsyncIterator[httpx.Response]:
        """Issue one request and yield the streamed response.

        Args:
            method: HTTP method.
            url: Absolute endpoint URL.
            headers: Extra request headers; they override the credential header.
            json_body: Optional JSON body.

        Yields:
            Response whose body has not been read yet.

        Side effects:
            The response is closed on every exit path of the `async with` block.
        """
        merged = {**self.config.auth_headers(), **(headers or {})}
        request = self.client.build_request(method, url, headers=merged, json=json_body)
        logger.debug("%s %s", method, url)
        response = await self.client.send(request, stream=True)
        try:
            yield response
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        """Close the underlying client when this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


async def check_health(transport: HttpTransport, base_url: str | None = None) -> bool:
    """Check `<base_url>/_health`.

    Returns:
        `True` on a 2xx status, `False` on any other status or connection failure.
    """
    url = f"{(base_url or transport.config.strapi_url).rstrip('/')}/_health"
    try:
        async with transport.open("GET", url) as response:
            return response.is_success
    except httpx.RequestError as err:
        logger.warning("Health check failed for %s: %s", url, err)
        return False
