"""Streaming request client for the AI SDK text endpoints.

Architectural role:
    Owns one in-flight HTTP request per `stream()` call, drives `LineDecoder` and the
    event extractor, and hands text fragments to the caller as soon as they arrive.

Request flow:
    `stream(prompt, ...)` -> POST `<api_base>/ask-stream` -> status check
    -> chunk loop (`aiter_bytes`) -> `LineDecoder.feed` -> `extract_fragments` -> yield.
    `ask(prompt, ...)` -> POST `<api_base>/ask` -> `data.text`.

Cancellation:
    A `CancelToken` is checked before the request and before every yield. Each chunk
    read is raced against the token, so a read pending on a stalled server is
    abandoned as soon as the token fires. A cancelled stream finishes like a normal one.

Failure handling model:
    - Non-2xx status -> `TransportError`, raised before any fragment.
    - Malformed `/ask` body -> `ProtocolError`.
    - Transport exceptions mid-stream propagate after the fragments already yielded.
    - Malformed event lines are filtered out and never raised.
"""

import asyncio
import logging
from typing import AsyncIterator

from ai_sdk_client.errors import ProtocolError, TransportError
from ai_sdk_client.streaming.cancellation import CancelToken
from ai_sdk_client.streaming.decoder import LineDecoder
from ai_sdk_client.streaming.events import extract_fragments
from ai_sdk_client.transport.http import HttpTransport

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def build_prompt_body(prompt: str, system: str | None = None, **options) -> dict:
    """Build the JSON body shared by `/ask` and `/ask-stream`."""
    body = {"prompt": prompt, **options}
    if system is not None:
        body["system"] = system
    return body


async def _next_chunk(chunks) -> bytes | None:
    """Read one chunk; `None` at end of stream."""
    try:
        return await chunks.__anext__()
    except StopAsyncIteration:
        return None


async def _read_chunk(chunks, cancel_waiter: asyncio.Future | None) -> bytes | None:
    """Read one chunk, giving up when `cancel_waiter` completes first.

    Returns:
        The chunk, or `None` at end of stream or on cancellation.
    """
    if cancel_waiter is None:
        return await _next_chunk(chunks)

    read = asyncio.ensure_future(_next_chunk(chunks))
    try:
        await asyncio.wait({read, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        if not read.done():
            read.cancel()
            await asyncio.wait({read})

    if read.cancelled():
        return None
    return read.result()


class StreamingRequestClient:
    """Client for the plugin's `/ask` and `/ask-stream` routes.

    Args:
        transport: Shared HTTP transport.
        base_url: Plugin base URL; defaults to `transport.config.api_base_url`.
    """

    def __init__(self, transport: HttpTransport, base_url: str | None = None):
        self.transport = transport
        self.base_url = (base_url or transport.config.api_base_url).rstrip("/")

    async def ask(self, prompt: str, *, system: str | None = None, **options) -> str | None:
        """Request a complete answer in one JSON document.

        Returns:
            `data.text` from the response body, or `None` when absent.

        Raises:
            TransportError: On a non-2xx status.
            ProtocolError: When the body is not a JSON object or `data` is not one.
        """
        url = f"{self.base_url}/ask"
        body = build_prompt_body(prompt, system, **options)

        async with self.transport.open("POST", url, headers=JSON_HEADERS, json_body=body) as response:
            await response.aread()
            if not response.is_success:
                raise TransportError(response.status_code, response.text)
            try:
                document = response.json()
            except ValueError as err:
                raise ProtocolError(f"Malformed JSON response from {url}: {err}") from err

        if not isinstance(document, dict):
            raise ProtocolError(f"Expected a JSON object from {url}")
        data = document.get("data")
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ProtocolError(f"Expected `data` to be an object in response from {url}")
        return data.get("text")

    async def stream(
        self,
        prompt: str,
        *,
        system: str | None = None,
        cancel_token: CancelToken | None = None,
        **options,
    ) -> AsyncIterator[str]:
        """Stream text fragments for one prompt.

        Args:
            prompt: User prompt; emptiness is not checked here.
            system: Optional system directive forwarded to the backend.
            cancel_token: Optional token ending the stream early without error.
            **options: Extra JSON body fields forwarded unchanged.

        Yields:
            Fragments in arrival order.

        Raises:
            TransportError: On a non-2xx status, before any fragment.
        """
        if cancel_token is not None and cancel_token.cancelled:
            return

        url = f"{self.base_url}/ask-stream"
        body = build_prompt_body(prompt, system, **options)

        async with self.transport.open("POST", url, headers=JSON_HEADERS, json_body=body) as response:
            if not response.is_success:
                raise TransportError(response.status_code)

            decoder = LineDecoder()
            chunks = response.aiter_bytes()
            cancel_waiter = None
            if cancel_token is not None:
                cancel_waiter = asyncio.ensure_future(cancel_token.wait())
            try:
                while True:
                    if cancel_token is not None and cancel_token.cancelled:
                        break
                    chunk = await _read_chunk(chunks, cancel_waiter)
                    if chunk is None:
                        break

                    for fragment in extract_fragments(decoder.feed(chunk)):
                        if cancel_token is not None and cancel_token.cancelled:
                            return
                        yield fragment
            finally:
                if cancel_waiter is not None:
                    cancel_waiter.cancel()
                await chunks.aclose()

            if cancel_token is not None and cancel_token.cancelled:
                logger.debug("Stream cancelled: %s", url)
                return

            trailing = decoder.flush()
            if trailing:
                logger.debug("Discarding incomplete trailing line (%d chars)", len(trailing))
