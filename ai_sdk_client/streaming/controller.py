"""Caller-side wrapper that keeps at most one active stream.

Architectural role:
    Replaces the UI hook that owned the "current request" abort handle. The handle is
    an explicit slot on the controller instead of ambient state.

Slot policy:
    `ask()` cancels the previous occupant before installing its own run, then waits
    for the previous run to finish before touching state or emitting fragments. The
    first sequence therefore always terminates before the second begins.

Observable state:
    - `response`: text accumulated by the current run.
    - `loading`: `True` while a run is consuming its stream.
    - `error`: last fault, `None` after success or cancellation.
"""

import asyncio
import logging
from typing import Callable

from ai_sdk_client.streaming.cancellation import CancelToken
from ai_sdk_client.streaming.client import StreamingRequestClient

logger = logging.getLogger(__name__)


class _Run:
    """One occupant of the in-flight slot."""

    def __init__(self):
        self.token = CancelToken()
        self.done = asyncio.Event()


class AskStreamController:
    """Stateful streaming front for a `StreamingRequestClient`.

    Args:
        client: Client used for every `ask()`.
        on_fragment: Optional callback invoked with each fragment as it arrives.
    """

    def __init__(self, client: StreamingRequestClient, on_fragment: Callable[[str], None] | None = None):
        self.client = client
        self.on_fragment = on_fragment
        self.response = ""
        self.loading = False
        self.error: Exception | None = None
        self._current: _Run | None = None

    @property
    def active(self) -> bool:
        return self._current is not None

    async def ask(self, prompt: str, *, system: str | None = None, **options) -> str:
        """Stream one answer into `response`, superseding any run in flight.

        Returns:
            Text received by this run; partial when cancelled, empty when superseded
            before it started.

        Raises:
            TransportError, httpx.HTTPError: After recording the fault in `error`.
        """
        previous = self._current
        if previous is not None:
            previous.token.cancel()
        run = _Run()
        self._current = run

        text = ""
        try:
            if previous is not None:
                await previous.done.wait()
            if run.token.cancelled:
                return text

            self.loading = True
            self.error = None
            self.response = ""

            try:
                async for fragment in self.client.stream(
                    prompt, system=system, cancel_token=run.token, **options
                ):
                    text += fragment
                    self.response = text
                    if self.on_fragment is not None:
                        self.on_fragment(fragment)
            except Exception as err:
                logger.warning("Streaming request failed: %s", err)
                self.error = err
                raise

            if run.token.cancelled:
                logger.debug("Streaming request cancelled after %d chars", len(text))
            return text
        finally:
            self.loading = False
            if self._current is run:
                self._current = None
            run.done.set()

    def cancel(self) -> None:
        """Cancel the run in flight, if any, and return to idle.

        A read pending on the server is abandoned at once. The slot is released by
        the run itself once its stream has unwound, so a later `ask()` still waits
        for it.
        """
        if self._current is not None:
            self._current.token.cancel()
        self.loading = False

    def reset(self) -> None:
        """Cancel and clear `response` and `error`."""
        self.cancel()
        self.response = ""
        self.error = None
