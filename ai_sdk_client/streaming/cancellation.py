"""Cooperative cancellation token for streaming requests."""

import asyncio


class CancelToken:
    """One-shot cancellation flag checked by streams at read boundaries.

    Cancelling is idempotent. A cancelled stream ends normally; nothing is raised.
    """

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        """Suspend until `cancel()` has been called."""
        await self._event.wait()
