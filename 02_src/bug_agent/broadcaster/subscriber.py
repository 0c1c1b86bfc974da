"""Subscriber channels that receive broadcast frames."""

import asyncio
from collections.abc import AsyncIterator
from typing import Protocol

from ..errors import SubscriberClosedError


class ISubscriber(Protocol):
    """An open output channel to one connected client."""

    async def send(self, frame: str) -> None:
        """Write one text frame. Raises if the channel can no longer accept it."""
        ...

    def close(self) -> None:
        """Close the channel. Further sends fail."""
        ...


class QueueSubscriber:
    """Queue-backed channel drained by one SSE response."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, frame: str) -> None:
        if self._closed:
            raise SubscriberClosedError("subscriber channel is closed")
        self._queue.put_nowait(frame)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # Sentinel wakes up a reader blocked in frames()
        self._queue.put_nowait(None)

    async def frames(self) -> AsyncIterator[str]:
        """Yield queued frames until the channel is closed."""
        while True:
            frame = await self._queue.get()
            if frame is None:
                return
            yield frame
