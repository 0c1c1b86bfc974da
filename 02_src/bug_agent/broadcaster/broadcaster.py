"""Broadcaster: fan-out of status events to live subscriber channels."""

import asyncio
from typing import Protocol

from ..config import DEFAULT_HEARTBEAT_INTERVAL
from ..logging_config import get_logger
from ..models import StatusEvent
from .subscriber import ISubscriber

logger = get_logger(__name__)


HEARTBEAT_FRAME = ": heartbeat\n\n"


def format_event(event: StatusEvent) -> str:
    """Serialize an event as one SSE data frame."""
    return f"data: {event.to_json()}\n\n"


class IBroadcaster(Protocol):
    """Process-wide pub/sub of status events."""

    def subscribe(self, subscriber: ISubscriber) -> None:
        """Add a subscriber. Adding the same subscriber twice is a no-op."""
        ...

    def unsubscribe(self, subscriber: ISubscriber) -> None:
        """Remove a subscriber if present."""
        ...

    async def broadcast(self, event: StatusEvent) -> int:
        """Deliver the event to every subscriber. Returns delivered count."""
        ...


class Broadcaster:
    """In-memory fan-out hub with a keepalive heartbeat."""

    def __init__(self, heartbeat_interval: float = DEFAULT_HEARTBEAT_INTERVAL):
        self._heartbeat_interval = heartbeat_interval
        # dict as an insertion-ordered set
        self._subscribers: dict[ISubscriber, None] = {}
        self._heartbeat_task: asyncio.Task | None = None

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __contains__(self, subscriber: object) -> bool:
        return subscriber in self._subscribers

    def subscribe(self, subscriber: ISubscriber) -> None:
        """Add a subscriber. Adding the same subscriber twice is a no-op."""
        self._subscribers[subscriber] = None
        logger.info(
            "Subscriber connected. Total subscribers: %s",
            len(self._subscribers),
            extra={"context": {"subscribers": len(self._subscribers)}},
        )

    def unsubscribe(self, subscriber: ISubscriber) -> None:
        """Remove a subscriber if present."""
        if self._subscribers.pop(subscriber, False) is False:
            return
        logger.info(
            "Subscriber disconnected. Total subscribers: %s",
            len(self._subscribers),
            extra={"context": {"subscribers": len(self._subscribers)}},
        )

    async def broadcast(self, event: StatusEvent) -> int:
        """Deliver the event to every subscriber. Returns delivered count."""
        event = event.stamped()
        logger.info(
            "Broadcasting %r (%s) to %s subscribers",
            event.status,
            event.to_dict()["type"],
            len(self._subscribers),
        )
        return await self._send_all(format_event(event), "broadcast")

    async def heartbeat(self) -> int:
        """Send a keepalive comment frame to every subscriber."""
        return await self._send_all(HEARTBEAT_FRAME, "heartbeat")

    async def _send_all(self, frame: str, kind: str) -> int:
        # Snapshot: subscribers may come and go while sends are suspended
        subscribers = list(self._subscribers)
        if not subscribers:
            return 0

        results = await asyncio.gather(
            *[subscriber.send(frame) for subscriber in subscribers],
            return_exceptions=True,
        )

        delivered = 0
        for subscriber, result in zip(subscribers, results):
            if isinstance(result, BaseException):
                logger.error("Error writing %s to subscriber: %s", kind, result)
                self.unsubscribe(subscriber)
            else:
                delivered += 1
        return delivered

    async def start(self) -> None:
        """Start the heartbeat loop."""
        if self._heartbeat_task is not None:
            return
        self._heartbeat_task = asyncio.create_task(self._heartbeat_loop())
        logger.info("Broadcaster started (heartbeat every %ss)", self._heartbeat_interval)

    async def stop(self) -> None:
        """Stop the heartbeat loop and close every subscriber."""
        if self._heartbeat_task:
            self._heartbeat_task.cancel()
            try:
                await self._heartbeat_task
            except asyncio.CancelledError:
                pass
            self._heartbeat_task = None

        for subscriber in list(self._subscribers):
            subscriber.close()
            self.unsubscribe(subscriber)
        logger.info("Broadcaster stopped")

    async def _heartbeat_loop(self) -> None:
        while True:
            await asyncio.sleep(self._heartbeat_interval)
            try:
                await self.heartbeat()
            except Exception as e:
                logger.error("Heartbeat error: %s", e, exc_info=True)
