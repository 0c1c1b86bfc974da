"""Broadcaster module."""

from .broadcaster import HEARTBEAT_FRAME, Broadcaster, IBroadcaster, format_event
from .subscriber import ISubscriber, QueueSubscriber

__all__ = [
    "Broadcaster",
    "IBroadcaster",
    "ISubscriber",
    "QueueSubscriber",
    "HEARTBEAT_FRAME",
    "format_event",
]
