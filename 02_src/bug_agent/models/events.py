"""Status event models broadcast to UI subscribers."""

import json
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """Known status event types."""

    INFO = "info"
    INVESTIGATING = "investigating"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    ERROR = "error"
    CONNECTED = "connected"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class StatusEvent:
    """A progress message describing what the voice agent is doing."""

    status: str
    type: str = EventType.INFO.value
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: str | None = None

    def stamped(self) -> "StatusEvent":
        """Return this event with a timestamp, filling it in if absent."""
        if self.timestamp:
            return self
        return replace(self, timestamp=utc_now_iso())

    def to_dict(self) -> dict[str, Any]:
        event_type = self.type.value if isinstance(self.type, EventType) else self.type
        return {
            "status": self.status,
            "type": event_type,
            "metadata": self.metadata,
            "timestamp": self.timestamp,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)
