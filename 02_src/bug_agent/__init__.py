"""Voice bug agent backend: tool webhook relay and live status broadcast."""

from .app import Application, IApplication
from .broadcaster import Broadcaster, IBroadcaster, ISubscriber, QueueSubscriber
from .config import Settings
from .dispatcher import IToolDispatcher, ToolDispatcher
from .errors import (
    HostError,
    InvalidFieldError,
    MissingFieldError,
    NotAFileError,
    RoutingError,
    SubscriberClosedError,
    ToolError,
    UndeterminableToolError,
    UnknownToolError,
)
from .github import GitHubClient, IRepositoryHost
from .models import EventType, StatusEvent, ToolName, ToolResult

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "EventType",
    "StatusEvent",
    "ToolName",
    "ToolResult",
    # Components
    "IBroadcaster",
    "Broadcaster",
    "ISubscriber",
    "QueueSubscriber",
    "IToolDispatcher",
    "ToolDispatcher",
    "IRepositoryHost",
    "GitHubClient",
    # Errors
    "ToolError",
    "MissingFieldError",
    "InvalidFieldError",
    "NotAFileError",
    "HostError",
    "RoutingError",
    "UnknownToolError",
    "UndeterminableToolError",
    "SubscriberClosedError",
]
