"""Exception hierarchy for tool dispatch and event delivery."""

from collections.abc import Iterable


class ToolError(Exception):
    """A tool invocation failed. Reported to the caller as a failure envelope."""


class MissingFieldError(ToolError):
    """A required tool parameter is absent or empty."""

    def __init__(self, fields: str | Iterable[str], tool: str):
        if isinstance(fields, str):
            fields = [fields]
        self.fields = list(fields)
        self.tool = tool
        names = " and ".join(self.fields)
        verb = "is" if len(self.fields) == 1 else "are"
        super().__init__(f"{names} {verb} required for {tool}")


class InvalidFieldError(ToolError):
    """A tool parameter is present but has an unusable value."""


class NotAFileError(ToolError):
    """A repository path resolved to something other than a file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} is not a file")


class HostError(ToolError):
    """The repository host request failed."""


class RoutingError(Exception):
    """The request could not be routed to a tool. Reported as HTTP 400."""


class UnknownToolError(RoutingError):
    """A tool name was supplied but is not one of the known tools."""

    def __init__(self, tool_name: str, available_tools: list[str]):
        self.tool_name = tool_name
        self.available_tools = available_tools
        super().__init__(f"Unknown tool: {tool_name}")


class UndeterminableToolError(RoutingError):
    """No tool name was supplied and none could be inferred from parameters."""

    def __init__(self, keys: Iterable[str]):
        self.keys = list(keys)
        super().__init__(
            "Could not determine tool_name. Received parameters: "
            + ", ".join(self.keys)
        )


class SubscriberClosedError(Exception):
    """A frame was sent to a subscriber channel that is already closed."""
