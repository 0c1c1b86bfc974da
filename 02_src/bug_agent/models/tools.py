"""Tool invocation models: tool names, typed requests and the result envelope."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import InvalidFieldError, MissingFieldError


class ToolName(str, Enum):
    """The fixed set of tools exposed to the voice agent."""

    LOG_CONVERSATION = "log_conversation"
    GET_REPO_TREE = "get_repo_tree"
    READ_FILE_CONTENT = "read_file_content"
    CREATE_GITHUB_ISSUE = "create_github_issue"

    @classmethod
    def names(cls) -> list[str]:
        return [tool.value for tool in cls]


def _optional_int(params: dict[str, Any], key: str, tool: ToolName) -> int | None:
    """Read an optional positive integer parameter."""
    value = params.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidFieldError(f"{key} must be an integer for {tool.value}")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidFieldError(f"{key} must be an integer for {tool.value}")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidFieldError(f"{key} must be an integer for {tool.value}") from e
    if number < 1:
        raise InvalidFieldError(f"{key} must be >= 1 for {tool.value}")
    return number


@dataclass
class LogConversationRequest:
    """Broadcast a status line to the UI."""

    status: str
    type: str = "info"
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> "LogConversationRequest":
        tool = ToolName.LOG_CONVERSATION
        status = params.get("status")
        if not status:
            raise MissingFieldError("status", tool.value)

        event_type = params.get("type")
        metadata = params.get("metadata")
        if metadata is None:
            metadata = {}
        if not isinstance(metadata, dict):
            raise InvalidFieldError(f"metadata must be an object for {tool.value}")

        return cls(
            status=str(status),
            type="info" if event_type is None else str(event_type),
            metadata=metadata,
        )


@dataclass
class GetRepoTreeRequest:
    """List the whole repository tree. `path` is accepted but not used."""

    path: str | None = None

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> "GetRepoTreeRequest":
        path = params.get("path")
        return cls(path=None if path is None else str(path))


@dataclass
class ReadFileContentRequest:
    """Read one file, optionally restricted to a 1-indexed inclusive line range."""

    file_path: str
    start_line: int | None = None
    end_line: int | None = None

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> "ReadFileContentRequest":
        tool = ToolName.READ_FILE_CONTENT
        file_path = params.get("file_path")
        if not file_path:
            raise MissingFieldError("file_path", tool.value)

        start_line = _optional_int(params, "start_line", tool)
        end_line = _optional_int(params, "end_line", tool)
        if start_line is not None and end_line is not None and end_line < start_line:
            raise InvalidFieldError(
                f"end_line must be >= start_line for {tool.value}"
            )

        return cls(file_path=str(file_path), start_line=start_line, end_line=end_line)

    @property
    def line_range(self) -> tuple[int, int] | None:
        """The range to slice, only when both bounds are given."""
        if self.start_line is None or self.end_line is None:
            return None
        return self.start_line, self.end_line


@dataclass
class CreateIssueRequest:
    """File a bug report on the repository."""

    title: str
    body: str
    labels: list[str] = field(default_factory=lambda: ["bug"])
    priority: str = "medium"
    code_snippet: str | None = None
    file_path: str | None = None
    line_number: int | str | None = None

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> "CreateIssueRequest":
        tool = ToolName.CREATE_GITHUB_ISSUE
        missing = [key for key in ("title", "body") if not params.get(key)]
        if missing:
            raise MissingFieldError(missing, tool.value)

        labels = params.get("labels")
        if labels is None:
            labels = ["bug"]
        elif isinstance(labels, str):
            labels = [labels]
        elif not isinstance(labels, list):
            raise InvalidFieldError(f"labels must be a list for {tool.value}")

        return cls(
            title=str(params["title"]),
            body=str(params["body"]),
            labels=[str(label) for label in labels],
            priority=str(params.get("priority") or "medium"),
            code_snippet=params.get("code_snippet") or None,
            file_path=params.get("file_path") or None,
            line_number=params.get("line_number") or None,
        )


ToolRequest = (
    LogConversationRequest
    | GetRepoTreeRequest
    | ReadFileContentRequest
    | CreateIssueRequest
)


@dataclass
class ToolResult:
    """Normalized response for every tool invocation."""

    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any) -> "ToolResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = self.error
        return result
