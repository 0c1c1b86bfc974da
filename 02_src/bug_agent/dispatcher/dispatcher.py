"""ToolDispatcher: validates tool calls, runs them and normalizes results."""

from pathlib import PurePosixPath
from typing import Any, Protocol

from ..broadcaster import IBroadcaster
from ..errors import UndeterminableToolError, UnknownToolError
from ..github import IRepositoryHost
from ..logging_config import get_logger
from ..models import (
    CreateIssueRequest,
    EventType,
    GetRepoTreeRequest,
    LogConversationRequest,
    ReadFileContentRequest,
    StatusEvent,
    ToolName,
    ToolRequest,
    ToolResult,
    utc_now_iso,
)
from .issue_body import build_issue_body, merge_labels

logger = get_logger(__name__)


TREE_MESSAGE = (
    "Full repository structure retrieved. "
    "Analyze this to find relevant files for the user's issue."
)

ERROR_STATUS = {
    ToolName.LOG_CONVERSATION: "Error logging conversation status",
    ToolName.GET_REPO_TREE: "Error loading repository structure",
    ToolName.READ_FILE_CONTENT: "Error reading file",
    ToolName.CREATE_GITHUB_ISSUE: "Error creating bug report",
}

REQUEST_TYPES = {
    ToolName.LOG_CONVERSATION: LogConversationRequest,
    ToolName.GET_REPO_TREE: GetRepoTreeRequest,
    ToolName.READ_FILE_CONTENT: ReadFileContentRequest,
    ToolName.CREATE_GITHUB_ISSUE: CreateIssueRequest,
}


def detect_tool(params: dict[str, Any]) -> ToolName:
    """Infer the tool from the parameter keys of an unnamed call."""
    if params.get("status") and params.get("type"):
        return ToolName.LOG_CONVERSATION
    if "path" in params and not params.get("file_path"):
        return ToolName.GET_REPO_TREE
    if params.get("file_path") and not params.get("title"):
        return ToolName.READ_FILE_CONTENT
    if params.get("title") and params.get("body"):
        return ToolName.CREATE_GITHUB_ISSUE
    raise UndeterminableToolError(params.keys())


def parse_tool_name(name: str) -> ToolName:
    try:
        return ToolName(name)
    except ValueError:
        raise UnknownToolError(name, ToolName.names()) from None


def resolve_invocation(payload: dict[str, Any]) -> tuple[ToolName, dict[str, Any]]:
    """
    Split a webhook payload into tool name and parameters.

    Accepts both ``{"tool_name": ..., "parameters": {...}}`` and bare
    parameters, in which case the tool is auto-detected.
    """
    parameters = payload.get("parameters")
    if not isinstance(parameters, dict):
        parameters = payload

    tool_name = payload.get("tool_name")
    if not tool_name:
        return detect_tool(parameters), parameters
    return parse_tool_name(str(tool_name)), parameters


def parse_request(tool: ToolName, params: dict[str, Any]) -> ToolRequest:
    """Validate raw parameters into the typed request for a tool.

    Raises ToolError subclasses for missing or malformed fields.
    """
    return REQUEST_TYPES[tool].from_params(params)


def slice_lines(content: str, start_line: int, end_line: int) -> str:
    """Lines start_line..end_line, 1-indexed and inclusive."""
    lines = content.split("\n")
    return "\n".join(lines[start_line - 1 : end_line])


class IToolDispatcher(Protocol):
    """Runs the fixed set of voice agent tools."""

    async def dispatch(self, tool: ToolName | str, params: dict[str, Any]) -> ToolResult:
        """Run one tool. Failures come back as an unsuccessful ToolResult."""
        ...

    async def handle_webhook(self, payload: dict[str, Any]) -> ToolResult:
        """Resolve the tool from a webhook payload and run it."""
        ...


class ToolDispatcher:
    """Stateless router from tool calls to repository host operations."""

    def __init__(self, broadcaster: IBroadcaster, repository_host: IRepositoryHost):
        self._broadcaster = broadcaster
        self._host = repository_host

    async def handle_webhook(self, payload: dict[str, Any]) -> ToolResult:
        """Resolve the tool from a webhook payload and run it.

        Raises RoutingError when no known tool matches.
        """
        tool, params = resolve_invocation(payload)
        return await self.dispatch(tool, params)

    async def dispatch(self, tool: ToolName | str, params: dict[str, Any]) -> ToolResult:
        """Run one tool. Failures come back as an unsuccessful ToolResult.

        Raises UnknownToolError for a name outside the tool set.
        """
        if not isinstance(tool, ToolName):
            tool = parse_tool_name(tool)

        logger.info("Executing tool: %s", tool.value)
        try:
            request = parse_request(tool, params)
            if isinstance(request, LogConversationRequest):
                data = await self._log_conversation(request)
            elif isinstance(request, GetRepoTreeRequest):
                data = await self._get_repo_tree(request)
            elif isinstance(request, ReadFileContentRequest):
                data = await self._read_file_content(request)
            else:
                data = await self._create_github_issue(request)
        except Exception as e:
            logger.error("Tool %s failed: %s", tool.value, e, exc_info=True)
            await self._broadcaster.broadcast(
                StatusEvent(
                    status=ERROR_STATUS[tool],
                    type=EventType.ERROR.value,
                    metadata={"tool": tool.value, "error": str(e)},
                )
            )
            return ToolResult.failure(str(e))

        logger.info("Tool %s completed successfully", tool.value)
        return ToolResult.ok(data)

    async def _log_conversation(self, request: LogConversationRequest) -> dict:
        await self._broadcaster.broadcast(
            StatusEvent(
                status=request.status,
                type=request.type,
                metadata=request.metadata,
                timestamp=utc_now_iso(),
            )
        )
        return {"status": request.status, "type": request.type}

    async def _get_repo_tree(self, request: GetRepoTreeRequest) -> dict:
        await self._broadcaster.broadcast(
            StatusEvent(
                status="Loading repository structure...",
                type=EventType.INVESTIGATING.value,
                metadata={"tool": ToolName.GET_REPO_TREE.value},
            )
        )

        tree = await self._host.get_full_tree()
        return {
            "tree": [item.to_dict() for item in tree],
            "total_files": sum(1 for item in tree if item.type == "file"),
            "total_dirs": sum(1 for item in tree if item.type == "dir"),
            "message": TREE_MESSAGE,
        }

    async def _read_file_content(self, request: ReadFileContentRequest) -> dict:
        await self._broadcaster.broadcast(
            StatusEvent(
                status=f"Reading {PurePosixPath(request.file_path).name}...",
                type=EventType.INVESTIGATING.value,
                metadata={
                    "tool": ToolName.READ_FILE_CONTENT.value,
                    "file_path": request.file_path,
                },
            )
        )

        repo_file = await self._host.get_file(request.file_path)

        content = repo_file.content
        line_range = None
        # Partial bounds are ignored
        if request.line_range:
            start, end = request.line_range
            content = slice_lines(content, start, end)
            line_range = {"start": start, "end": end}

        return {
            "path": repo_file.path,
            "content": content,
            "size": repo_file.size,
            "lineRange": line_range,
        }

    async def _create_github_issue(self, request: CreateIssueRequest) -> dict:
        await self._broadcaster.broadcast(
            StatusEvent(
                status="Creating bug report...",
                type=EventType.RESOLVING.value,
                metadata={
                    "tool": ToolName.CREATE_GITHUB_ISSUE.value,
                    "title": request.title,
                },
            )
        )

        labels = merge_labels(request.labels, request.priority)
        issue = await self._host.create_issue(
            title=request.title,
            body=build_issue_body(request, utc_now_iso()),
            labels=labels,
        )

        await self._broadcaster.broadcast(
            StatusEvent(
                status="Bug report created successfully",
                type=EventType.RESOLVED.value,
                metadata={
                    "tool": ToolName.CREATE_GITHUB_ISSUE.value,
                    "issue_number": issue.number,
                    "issue_url": issue.url,
                },
            )
        )

        return {
            "issue_number": issue.number,
            "issue_url": issue.url,
            "labels": labels,
            "message": "Issue created successfully",
        }
