"""Core data models for the bug agent backend."""

from .events import EventType, StatusEvent, utc_now_iso
from .repository import CodeSearchHit, CreatedIssue, DirectoryEntry, RepoFile, TreeItem
from .tools import (
    CreateIssueRequest,
    GetRepoTreeRequest,
    LogConversationRequest,
    ReadFileContentRequest,
    ToolName,
    ToolRequest,
    ToolResult,
)

__all__ = [
    # Events
    "EventType",
    "StatusEvent",
    "utc_now_iso",
    # Repository
    "TreeItem",
    "DirectoryEntry",
    "RepoFile",
    "CreatedIssue",
    "CodeSearchHit",
    # Tools
    "ToolName",
    "ToolRequest",
    "ToolResult",
    "LogConversationRequest",
    "GetRepoTreeRequest",
    "ReadFileContentRequest",
    "CreateIssueRequest",
]
