"""Tool dispatcher module."""

from .dispatcher import (
    REQUEST_TYPES,
    IToolDispatcher,
    ToolDispatcher,
    detect_tool,
    parse_request,
    resolve_invocation,
    slice_lines,
)
from .issue_body import build_issue_body, merge_labels

__all__ = [
    "REQUEST_TYPES",
    "IToolDispatcher",
    "ToolDispatcher",
    "detect_tool",
    "parse_request",
    "resolve_invocation",
    "slice_lines",
    "build_issue_body",
    "merge_labels",
]
