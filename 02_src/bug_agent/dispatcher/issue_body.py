"""Markdown composition for bug report issues."""

from pathlib import PurePosixPath

from ..models import CreateIssueRequest

REPORTER = "Voice Bug Agent"
DEFAULT_LABELS = ("customer-reported",)

_FENCE_LANGUAGES = {
    ".js": "javascript",
    ".jsx": "jsx",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".py": "python",
    ".rb": "ruby",
    ".go": "go",
    ".java": "java",
    ".css": "css",
    ".html": "html",
    ".json": "json",
    ".sh": "bash",
}


def fence_language(file_path: str | None) -> str:
    """Code fence language for a file, empty when unknown."""
    if not file_path:
        return ""
    return _FENCE_LANGUAGES.get(PurePosixPath(file_path).suffix.lower(), "")


def location_section(request: CreateIssueRequest) -> str:
    """Location block for the issue body, or "" when there is no code context."""
    if not (request.file_path or request.line_number or request.code_snippet):
        return ""

    section = "\n\n---\n\n### Location\n\n"
    if request.file_path:
        section += f"**File:** `{request.file_path}`\n"
    if request.line_number:
        section += f"**Line:** {request.line_number}\n"
    if request.code_snippet:
        lang = fence_language(request.file_path)
        section += f"\n**Code:**\n```{lang}\n{request.code_snippet}\n```\n"
    return section


def footer(reported_at: str) -> str:
    return f"\n\n---\n**Reported by**: {REPORTER}\n**Timestamp**: {reported_at}"


def build_issue_body(request: CreateIssueRequest, reported_at: str) -> str:
    return request.body + location_section(request) + footer(reported_at)


def merge_labels(labels: list[str], priority: str) -> list[str]:
    """Add the priority and reporter labels, dropping duplicates in order."""
    return list(dict.fromkeys([*labels, f"priority: {priority}", *DEFAULT_LABELS]))
