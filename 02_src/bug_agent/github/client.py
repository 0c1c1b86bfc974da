"""
GitHub REST client used as the repository host for tool calls.

Covers the recursive tree listing, single file reads, issue creation,
directory listings and code search for one configured repository.
"""

import base64
from urllib.parse import quote
from typing import Any, Protocol

import httpx

from ..config import Settings
from ..errors import HostError, NotAFileError
from ..logging_config import get_logger
from ..models import CodeSearchHit, CreatedIssue, DirectoryEntry, RepoFile, TreeItem

logger = get_logger(__name__)

# Build output and dependency directories that are never worth reading.
EXCLUDED_PREFIXES = (
    ".git/",
    "node_modules/",
    ".next/",
    "dist/",
    "build/",
    ".vercel/",
    "coverage/",
)


class IRepositoryHost(Protocol):
    """Source-control API consumed by the tools."""

    async def get_full_tree(self) -> list[TreeItem]:
        """Recursive tree of the default branch, build directories excluded."""
        ...

    async def get_file(self, path: str) -> RepoFile:
        """Fetch and decode a single file."""
        ...

    async def create_issue(
        self, title: str, body: str, labels: list[str]
    ) -> CreatedIssue:
        """Open a new issue."""
        ...


def is_excluded(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in EXCLUDED_PREFIXES)


def _error_detail(exc: httpx.HTTPError) -> str:
    """Prefer GitHub's own error message when the response carries one."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            message = exc.response.json().get("message")
        except (ValueError, AttributeError):
            message = None
        return f"{exc.response.status_code} {message or exc.response.reason_phrase}"
    return str(exc) or exc.__class__.__name__


class GitHubClient:
    """Async GitHub client bound to one owner/repo."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._settings.github_api_base.rstrip("/"),
            headers=self._headers(),
            transport=self._transport,
        )
        if not self._settings.github_configured:
            logger.warning("GitHub is not fully configured (token/owner/repo)")

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        h = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._settings.github_token:
            h["Authorization"] = f"Bearer {self._settings.github_token}"
        return h

    def _repo_path(self, path: str = "") -> str:
        return f"/repos/{self._settings.github_owner}/{self._settings.github_repo}{path}"

    def _contents_path(self, path: str) -> str:
        # Segments are percent-encoded so '#', '?' and '%' stay part of the path
        return self._repo_path(f"/contents/{quote(path.strip('/'), safe='/')}")

    async def _request(
        self,
        method: str,
        url: str,
        action: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("GitHubClient not started")
        try:
            resp = await self._client.request(method, url, params=params, json=json)
            resp.raise_for_status()
            return resp
        except httpx.HTTPError as e:
            logger.error("GitHub error while trying to %s: %s", action, e)
            raise HostError(f"Failed to {action}: {_error_detail(e)}") from e

    async def get_full_tree(self) -> list[TreeItem]:
        """Recursive tree of HEAD with build/dependency directories filtered out."""
        logger.info("Fetching full repository tree recursively")
        resp = await self._request(
            "GET",
            self._repo_path("/git/trees/HEAD"),
            "fetch full repository tree",
            params={"recursive": "1"},
        )

        tree = [
            TreeItem(
                path=item["path"],
                type="file" if item.get("type") == "blob" else "dir",
                size=item.get("size"),
                sha=item.get("sha", ""),
            )
            for item in resp.json().get("tree", [])
            if not is_excluded(item["path"])
        ]
        logger.info("Retrieved %s items from repository", len(tree))
        return tree

    async def get_file(self, path: str) -> RepoFile:
        """Fetch a file through the contents API and decode its base64 body."""
        logger.info("Reading file: %s", path)
        resp = await self._request(
            "GET",
            self._contents_path(path),
            f"read file {path}",
        )

        data = resp.json()
        # Directories come back as a list of entries
        if isinstance(data, list) or data.get("type") != "file":
            raise NotAFileError(path)

        raw = base64.b64decode(data.get("content", ""))
        return RepoFile(
            path=data.get("path", path),
            content=raw.decode("utf-8", errors="replace"),
            size=data.get("size", len(raw)),
            sha=data.get("sha", ""),
        )

    async def create_issue(
        self, title: str, body: str, labels: list[str]
    ) -> CreatedIssue:
        logger.info("Creating issue: %s", title)
        resp = await self._request(
            "POST",
            self._repo_path("/issues"),
            "create GitHub issue",
            json={"title": title, "body": body, "labels": labels},
        )

        data = resp.json()
        logger.info("Issue created: #%s", data.get("number"))
        return CreatedIssue(
            number=data["number"],
            url=data.get("html_url", ""),
            title=data.get("title", title),
            state=data.get("state", "open"),
        )

    async def list_directory(self, path: str = "") -> list[DirectoryEntry]:
        """List one directory. A missing path yields an empty list."""
        logger.info("Fetching tree for path: %s", path or "root")
        if self._client is None:
            raise RuntimeError("GitHubClient not started")
        url = self._contents_path(path)
        try:
            resp = await self._client.get(url)
            if resp.status_code == 404:
                logger.info("Path not found: %s, returning empty tree", path)
                return []
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("GitHub error while listing %s: %s", path or "root", e)
            raise HostError(f"Failed to fetch repository tree: {_error_detail(e)}") from e

        data = resp.json()
        items = data if isinstance(data, list) else [data]
        return [
            DirectoryEntry(
                name=item.get("name", ""),
                path=item.get("path", ""),
                type=item.get("type", ""),
                size=item.get("size"),
                sha=item.get("sha", ""),
            )
            for item in items
        ]

    async def search_code(self, query: str) -> list[CodeSearchHit]:
        """Search code in the configured repository."""
        logger.info("Searching for: %s", query)
        owner, repo = self._settings.github_owner, self._settings.github_repo
        resp = await self._request(
            "GET",
            "/search/code",
            "search files",
            params={"q": f"{query} repo:{owner}/{repo}"},
        )
        return [
            CodeSearchHit(
                name=item.get("name", ""),
                path=item.get("path", ""),
                sha=item.get("sha", ""),
                url=item.get("html_url", ""),
            )
            for item in resp.json().get("items", [])
        ]
