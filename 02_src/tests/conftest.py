"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bug_agent.errors import NotAFileError  # noqa: E402
from bug_agent.models import CreatedIssue, RepoFile, TreeItem  # noqa: E402


FIVE_LINE_FILE = "line one\nline two\nline three\nline four\nline five"


class FakeRepositoryHost:
    """In-memory repository host."""

    def __init__(self):
        self.tree = [
            TreeItem(path="README.md", type="file", size=120, sha="a1"),
            TreeItem(path="lib", type="dir", size=None, sha="b2"),
            TreeItem(path="lib/cart.js", type="file", size=300, sha="c3"),
        ]
        self.files = {"lib/cart.js": FIVE_LINE_FILE}
        self.directories = {"lib"}
        self.created: list[dict] = []

    async def get_full_tree(self) -> list[TreeItem]:
        return list(self.tree)

    async def get_file(self, path: str) -> RepoFile:
        if path in self.directories:
            raise NotAFileError(path)
        content = self.files[path]
        return RepoFile(
            path=path, content=content, size=len(content.encode()), sha="f00"
        )

    async def create_issue(self, title: str, body: str, labels: list[str]) -> CreatedIssue:
        self.created.append({"title": title, "body": body, "labels": labels})
        number = len(self.created)
        return CreatedIssue(
            number=number,
            url=f"https://github.com/acme/shop/issues/{number}",
            title=title,
            state="open",
        )


class RecordingSubscriber:
    """Subscriber that keeps every frame it receives."""

    def __init__(self, fail: bool = False):
        self.frames: list[str] = []
        self.fail = fail
        self.closed = False

    async def send(self, frame: str) -> None:
        if self.fail:
            raise ConnectionResetError("client went away")
        self.frames.append(frame)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings():
    """Settings that never touch the real GitHub API."""
    from bug_agent.config import Settings

    return Settings(
        github_token="test-token",
        github_owner="acme",
        github_repo="shop",
        github_api_base="https://api.github.test",
        heartbeat_interval=3600,
    )


@pytest.fixture
def repository_host():
    """Create fake repository host."""
    return FakeRepositoryHost()


@pytest.fixture
def broadcaster():
    """Create Broadcaster without starting the heartbeat."""
    from bug_agent.broadcaster import Broadcaster

    return Broadcaster(heartbeat_interval=3600)


@pytest.fixture
def subscriber(broadcaster):
    """A recording subscriber already attached to the broadcaster."""
    sub = RecordingSubscriber()
    broadcaster.subscribe(sub)
    return sub


@pytest.fixture
def dispatcher(broadcaster, repository_host):
    """Create ToolDispatcher over the fake host."""
    from bug_agent.dispatcher import ToolDispatcher

    return ToolDispatcher(broadcaster, repository_host)


@pytest.fixture
def mock_broadcaster():
    """Create mock broadcaster."""
    b = Mock()
    b.broadcast = AsyncMock(return_value=0)
    return b


@pytest_asyncio.fixture
async def application(settings, repository_host):
    """Started Application with the fake repository host."""
    from bug_agent.app import Application

    app = Application(settings=settings, repository_host=repository_host)
    await app.start()
    yield app
    await app.stop()
