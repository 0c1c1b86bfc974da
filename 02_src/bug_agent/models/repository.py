"""Repository host data models."""

from dataclasses import asdict, dataclass
from typing import Literal


@dataclass
class TreeItem:
    """One entry of the recursive repository tree."""

    path: str
    type: Literal["file", "dir"]
    size: int | None
    sha: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DirectoryEntry:
    """One entry of a single-directory listing."""

    name: str
    path: str
    type: str  # "file", "dir", "symlink", "submodule"
    size: int | None
    sha: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RepoFile:
    """A file fetched from the repository, already decoded to text."""

    path: str
    content: str
    size: int
    sha: str


@dataclass
class CreatedIssue:
    """An issue created on the repository host."""

    number: int
    url: str
    title: str
    state: str


@dataclass
class CodeSearchHit:
    """A code search match."""

    name: str
    path: str
    sha: str
    url: str

    def to_dict(self) -> dict:
        return asdict(self)
