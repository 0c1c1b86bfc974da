"""Repository browsing routes (directory listing and code search)."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...errors import HostError
from ...logging_config import get_logger

logger = get_logger(__name__)


class DirectoryEntryResponse(BaseModel):
    """Response model for a directory entry."""

    name: str
    path: str
    type: str
    size: int | None
    sha: str


class CodeSearchHitResponse(BaseModel):
    """Response model for a code search match."""

    name: str
    path: str
    sha: str
    url: str


def create_repository_router(app: IApplication) -> APIRouter:
    """Create repository router."""
    router = APIRouter(prefix="/api/repository", tags=["repository"])

    def _capability(name: str):
        method = getattr(app.repository_host, name, None)
        if method is None:
            raise HTTPException(
                status_code=501, detail=f"Repository host does not support {name}"
            )
        return method

    @router.get("/contents", response_model=list[DirectoryEntryResponse])
    async def list_contents(
        path: str = Query("", description="Directory path, root when empty"),
    ) -> list[dict]:
        """List one directory of the repository."""
        list_directory = _capability("list_directory")
        try:
            entries = await list_directory(path)
        except HostError as e:
            logger.error("Error listing %s: %s", path or "root", e)
            raise HTTPException(status_code=502, detail=str(e))
        return [entry.to_dict() for entry in entries]

    @router.get("/search", response_model=list[CodeSearchHitResponse])
    async def search(
        q: str = Query(..., min_length=1, description="Search query"),
    ) -> list[dict]:
        """Search code in the repository."""
        search_code = _capability("search_code")
        try:
            hits = await search_code(q)
        except HostError as e:
            logger.error("Error searching for %s: %s", q, e)
            raise HTTPException(status_code=502, detail=str(e))
        return [hit.to_dict() for hit in hits]

    return router
