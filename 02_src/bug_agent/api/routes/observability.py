"""Observability API routes."""

from datetime import datetime, timezone

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import IApplication
from ...models import ToolName


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    tools: list[str]
    subscribers: int
    github_configured: bool
    timestamp: datetime


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/health", response_model=HealthResponse)
    async def health() -> dict:
        """Process status, known tools and live subscriber count."""
        return {
            "status": "ok",
            "tools": ToolName.names(),
            "subscribers": app.broadcaster.subscriber_count,
            "github_configured": app.settings.github_configured,
            "timestamp": datetime.now(timezone.utc),
        }

    return router
