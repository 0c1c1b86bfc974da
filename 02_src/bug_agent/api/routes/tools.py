"""Tool invocation routes called by the voice agent platform.

Every tool result is returned with HTTP 200, including failures, so the
platform does not retry. Only routing failures use 400.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...app import IApplication
from ...errors import RoutingError, UnknownToolError
from ...logging_config import get_logger
from ...models import ToolName, ToolResult

logger = get_logger(__name__)


class ToolsStatusResponse(BaseModel):
    """Response model for the webhook status check."""

    status: str
    tools: list[str]
    timestamp: datetime


def _routing_error_response(error: RoutingError) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": str(error)}
    if isinstance(error, UnknownToolError):
        content["available_tools"] = error.available_tools
    return JSONResponse(status_code=400, content=content)


def _envelope(result: ToolResult) -> JSONResponse:
    return JSONResponse(status_code=200, content=result.to_dict())


def create_tools_router(app: IApplication) -> APIRouter:
    """Create tool invocation router."""
    router = APIRouter(prefix="/api/elevenlabs", tags=["tools"])

    @router.post("/webhook")
    async def webhook(payload: dict[str, Any] = Body(...)) -> JSONResponse:
        """Run a named or auto-detected tool."""
        logger.info("Webhook received payload keys: %s", list(payload))
        try:
            result = await app.dispatcher.handle_webhook(payload)
        except RoutingError as e:
            logger.error("Webhook routing failed: %s", e)
            return _routing_error_response(e)
        return _envelope(result)

    @router.get("/webhook", response_model=ToolsStatusResponse)
    async def webhook_status() -> dict:
        """Webhook health check."""
        return {
            "status": "operational",
            "tools": ToolName.names(),
            "timestamp": datetime.now(timezone.utc),
        }

    def add_tool_route(tool: ToolName) -> None:
        path = "/" + tool.value.replace("_", "-")

        async def run_tool(params: dict[str, Any] = Body(...)) -> JSONResponse:
            logger.info("[%s] received parameter keys: %s", tool.value, list(params))
            return _envelope(await app.dispatcher.dispatch(tool, params))

        router.add_api_route(
            path,
            run_tool,
            methods=["POST"],
            name=tool.value,
            summary=f"Run {tool.value}",
        )

    for tool in ToolName:
        add_tool_route(tool)

    return router
