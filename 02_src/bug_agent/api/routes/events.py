"""Server-Sent Events stream of status events."""

from collections.abc import AsyncIterator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from ...app import IApplication
from ...broadcaster import Broadcaster, QueueSubscriber, format_event
from ...logging_config import get_logger
from ...models import EventType, StatusEvent

logger = get_logger(__name__)


SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


async def stream_conversation(
    broadcaster: Broadcaster, subscriber: QueueSubscriber
) -> AsyncIterator[str]:
    """Yield SSE frames for one client, starting with a connected event."""
    # Queued before subscribing so it is always the first frame
    await subscriber.send(
        format_event(
            StatusEvent(
                status="Connected to conversation stream",
                type=EventType.CONNECTED.value,
            ).stamped()
        )
    )
    broadcaster.subscribe(subscriber)
    try:
        async for frame in subscriber.frames():
            yield frame
    finally:
        logger.info("SSE client disconnected")
        broadcaster.unsubscribe(subscriber)
        subscriber.close()


def create_events_router(app: IApplication) -> APIRouter:
    """Create SSE router."""
    router = APIRouter(prefix="/api/sse", tags=["events"])

    @router.get("/conversation")
    async def conversation_stream() -> StreamingResponse:
        """Live status events for the UI."""
        subscriber = QueueSubscriber()
        return StreamingResponse(
            stream_conversation(app.broadcaster, subscriber),
            media_type="text/event-stream",
            headers=SSE_HEADERS,
        )

    return router
