"""
Server-Sent Events stream of table changes for browser clients.

Each connection holds its own subscription for as long as it is open. Events
carry no row data: a client that receives `change` refetches the list itself.
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from hotel_site.core.dependencies import get_subscriptions
from hotel_site.core.logging_config import get_logger
from hotel_site.resources.registry import RESOURCES
from hotel_site.resources.subscription import ChangeSubscription

router = APIRouter(prefix="/realtime", tags=["Realtime"])
logger = get_logger().bind(log_type="realtime")

KEEPALIVE_SECONDS = 15
STREAMABLE_TABLES = set(RESOURCES) | {"site_settings"}


async def change_events(request: Request, subscriptions: ChangeSubscription, table: str):
    queue: asyncio.Queue = asyncio.Queue()
    unsubscribe = subscriptions.subscribe(table, lambda: queue.put_nowait(table))
    logger.info(f"SSE OPEN: {table}")

    try:
        yield f": subscribed to {table}\n\n"
        while not await request.is_disconnected():
            try:
                await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield f"event: change\ndata: {table}\n\n"
    finally:
        unsubscribe()
        logger.info(f"SSE CLOSED: {table}")


@router.get("/{table}")
async def stream_changes(
    table: str,
    request: Request,
    subscriptions: ChangeSubscription = Depends(get_subscriptions)
):
    if table not in STREAMABLE_TABLES:
        raise HTTPException(status_code=404, detail="Tabel tidak dikenal")

    return StreamingResponse(
        change_events(request, subscriptions, table),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
