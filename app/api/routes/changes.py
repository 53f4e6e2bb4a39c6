"""
WebSocket relay of table change notifications to signed-in dashboards.

A client connects with its session cookie, optionally narrows the tables with
``?tables=registrations,teams``, and receives ``{"table", "event", "id"}``
messages. On any message it should re-fetch the whole table.
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status

from app.api.routes.auth import identify
from app.core.config import settings
from app.services.change_feed import TABLES, change_feed

logger = logging.getLogger(__name__)
router = APIRouter()

RELAY_QUEUE_SIZE = 100


def _parse_tables(raw: str | None) -> list[str] | None:
    """Comma-separated table names; None when any name is unknown."""
    if not raw or not raw.strip():
        return list(TABLES)
    tables = [t.strip() for t in raw.split(",") if t.strip()]
    if not tables or any(t not in TABLES for t in tables):
        return None
    return tables


def offer(queue: asyncio.Queue, message: dict) -> bool:
    """Queue ``message`` for sending; drop it when the client has fallen behind."""
    try:
        queue.put_nowait(message)
    except asyncio.QueueFull:
        logger.warning("Change relay queue full; dropping %s event", message.get("table"))
        return False
    return True


@router.websocket("/changes")
async def changes_ws(websocket: WebSocket, tables: str | None = None) -> None:
    try:
        user = identify(websocket.cookies.get(settings.SESSION_COOKIE_NAME))
    except HTTPException as e:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=e.detail)
        return
    selected = _parse_tables(tables)
    if selected is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Unknown table")
        return

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[dict] = asyncio.Queue(maxsize=RELAY_QUEUE_SIZE)

    # Writes publish from worker threads; hand messages over to this loop.
    def enqueue(message: dict) -> None:
        loop.call_soon_threadsafe(offer, queue, message)

    async def pump() -> None:
        while True:
            message = await queue.get()
            await websocket.send_json(message)

    # Subscribe before accepting so no event after the handshake is missed.
    unsubscribers = [change_feed.subscribe(table, enqueue) for table in selected]
    sender: asyncio.Task | None = None
    try:
        await websocket.accept()
        logger.info("Change relay opened for %r on %s", user.username, ",".join(selected))
        sender = asyncio.create_task(pump())
        while True:
            # Client messages are ignored; receiving detects the disconnect.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        for unsubscribe in unsubscribers:
            unsubscribe()
        if sender is not None:
            sender.cancel()
            await asyncio.gather(sender, return_exceptions=True)
        logger.info("Change relay closed for %r", user.username)
