"""Board Stream - server-sent events carrying a fresh board view after every change.

Invariants:
    - The first event is always the current view
    - One event per board change, including timer-driven returns and reloads
    - The board listener is removed when the client goes away or the stream ends

Design Decisions:
    - asyncio.Queue bridges the synchronous Board listener to the async generator
    - Keepalive comments let the stream notice disconnects while the board is idle
    - Optional limit closes the stream after N events (polling clients, tests)
"""

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from app.api.dependencies import get_board
from app.schemas.board import BoardView
from app.services.board_registry import Board

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/boards", tags=["boards"])

KEEPALIVE_SECONDS = 15.0

# Prevents proxy/browser buffering of streamed events.
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def _sse_line(view: BoardView) -> str:
    """Format one board view as an SSE data line."""
    event = {"type": "board", "data": view.model_dump(mode="json")}
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


@router.get("/{name}/stream")
async def stream_board(
    request: Request,
    board: Board = Depends(get_board),
    limit: int | None = Query(None, ge=1),
):
    """Stream board views as server-sent events."""
    queue: asyncio.Queue[BoardView] = asyncio.Queue()
    unsubscribe = board.subscribe(
        lambda b: queue.put_nowait(BoardView.from_board(b)),
    )

    async def event_generator():
        sent = 0
        try:
            yield _sse_line(BoardView.from_board(board))
            sent += 1
            while limit is None or sent < limit:
                try:
                    view = await asyncio.wait_for(
                        queue.get(), timeout=KEEPALIVE_SECONDS,
                    )
                except asyncio.TimeoutError:
                    if await request.is_disconnected():
                        break
                    yield ": keepalive\n\n"
                    continue
                yield _sse_line(view)
                sent += 1
        finally:
            unsubscribe()
            logger.debug("Stream closed", extra={"board": board.name})

    return StreamingResponse(
        event_generator(), media_type="text/event-stream", headers=SSE_HEADERS,
    )
