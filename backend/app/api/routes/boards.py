"""Board Routes - read projections and user-triggered transitions.

Invariants:
    - Every transition response carries the board view taken right after the change
    - Stale ids and indices answer 200 with changed=false, never an error
    - Transitions on a LOADING or FAILED board answer 409 (BoardNotReadyError)

Design Decisions:
    - Routes are synchronous wrappers around Board methods: sorter operations never await
    - reload is the presentation-level retry; the core itself never retries a load
"""

import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_board, get_registry
from app.core.domain_types import ItemId
from app.schemas.board import BoardSummary, BoardView, MoveRequest, TransitionResponse
from app.services.board_registry import Board, BoardRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/boards", tags=["boards"])


def _transition(board: Board, changed: bool) -> TransitionResponse:
    return TransitionResponse(changed=changed, board=BoardView.from_board(board))


@router.get("", response_model=list[BoardSummary])
async def list_boards(registry: BoardRegistry = Depends(get_registry)):
    return [
        BoardSummary(name=b.name, title=b.title, status=b.status)
        for b in registry
    ]


@router.get("/{name}", response_model=BoardView)
async def get_board_view(board: Board = Depends(get_board)):
    return BoardView.from_board(board)


@router.post("/{name}/items/{item_id}/move", response_model=TransitionResponse)
async def move_item(
    item_id: str,
    body: MoveRequest | None = None,
    board: Board = Depends(get_board),
):
    """Home -> category. home_index is the index the client saw when the user acted."""
    home_index = body.home_index if body else None
    changed = board.move(ItemId(item_id), home_index)
    return _transition(board, changed)


@router.post("/{name}/items/{item_id}/return", response_model=TransitionResponse)
async def return_item(item_id: str, board: Board = Depends(get_board)):
    """Category -> home right now, cancelling the pending auto-return."""
    changed = board.return_now(ItemId(item_id))
    return _transition(board, changed)


@router.post("/{name}/reset", response_model=TransitionResponse)
async def reset_board(board: Board = Depends(get_board)):
    changed = board.reset()
    return _transition(board, changed)


@router.post("/{name}/reload", response_model=BoardView)
async def reload_board(board: Board = Depends(get_board)):
    """Run the data load again. A failed load is reported in the view, not as an error."""
    logger.info("Reloading board %s", board.name, extra={"board": board.name})
    await board.load()
    return BoardView.from_board(board)
