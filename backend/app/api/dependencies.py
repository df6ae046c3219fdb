"""Route Dependencies - access to the process-wide BoardRegistry.

Invariants:
    - The registry lives on app.state, set by the lifespan (or by tests)
    - get_board raises BoardNotFoundError, rendered as 404 by the global handler
"""

from fastapi import Request

from app.services.board_registry import Board, BoardRegistry


def get_registry(request: Request) -> BoardRegistry:
    return request.app.state.boards


def get_board(name: str, request: Request) -> Board:
    return get_registry(request).get(name)
