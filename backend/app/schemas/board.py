"""Board Schemas - Pydantic models for board views and transition requests.

Invariants:
    - BoardView is built from one SorterSnapshot: home, categories and counts agree
    - A board that is not READY has no items and no categories in its view
    - MoveRequest.home_index is optional and never negative

Design Decisions:
    - from_board classmethod keeps view assembly next to the view contract
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from app.core.domain_types import BoardStatus, Item

if TYPE_CHECKING:
    from app.services.board_registry import Board


class ItemView(BaseModel):
    """One item as the presentation layer sees it."""
    id: str
    display_name: str
    category: str
    original_rank: int
    details: dict[str, str] = {}
    return_pending: bool = False

    @classmethod
    def from_item(cls, item: Item, pending: bool = False) -> "ItemView":
        return cls(
            id=item.id,
            display_name=item.display_name,
            category=item.category,
            original_rank=item.original_rank,
            details=dict(item.details),
            return_pending=pending,
        )


class CategoryView(BaseModel):
    """A category header (name + count) and its bucket in arrival order."""
    name: str
    count: int
    items: list[ItemView]


class BoardSummary(BaseModel):
    name: str
    title: str
    status: BoardStatus


class BoardView(BoardSummary):
    """Full read projection of a board."""
    error: str | None = None
    return_delay_ms: int | None = None
    home_count: int = 0
    home: list[ItemView] = []
    categories: list[CategoryView] = []

    @classmethod
    def from_board(cls, board: "Board") -> "BoardView":
        snapshot = board.snapshot()
        sorter = board.sorter
        return cls(
            name=board.name,
            title=board.title,
            status=board.status,
            error=board.error,
            return_delay_ms=sorter.return_delay_ms if sorter else None,
            home_count=snapshot.home_count,
            home=[ItemView.from_item(item) for item in snapshot.home],
            categories=[
                CategoryView(
                    name=category,
                    count=len(items),
                    items=[
                        ItemView.from_item(item, item.id in snapshot.armed)
                        for item in items
                    ],
                )
                for category, items in snapshot.buckets
            ],
        )


class MoveRequest(BaseModel):
    """Move an item away from home. home_index is the caller's snapshot index."""
    home_index: int | None = Field(None, ge=0)


class TransitionResponse(BaseModel):
    """Result of move/return/reset: whether state changed, plus the new view."""
    changed: bool
    board: BoardView
