"""Item Store - the authoritative, ordered set of items currently at home.

Invariants:
    - Contents are always sorted by original_rank ascending
    - At most one entry per item id (insert is idempotent)
    - remove_at never raises: a stale index returns None

Design Decisions:
    - Plain list + bisect: home lists are small, reads dominate
"""

import bisect
from collections.abc import Iterable, Iterator

from app.core.domain_types import Item, ItemId


def _rank(item: Item) -> int:
    return item.original_rank


class ItemStore:
    """Home list, kept in original order."""

    def __init__(self, items: Iterable[Item] = ()):
        self._items: list[Item] = sorted(items, key=_rank)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __contains__(self, item_id: object) -> bool:
        return any(it.id == item_id for it in self._items)

    @property
    def items(self) -> tuple[Item, ...]:
        """Read-only projection in display order."""
        return tuple(self._items)

    def index_of(self, item_id: ItemId) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    def remove_at(
        self, index: int, expected_id: ItemId | None = None,
    ) -> Item | None:
        """Remove and return the item at index.

        Returns None when the index is out of range, or when expected_id is
        given and a different item now sits at that index (the caller's
        index snapshot went stale).
        """
        if index < 0 or index >= len(self._items):
            return None
        if expected_id is not None and self._items[index].id != expected_id:
            return None
        return self._items.pop(index)

    def insert_preserving_order(self, item: Item) -> bool:
        """Insert item at its original-rank position. False if already present."""
        if item.id in self:
            return False
        bisect.insort(self._items, item, key=_rank)
        return True
