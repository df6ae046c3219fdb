"""Sorter - orchestrates the Home <-> Away state machine over the three stores.

Invariants:
    - Every item is in exactly one of {ItemStore, its own CategoryStore bucket}
    - An item has an armed timer iff it is away through move_to_category
    - Returned items go back to their original-rank position, never appended
    - Steady-state operations never raise on stale ids or indices; they return False
    - A timer callback armed before reset()/close() can never mutate the new state

Design Decisions:
    - Location is container membership only (no per-item state field)
    - Synchronous methods, no awaits: each operation runs to completion on the
      event loop thread, timers interleave between operations, never inside one
    - Generation counter bound into every timer callback guards against the host
      delivering a callback that was cancelled during reset()
"""

import logging
from collections.abc import Callable

from app.core.category_store import CategoryStore
from app.core.domain_types import (
    DEFAULT_RETURN_DELAY_MS,
    Item,
    ItemId,
    Location,
    ReturnOrigin,
    SeedSet,
)
from app.core.errors import InvalidBoardDataError
from app.core.item_store import ItemStore
from app.core.scheduling_protocols import Scheduler
from app.core.sorter_snapshot import SorterSnapshot
from app.core.timer_registry import TimerRegistry

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[SorterSnapshot], None]


def build_items(seed_set: SeedSet) -> list[Item]:
    """Assign original ranks in record order. Rejects duplicate ids."""
    items: list[Item] = []
    seen: set[ItemId] = set()
    for rank, seed in enumerate(seed_set.seeds):
        if seed.id in seen:
            raise InvalidBoardDataError(f"Duplicate item id '{seed.id}'")
        seen.add(seed.id)
        items.append(Item(
            id=seed.id,
            category=seed.category,
            display_name=seed.display_name,
            original_rank=rank,
            details=seed.details,
        ))
    return items


class Sorter:
    """Generic sorter over a fixed set of categories."""

    def __init__(
        self,
        seed_set: SeedSet,
        scheduler: Scheduler,
        *,
        return_delay_ms: int = DEFAULT_RETURN_DELAY_MS,
        name: str = "sorter",
    ):
        if not seed_set.categories:
            raise InvalidBoardDataError("At least one category is required")
        self.name = name
        self._seed_set = seed_set
        self._return_delay_ms = return_delay_ms
        self._timers = TimerRegistry(scheduler)
        self._listeners: list[SnapshotListener] = []
        self._generation = 0
        self._closed = False
        self._rebuild()

    # --- Read API --------------------------------------------------------------

    @property
    def return_delay_ms(self) -> int:
        return self._return_delay_ms

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> SorterSnapshot:
        return SorterSnapshot(
            home=self._home.items,
            buckets=tuple(
                (category, self._buckets.items_in(category))
                for category in self._buckets.categories
            ),
            armed=self._timers.armed_ids,
        )

    def get_item(self, item_id: ItemId) -> Item | None:
        return self._catalog.get(item_id)

    def location_of(self, item_id: ItemId) -> Location | None:
        """HOME or AWAY, or None for an id this sorter does not know."""
        item = self._catalog.get(item_id)
        if item is None:
            return None
        if item_id in self._home:
            return Location.HOME
        if self._buckets.contains(item.category, item_id):
            return Location.AWAY
        return None

    def has_timer(self, item_id: ItemId) -> bool:
        return self._timers.is_armed(item_id)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call listener with a fresh snapshot after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Transitions -----------------------------------------------------------

    def move_to_category(
        self, item_id: ItemId, home_index: int | None = None,
    ) -> bool:
        """Home -> Away. No-op (False) if the item is not at home_index."""
        if self._closed:
            return False
        if home_index is None:
            home_index = self._home.index_of(item_id)
            if home_index is None:
                return False
        item = self._home.remove_at(home_index, expected_id=item_id)
        if item is None:
            logger.debug(
                "Stale move ignored", extra={"board": self.name, "item_id": item_id},
            )
            return False

        self._buckets.append(item.category, item)
        generation = self._generation
        self._timers.arm(
            item.id, self._return_delay_ms,
            lambda: self._on_timer(item.id, generation),
        )
        logger.debug(
            "Moved %s to %s", item.id, item.category,
            extra={"board": self.name, "item_id": item.id, "category": item.category},
        )
        self._notify()
        return True

    def return_now(self, item_id: ItemId) -> bool:
        """Away -> Home on explicit request. Idempotent."""
        if self._closed:
            return False
        return self._return_home(item_id, ReturnOrigin.MANUAL)

    def reset(self) -> None:
        """Cancel every timer and rebuild home from the original records."""
        if self._closed:
            return
        cancelled = self._timers.disarm_all()
        self._generation += 1
        self._rebuild()
        logger.info(
            "Reset %s (%d pending returns cancelled)", self.name, cancelled,
            extra={"board": self.name},
        )
        self._notify()

    def close(self) -> None:
        """Teardown: no callback may fire against this instance afterwards."""
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._timers.disarm_all()
        self._listeners.clear()

    # --- Internals -------------------------------------------------------------

    def _rebuild(self) -> None:
        items = build_items(self._seed_set)
        self._catalog: dict[ItemId, Item] = {item.id: item for item in items}
        self._home = ItemStore(items)
        self._buckets = CategoryStore(self._seed_set.categories)

    def _on_timer(self, item_id: ItemId, generation: int) -> None:
        if self._closed or generation != self._generation:
            return
        self._return_home(item_id, ReturnOrigin.AUTO)

    def _return_home(self, item_id: ItemId, origin: ReturnOrigin) -> bool:
        item = self._catalog.get(item_id)
        if item is None:
            return False
        self._timers.disarm(item_id)
        removed = self._buckets.remove(item.category, item_id)
        inserted = self._home.insert_preserving_order(item)
        if not (removed or inserted):
            return False
        logger.debug(
            "Returned %s home (%s)", item_id, origin.value,
            extra={"board": self.name, "item_id": item_id, "origin": origin.value},
        )
        self._notify()
        return True

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
