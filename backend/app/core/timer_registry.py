"""Timer Registry - at most one pending return callback per item.

Invariants:
    - One handle per item id; arming twice raises TimerAlreadyArmedError
    - disarm / disarm_all cancel synchronously and forget the handle
    - Delays are given in milliseconds and handed to the scheduler in seconds
"""

from collections.abc import Callable

from app.core.domain_types import ItemId
from app.core.errors import TimerAlreadyArmedError
from app.core.scheduling_protocols import Scheduler, TimerHandle


class TimerRegistry:
    """Armed return timers keyed by item id."""

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._handles: dict[ItemId, TimerHandle] = {}

    def __len__(self) -> int:
        return len(self._handles)

    @property
    def armed_ids(self) -> frozenset[ItemId]:
        return frozenset(self._handles)

    def is_armed(self, item_id: ItemId) -> bool:
        return item_id in self._handles

    def arm(
        self, item_id: ItemId, delay_ms: int, callback: Callable[[], object],
    ) -> None:
        if item_id in self._handles:
            raise TimerAlreadyArmedError(item_id)
        self._handles[item_id] = self._scheduler.call_later(
            delay_ms / 1000, callback,
        )

    def disarm(self, item_id: ItemId) -> bool:
        """Cancel the item's timer if any. False when nothing was armed."""
        handle = self._handles.pop(item_id, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def disarm_all(self) -> int:
        """Cancel every outstanding timer. Returns how many were cancelled."""
        handles = list(self._handles.values())
        self._handles.clear()
        for handle in handles:
            handle.cancel()
        return len(handles)
