"""Boundary Protocols - contracts between the sorter core and whatever delivers timers.

Invariants:
    - Core NEVER imports asyncio; the shell hands in a Scheduler
    - A scheduled callback runs on the same logical thread as every other operation
    - Cancelling a handle whose callback already ran is a harmless no-op

Design Decisions:
    - Protocol over ABC: asyncio.AbstractEventLoop satisfies Scheduler structurally,
      so production passes the running loop and tests pass a virtual clock
"""

from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """Cancelable handle returned by Scheduler.call_later."""
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay (in seconds)."""
    def call_later(
        self, delay: float, callback: Callable[[], object],
    ) -> TimerHandle: ...
