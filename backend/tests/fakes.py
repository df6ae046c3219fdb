"""Test Fakes - a virtual-time Scheduler and a mocked user directory.

Invariants:
    - Callbacks run only inside advance(), in due-time order (ties by arming order)
    - A cancelled handle never runs, even if its due time has passed
    - Callbacks armed during advance() run in the same advance() if they fall due
"""

import heapq
import itertools
from collections.abc import Callable

import httpx


class VirtualTimerHandle:
    def __init__(self, when: float, callback: Callable[[], object]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualClock:
    """Scheduler whose time only moves when a test says so."""

    def __init__(self):
        self.now = 0.0
        self._queue: list[tuple[float, int, VirtualTimerHandle]] = []
        self._seq = itertools.count()

    def call_later(
        self, delay: float, callback: Callable[[], object],
    ) -> VirtualTimerHandle:
        handle = VirtualTimerHandle(self.now + delay, callback)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance_ms(self, ms: float) -> int:
        """Move time forward, running every callback that falls due. Returns count run."""
        target = self.now + ms / 1000
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            self.now = when
            if handle.cancelled:
                continue
            handle.callback()
            ran += 1
        self.now = target
        return ran

    def fire_cancelled(self) -> int:
        """Run cancelled callbacks anyway: a host delivering a callback it should not."""
        ran = 0
        for _, _, handle in list(self._queue):
            if handle.cancelled:
                handle.callback()
                ran += 1
        return ran


USERS_URL = "http://users.test/users"

# Three users across two departments (Engineering: 2, Marketing: 1)
USERS_PAYLOAD = {
    "users": [
        {"id": 1, "firstName": "Emily", "lastName": "Johnson",
         "company": {"department": "Engineering"}},
        {"id": 2, "firstName": "Michael", "lastName": "Williams",
         "company": {"department": "Marketing"}},
        {"id": 3, "firstName": "Sophia", "lastName": "Brown",
         "company": {"department": "Engineering"}},
    ],
}


def users_transport(status_code: int = 200, payload=USERS_PAYLOAD) -> httpx.MockTransport:
    """Mocked user directory answering every request the same way."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)
    return httpx.MockTransport(handler)
