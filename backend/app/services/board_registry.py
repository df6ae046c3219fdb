"""Board Registry - named boards, each wrapping one Sorter and its data loader.

Invariants:
    - A board is LOADING until its loader answers, then READY (with a Sorter) or
      FAILED (with the loader's message, no Sorter, no items, no categories)
    - Loading again closes the previous Sorter first: no timer outlives its board state
    - Mutations on a board that is not READY raise BoardNotReadyError
    - load() never leaves a board LOADING: every loader error becomes FAILED
    - Only the most recent load() may publish its result (a reload supersedes an
      in-flight load)

Design Decisions:
    - Board owns the Sorter lifecycle, routes only call Board methods (thin routes)
    - Scheduler resolved at load time: the running event loop unless one was injected,
      so tests hand in a virtual clock
    - Board listeners receive the Board itself; the API layer builds its own view
"""

import asyncio
import logging
from collections.abc import Callable, Iterator

import httpx

from app.config import Settings
from app.core.domain_types import (
    DEFAULT_RETURN_DELAY_MS,
    BoardName,
    BoardStatus,
    ItemId,
)
from app.core.errors import BoardNotFoundError, BoardNotReadyError, SortboardError
from app.core.scheduling_protocols import Scheduler
from app.core.sorter import Sorter
from app.core.sorter_snapshot import SorterSnapshot
from app.services.board_loaders import SeedLoader, produce_loader, users_loader

logger = logging.getLogger(__name__)

BoardListener = Callable[["Board"], None]


class Board:
    """One sorter instance plus the state of the load that feeds it."""

    def __init__(
        self,
        name: BoardName,
        title: str,
        loader: SeedLoader,
        *,
        return_delay_ms: int = DEFAULT_RETURN_DELAY_MS,
        scheduler: Scheduler | None = None,
    ):
        self.name = name
        self.title = title
        self._loader = loader
        self._return_delay_ms = return_delay_ms
        self._scheduler = scheduler
        self._sorter: Sorter | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._listeners: list[BoardListener] = []
        self._load_token = 0
        self.status = BoardStatus.LOADING
        self.error: str | None = None

    @property
    def sorter(self) -> Sorter | None:
        return self._sorter

    def snapshot(self) -> SorterSnapshot:
        """Current projection; empty while loading or after a failed load."""
        if self._sorter is None:
            return SorterSnapshot()
        return self._sorter.snapshot()

    # --- Lifecycle -------------------------------------------------------------

    async def load(self) -> BoardStatus:
        """Run the loader and (re)build the sorter.

        Any failure, typed or not, ends in FAILED with its message kept; only
        cancellation propagates.
        """
        self._load_token += 1
        token = self._load_token
        self._teardown_sorter()
        self.status = BoardStatus.LOADING
        self.error = None
        self._publish()

        try:
            seed_set = await self._loader()
            sorter = Sorter(
                seed_set,
                self._scheduler or asyncio.get_running_loop(),
                return_delay_ms=self._return_delay_ms,
                name=self.name,
            )
        except SortboardError as e:
            return self._fail(token, e.message, e.code)
        except Exception as e:
            logger.exception(
                "Unexpected error loading board %s", self.name,
                extra={"board": self.name},
            )
            return self._fail(token, str(e) or type(e).__name__, "LOAD_ERROR")

        if token != self._load_token:
            sorter.close()
            return self.status
        self._sorter = sorter
        self._unsubscribe = sorter.subscribe(lambda _snapshot: self._publish())
        self.status = BoardStatus.READY
        snapshot = sorter.snapshot()
        logger.info(
            "Board %s ready (%d items, %d categories)", self.name,
            snapshot.home_count, len(snapshot.categories),
            extra={"board": self.name},
        )
        self._publish()
        return self.status

    def close(self) -> None:
        """Teardown: disarm every timer and drop listeners."""
        self._load_token += 1
        self._teardown_sorter()
        self._listeners.clear()

    # --- Transitions -----------------------------------------------------------

    def move(self, item_id: ItemId, home_index: int | None = None) -> bool:
        return self._ready_sorter().move_to_category(item_id, home_index)

    def return_now(self, item_id: ItemId) -> bool:
        return self._ready_sorter().return_now(item_id)

    def reset(self) -> bool:
        self._ready_sorter().reset()
        return True

    # --- Subscriptions ---------------------------------------------------------

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """Call listener after every status or sorter state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Internals -------------------------------------------------------------

    def _fail(self, token: int, message: str, code: str) -> BoardStatus:
        if token != self._load_token:
            return self.status
        self.status = BoardStatus.FAILED
        self.error = message
        logger.error(
            "Board %s failed to load: %s", self.name, message,
            extra={"board": self.name, "error_code": code},
        )
        self._publish()
        return self.status

    def _ready_sorter(self) -> Sorter:
        if self.status is not BoardStatus.READY or self._sorter is None:
            raise BoardNotReadyError(self.name, self.status.value)
        return self._sorter

    def _teardown_sorter(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._sorter is not None:
            self._sorter.close()
            self._sorter = None

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self)


class BoardRegistry:
    """Boards by name, in registration order."""

    def __init__(self, boards: list[Board] | None = None):
        self._boards: dict[str, Board] = {}
        for board in boards or []:
            self.add(board)

    def add(self, board: Board) -> None:
        self._boards[board.name] = board

    def get(self, name: str) -> Board:
        board = self._boards.get(name)
        if board is None:
            raise BoardNotFoundError(name)
        return board

    def __iter__(self) -> Iterator[Board]:
        return iter(self._boards.values())

    def __len__(self) -> int:
        return len(self._boards)

    @property
    def all_settled(self) -> bool:
        """True once no board is still loading."""
        return all(b.status is not BoardStatus.LOADING for b in self)

    def close_all(self) -> None:
        for board in self:
            board.close()
        logger.info("Closed %d boards", len(self))


PRODUCE_BOARD = BoardName("produce")
USERS_BOARD = BoardName("users")


def build_registry(
    settings: Settings,
    *,
    scheduler: Scheduler | None = None,
    users_transport: httpx.AsyncBaseTransport | None = None,
) -> BoardRegistry:
    """The two boards the application serves, configured from settings."""
    delay = settings.return_delay_ms
    return BoardRegistry([
        Board(
            PRODUCE_BOARD, "Fruit & Vegetable Sorter", produce_loader(settings),
            return_delay_ms=delay, scheduler=scheduler,
        ),
        Board(
            USERS_BOARD, "Users by Department",
            users_loader(settings, transport=users_transport),
            return_delay_ms=delay, scheduler=scheduler,
        ),
    ])
