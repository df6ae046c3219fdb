"""Board Registry - tests for board loading, failure state and teardown.

Tests cover:
    - Users board derives department categories from the data
    - Failed load exposes the message and no items, no categories
    - Mutations on a board that is not ready raise BoardNotReadyError
    - Reload and close dispose of the previous sorter's timers
"""

import asyncio

import pytest

from app.core.domain_types import BoardStatus, ItemId
from app.core.errors import BoardNotFoundError, BoardNotReadyError, InvalidBoardDataError
from app.services.board_registry import PRODUCE_BOARD, USERS_BOARD, Board, build_registry
from tests.fakes import users_transport


async def test_users_board_departments(registry):
    board = registry.get(USERS_BOARD)
    assert board.status is BoardStatus.READY
    snap = board.snapshot()
    assert snap.home_count == 3
    assert snap.sizes == {"Engineering": 0, "Marketing": 0}

    assert board.move(ItemId("2"))

    snap = board.snapshot()
    assert snap.sizes == {"Engineering": 0, "Marketing": 1}
    assert snap.home_count == 2


async def test_produce_board_uses_packaged_catalog(registry):
    snap = registry.get(PRODUCE_BOARD).snapshot()
    assert snap.home_count == 11
    assert snap.categories == ("Fruit", "Vegetable")


@pytest.mark.parametrize("transport", [users_transport(status_code=500)])
async def test_failed_load_exposes_error_and_nothing_else(registry):
    board = registry.get(USERS_BOARD)
    assert board.status is BoardStatus.FAILED
    assert board.error == "HTTP 500"
    assert board.sorter is None
    snap = board.snapshot()
    assert snap.home_count == 0
    assert snap.categories == ()


@pytest.mark.parametrize("transport", [users_transport(status_code=500)])
async def test_mutation_on_failed_board_raises(registry):
    board = registry.get(USERS_BOARD)
    with pytest.raises(BoardNotReadyError) as exc_info:
        board.move(ItemId("1"))
    assert exc_info.value.status == "failed"
    with pytest.raises(BoardNotReadyError):
        board.reset()


@pytest.mark.parametrize("transport", [users_transport(payload={"users": []})])
async def test_empty_directory_fails_without_categories(registry):
    board = registry.get(USERS_BOARD)
    assert board.status is BoardStatus.FAILED
    assert "category" in board.error


async def test_new_board_is_loading_until_loaded(clock):
    release = asyncio.Event()

    async def slow_loader():
        await release.wait()
        raise InvalidBoardDataError("never mind")

    board = Board("slow", "Slow", slow_loader, scheduler=clock)
    task = asyncio.create_task(board.load())
    await asyncio.sleep(0)
    assert board.status is BoardStatus.LOADING
    with pytest.raises(BoardNotReadyError):
        board.move(ItemId("x"))

    release.set()
    assert await task is BoardStatus.FAILED
    assert board.error == "never mind"


async def test_reload_cancels_pending_returns(registry, clock):
    board = registry.get(PRODUCE_BOARD)
    old_sorter = board.sorter
    board.move(ItemId("Apple-0"))
    assert clock.pending == 1

    await board.load()

    assert old_sorter.closed
    assert clock.pending == 0
    assert board.snapshot().home_count == 11


async def test_board_listeners_see_timer_returns(registry, clock):
    board = registry.get(PRODUCE_BOARD)
    counts = []
    board.subscribe(lambda b: counts.append(b.snapshot().home_count))

    board.move(ItemId("Apple-0"))
    clock.advance_ms(5000)

    assert counts == [10, 11]


async def test_close_all_disarms_every_board(registry, clock):
    registry.get(PRODUCE_BOARD).move(ItemId("Apple-0"))
    registry.get(USERS_BOARD).move(ItemId("1"))
    assert clock.pending == 2

    registry.close_all()

    assert clock.pending == 0
    assert registry.get(PRODUCE_BOARD).sorter is None


def test_unknown_board(settings):
    with pytest.raises(BoardNotFoundError):
        build_registry(settings).get("nope")


async def test_registry_settles_after_loads(settings, clock):
    reg = build_registry(settings, scheduler=clock, users_transport=users_transport())
    assert not reg.all_settled
    for board in reg:
        await board.load()
    assert reg.all_settled
    reg.close_all()


@pytest.mark.parametrize("transport", [
    users_transport(payload={"users": [1, 2]}),
    users_transport(payload={"users": [
        {"id": 1, "firstName": "Ann", "company": {"department": ["Engineering"]}},
    ]}),
    users_transport(payload={"users": [
        {"id": 1, "firstName": "Ann", "company": {"department": "Engineering"}},
        {"id": 2, "firstName": "Bob", "company": {"department": 7}},
    ]}),
], ids=["non-object-user", "list-department", "mixed-department-types"])
async def test_malformed_users_fail_the_board(registry):
    board = registry.get(USERS_BOARD)
    assert board.status is BoardStatus.FAILED
    assert board.error
    assert board.sorter is None
    snap = board.snapshot()
    assert snap.home_count == 0
    assert snap.categories == ()
    assert registry.all_settled


async def test_unexpected_loader_error_fails_the_board(clock):
    async def broken_loader():
        raise RuntimeError("directory returned garbage")

    board = Board("broken", "Broken", broken_loader, scheduler=clock)

    assert await board.load() is BoardStatus.FAILED
    assert board.error == "directory returned garbage"
    assert board.sorter is None


async def test_failed_reload_replaces_ready_state(registry, monkeypatch):
    board = registry.get(USERS_BOARD)
    assert board.status is BoardStatus.READY

    async def broken_loader():
        raise KeyError("users")

    monkeypatch.setattr(board, "_loader", broken_loader)
    await board.load()

    assert board.status is BoardStatus.FAILED
    assert board.error == "'users'"
    assert board.snapshot().home_count == 0
