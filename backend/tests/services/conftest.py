"""Service test fixtures - boards on a virtual clock, mocked user directory, API client.

Invariants:
    - No test touches the network: the users board always goes through MockTransport
    - Timers never run on the real event loop; tests advance the VirtualClock

Design Decisions:
    - ASGITransport does not run the lifespan, so the client fixture installs its
      own registry on app.state and closes it afterwards
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import app
from app.services.board_registry import PRODUCE_BOARD, USERS_BOARD, build_registry
from tests.fakes import USERS_URL, VirtualClock, users_transport


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def settings():
    return Settings(users_api_url=USERS_URL, return_delay_ms=5000)


@pytest.fixture
def transport():
    """Override per test to simulate directory failures."""
    return users_transport()


@pytest.fixture
async def registry(settings, clock, transport):
    reg = build_registry(settings, scheduler=clock, users_transport=transport)
    await reg.get(PRODUCE_BOARD).load()
    await reg.get(USERS_BOARD).load()
    yield reg
    reg.close_all()


@pytest.fixture
async def client(registry):
    """FastAPI test client with the test registry installed."""
    previous = getattr(app.state, "boards", None)
    app.state.boards = registry
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.boards = previous
