"""Board Loaders - fetch raw records from a data collaborator and map them to a SeedSet.

Invariants:
    - A loader either returns a complete SeedSet or raises a SortboardError
    - Loaders never touch a Sorter; the Board decides what to do with the result

Design Decisions:
    - Loaders are zero-argument coroutines so Board.load() treats both boards alike
    - Static catalog read wrapped in a coroutine for the same signature as the remote fetch
"""

import logging
from collections.abc import Awaitable, Callable

import httpx

from app.config import Settings
from app.core.domain_types import SeedSet
from app.core.record_mapping import map_produce_records, map_user_records
from app.infrastructure.produce_catalog import load_produce_records
from app.infrastructure.user_directory_client import UserDirectoryClient

logger = logging.getLogger(__name__)

SeedLoader = Callable[[], Awaitable[SeedSet]]


def produce_loader(settings: Settings) -> SeedLoader:
    """Loader for the fixed Fruit/Vegetable board."""

    async def load() -> SeedSet:
        records = load_produce_records(settings.produce_catalog_path)
        seed_set = map_produce_records(
            records,
            settings.produce_categories,
            settings.produce_fallback_category,
        )
        logger.info(
            "Loaded %d produce records", len(seed_set.seeds),
            extra={"board": "produce"},
        )
        return seed_set

    return load


def users_loader(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
) -> SeedLoader:
    """Loader for the department board, categories derived from the data."""
    client = UserDirectoryClient(
        settings.users_api_url,
        timeout_seconds=settings.users_api_timeout_seconds,
        transport=transport,
    )

    async def load() -> SeedSet:
        users = await client.fetch_users()
        return map_user_records(users, settings.users_unknown_department)

    return load
