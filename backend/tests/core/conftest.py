"""Core test fixtures - virtual clock and small seed sets."""

import pytest

from app.core.domain_types import CategoryId, ItemId, ItemSeed, SeedSet
from app.core.sorter import Sorter
from tests.fakes import VirtualClock

FRUIT = CategoryId("Fruit")
VEGETABLE = CategoryId("Vegetable")


def make_seed_set(*pairs: tuple[str, str]) -> SeedSet:
    """(name, category) pairs -> SeedSet over Fruit/Vegetable."""
    return SeedSet(
        seeds=tuple(
            ItemSeed(id=ItemId(f"{name}-{i}"), category=CategoryId(cat), display_name=name)
            for i, (name, cat) in enumerate(pairs)
        ),
        categories=(FRUIT, VEGETABLE),
    )


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def produce_seeds():
    """5 records: 3 Fruit, 2 Vegetable."""
    return make_seed_set(
        ("Apple", "Fruit"),
        ("Broccoli", "Vegetable"),
        ("Banana", "Fruit"),
        ("Carrot", "Vegetable"),
        ("Mango", "Fruit"),
    )


@pytest.fixture
def sorter(produce_seeds, clock):
    s = Sorter(produce_seeds, clock, return_delay_ms=5000, name="produce")
    yield s
    s.close()
