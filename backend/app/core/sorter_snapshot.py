"""Sorter Snapshot - immutable read projection handed to the presentation layer.

Invariants:
    - Snapshots share no mutable state with the Sorter that produced them
    - Category order is the sorter's declaration order; bucket order is arrival order
"""

from dataclasses import dataclass, field

from app.core.domain_types import CategoryId, Item, ItemId


@dataclass(frozen=True)
class SorterSnapshot:
    """Point-in-time copy of home, buckets and armed timers."""

    home: tuple[Item, ...] = ()
    buckets: tuple[tuple[CategoryId, tuple[Item, ...]], ...] = ()
    armed: frozenset[ItemId] = field(default_factory=frozenset)

    @property
    def home_count(self) -> int:
        return len(self.home)

    @property
    def categories(self) -> tuple[CategoryId, ...]:
        return tuple(category for category, _ in self.buckets)

    @property
    def away_count(self) -> int:
        return sum(len(items) for _, items in self.buckets)

    def items_in(self, category: CategoryId) -> tuple[Item, ...]:
        for name, items in self.buckets:
            if name == category:
                return items
        return ()

    def size_of(self, category: CategoryId) -> int:
        return len(self.items_in(category))

    @property
    def sizes(self) -> dict[CategoryId, int]:
        """Bucket sizes, as shown in category headers."""
        return {category: len(items) for category, items in self.buckets}
