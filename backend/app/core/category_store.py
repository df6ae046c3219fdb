"""Category Store - per-category buckets of items currently away from home."""

import logging
from collections.abc import Iterable

from app.core.domain_types import CategoryId, Item, ItemId

logger = logging.getLogger(__name__)


class CategoryStore:
    """Buckets keyed by category id, each in arrival order."""

    def __init__(self, categories: Iterable[CategoryId]):
        self._buckets: dict[CategoryId, list[Item]] = {
            category: [] for category in categories
        }

    @property
    def categories(self) -> tuple[CategoryId, ...]:
        return tuple(self._buckets)

    def append(self, category: CategoryId, item: Item) -> None:
        """Add item to the end of its bucket. Unknown category gets a new bucket."""
        bucket = self._buckets.get(category)
        if bucket is None:
            logger.warning(
                "Unknown category %r, creating bucket", category,
                extra={"category": category, "item_id": item.id},
            )
            bucket = self._buckets[category] = []
        bucket.append(item)

    def remove(self, category: CategoryId, item_id: ItemId) -> bool:
        """Remove item from the bucket. False if it was not there."""
        bucket = self._buckets.get(category, [])
        for index, item in enumerate(bucket):
            if item.id == item_id:
                del bucket[index]
                return True
        return False

    def size_of(self, category: CategoryId) -> int:
        return len(self._buckets.get(category, ()))

    def items_in(self, category: CategoryId) -> tuple[Item, ...]:
        return tuple(self._buckets.get(category, ()))

    def contains(self, category: CategoryId, item_id: ItemId) -> bool:
        return any(it.id == item_id for it in self._buckets.get(category, ()))
