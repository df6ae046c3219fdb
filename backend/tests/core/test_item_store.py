"""Item Store - tests for the ordered home list.

Tests cover:
    - Construction sorts by original_rank
    - remove_at tolerates stale indices (out of range, wrong item)
    - insert_preserving_order restores rank order and is idempotent
"""

from app.core.domain_types import CategoryId, Item, ItemId
from app.core.item_store import ItemStore


def _item(rank: int) -> Item:
    return Item(
        id=ItemId(f"item-{rank}"), category=CategoryId("Fruit"),
        display_name=f"Item {rank}", original_rank=rank,
    )


def _ranks(store: ItemStore) -> list[int]:
    return [item.original_rank for item in store]


def test_construction_orders_by_rank():
    store = ItemStore([_item(2), _item(0), _item(1)])
    assert _ranks(store) == [0, 1, 2]


def test_remove_at_returns_item():
    store = ItemStore([_item(0), _item(1), _item(2)])
    removed = store.remove_at(1)
    assert removed.id == "item-1"
    assert _ranks(store) == [0, 2]


def test_remove_at_out_of_range_is_noop():
    store = ItemStore([_item(0)])
    assert store.remove_at(5) is None
    assert store.remove_at(-1) is None
    assert len(store) == 1


def test_remove_at_with_stale_expected_id_is_noop():
    store = ItemStore([_item(0), _item(1)])
    assert store.remove_at(0, expected_id=ItemId("item-1")) is None
    assert _ranks(store) == [0, 1]


def test_insert_restores_original_position():
    items = [_item(r) for r in range(4)]
    store = ItemStore(items)
    store.remove_at(2)
    assert store.insert_preserving_order(items[2])
    assert _ranks(store) == [0, 1, 2, 3]


def test_insert_is_idempotent():
    items = [_item(0), _item(1)]
    store = ItemStore(items)
    assert not store.insert_preserving_order(items[1])
    assert len(store) == 2


def test_insert_into_empty_store():
    store = ItemStore()
    store.insert_preserving_order(_item(3))
    store.insert_preserving_order(_item(1))
    assert _ranks(store) == [1, 3]


def test_membership_and_index_by_id():
    store = ItemStore([_item(0), _item(1)])
    assert ItemId("item-1") in store
    assert store.index_of(ItemId("item-1")) == 1
    assert store.index_of(ItemId("missing")) is None


def test_items_projection_is_a_copy():
    store = ItemStore([_item(0)])
    snapshot = store.items
    store.remove_at(0)
    assert len(snapshot) == 1
