"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - ItemId and CategoryId wrap str; never use bare str for them in domain logic
    - Item is frozen: id, category and original_rank never change after creation
    - Item.details is a read-only mapping (a copy of what the record supplied)
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ItemId = NewType("ItemId", str)
CategoryId = NewType("CategoryId", str)
BoardName = NewType("BoardName", str)


# ─── Defaults ────────────────────────────────────────────────────

DEFAULT_RETURN_DELAY_MS = 5000
UNKNOWN_DEPARTMENT = CategoryId("Unknown")


# ─── Enums ───────────────────────────────────────────────────────

class Location(str, Enum):
    """Where an item currently is. Derived from container membership."""
    HOME = "home"
    AWAY = "away"


class ReturnOrigin(str, Enum):
    """What triggered an Away -> Home transition."""
    AUTO = "auto"
    MANUAL = "manual"


class BoardStatus(str, Enum):
    """Board lifecycle: loading until the data collaborator answers."""
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


# ─── Records ─────────────────────────────────────────────────────

def _frozen_details(details: Mapping[str, str]) -> Mapping[str, str]:
    """Read-only copy, so items handed out in snapshots cannot be edited."""
    return MappingProxyType(dict(details))


@dataclass(frozen=True)
class ItemSeed:
    """One raw record already mapped to its id and category."""
    id: ItemId
    category: CategoryId
    display_name: str
    details: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "details", _frozen_details(self.details))


@dataclass(frozen=True)
class Item:
    """A sortable item. original_rank is used only for reinsertion order."""
    id: ItemId
    category: CategoryId
    display_name: str
    original_rank: int
    details: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "details", _frozen_details(self.details))


@dataclass(frozen=True)
class SeedSet:
    """Everything a Sorter needs to initialize (and to reset)."""
    seeds: tuple[ItemSeed, ...]
    categories: tuple[CategoryId, ...]
