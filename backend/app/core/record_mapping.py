"""Record Mapping - raw collaborator records -> SeedSet (pure, no IO).

Invariants:
    - Produce ids are "{name}-{index}"; user ids are str(user["id"])
    - A produce type outside the declared categories goes to the fallback category
    - User categories are the distinct departments, sorted lexicographically
    - A missing or empty department maps to the unknown-department sentinel
    - Records that are not objects, or departments that are not text, are rejected
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from app.core.domain_types import (
    UNKNOWN_DEPARTMENT,
    CategoryId,
    ItemId,
    ItemSeed,
    SeedSet,
)
from app.core.errors import InvalidBoardDataError


def map_produce_records(
    records: Iterable[Mapping[str, Any]],
    categories: Sequence[str],
    fallback_category: str,
) -> SeedSet:
    """Static catalog records ({"type", "name"}) -> fixed-category SeedSet."""
    declared = tuple(CategoryId(c) for c in categories)
    seeds: list[ItemSeed] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InvalidBoardDataError(f"Produce record {index} is not an object")
        name = str(record.get("name", "")).strip()
        if not name:
            raise InvalidBoardDataError(f"Produce record {index} has no name")
        kind = str(record.get("type", ""))
        category = CategoryId(kind) if kind in declared else CategoryId(fallback_category)
        seeds.append(ItemSeed(
            id=ItemId(f"{name}-{index}"),
            category=category,
            display_name=name,
            details={"type": category},
        ))
    return SeedSet(seeds=tuple(seeds), categories=declared)


def _department_of(user: Mapping[str, Any], unknown: str) -> CategoryId:
    company = user.get("company") or {}
    department = company.get("department") if isinstance(company, Mapping) else None
    if department is not None and not isinstance(department, str):
        raise InvalidBoardDataError(
            f"User {user.get('id')} has a non-text department: {department!r}",
        )
    return CategoryId(department or unknown)


def map_user_records(
    users: Iterable[Mapping[str, Any]],
    unknown_department: str = UNKNOWN_DEPARTMENT,
) -> SeedSet:
    """Remote user records -> SeedSet with data-derived department categories."""
    seeds: list[ItemSeed] = []
    for index, user in enumerate(users):
        if not isinstance(user, Mapping):
            raise InvalidBoardDataError(
                f"User record {index} is not an object: {user!r}",
            )
        if user.get("id") is None:
            raise InvalidBoardDataError("User record without an id")
        department = _department_of(user, unknown_department)
        name = f"{user.get('firstName', '')} {user.get('lastName', '')}".strip()
        seeds.append(ItemSeed(
            id=ItemId(str(user["id"])),
            category=department,
            display_name=name,
            details={"department": department},
        ))
    departments = sorted({seed.category for seed in seeds})
    return SeedSet(seeds=tuple(seeds), categories=tuple(departments))
