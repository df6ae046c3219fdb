"""Produce Catalog - loads the static fruit/vegetable records."""

import json
from importlib import resources
from pathlib import Path
from typing import Any

from app.core.errors import CatalogLoadError

_PACKAGED_CATALOG = "produce.json"


def _read_text(path: str | None) -> tuple[str, str]:
    if path:
        return Path(path).read_text(encoding="utf-8"), path
    source = resources.files("app.data").joinpath(_PACKAGED_CATALOG)
    return source.read_text(encoding="utf-8"), str(source)


def load_produce_records(path: str | None = None) -> list[dict[str, Any]]:
    """Return the catalog as a list of {"type", "name"} dicts.

    Reads the packaged catalog unless an explicit path is given.
    """
    label = path or _PACKAGED_CATALOG
    try:
        text, label = _read_text(path)
        records = json.loads(text)
    except OSError as e:
        raise CatalogLoadError(str(e), label)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"invalid JSON ({e})", label)
    if not isinstance(records, list) or not all(
        isinstance(r, dict) for r in records
    ):
        raise CatalogLoadError("expected a list of objects", label)
    return records
