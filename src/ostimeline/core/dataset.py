"""
Dataset loading and lookup.

The curated entries ship as a declarative JSON array
(``ostimeline/data/entries.json``). This module reads that file once,
validates every record against :class:`Entry`, and wraps the result in an
immutable :class:`Dataset`.

Validation
----------
- Each record must match the closed `Entry` schema (unknown keys, unknown
  type/family/platform values and empty platform lists are rejected).
- `id` must be unique across the dataset.
- ``yearEnd >= yearStart`` is expected of curators but not checked.

Any failure surfaces as :class:`DatasetError` naming the offending file.

Lookup
------
`related` references are resolved lazily; ids that do not exist are skipped
silently, so a dangling reference never breaks a detail view.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ostimeline.core.contracts.entry import Entry
from ostimeline.core.errors import DatasetError
from ostimeline.core.settings import get_logger, load_settings

logger = get_logger(__name__)

_ENTRIES_ADAPTER = TypeAdapter(list[Entry])
BUNDLED_DATASET = "entries.json"


class Dataset:
    """Immutable, ordered collection of entries with derived year bounds.

    Declaration order is preserved; it is the tie-break order when the filter
    engine sorts entries sharing a `year_start`.
    """

    __slots__ = ("_entries", "_by_id", "min_year", "max_year")

    def __init__(self, entries: Iterable[Entry]) -> None:
        self._entries: tuple[Entry, ...] = tuple(entries)
        if not self._entries:
            raise ValueError("A dataset needs at least one entry")

        by_id: dict[str, Entry] = {}
        for entry in self._entries:
            if entry.id in by_id:
                raise ValueError(f"Duplicate entry id {entry.id!r}")
            by_id[entry.id] = entry
        self._by_id = by_id

        self.min_year: int = min(e.year_start for e in self._entries)
        self.max_year: int = max(e.year_end_or_start for e in self._entries)

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    def get(self, entry_id: str) -> Entry | None:
        """Return the entry with ``entry_id`` or None."""
        return self._by_id.get(entry_id)

    def resolve_related(self, entry: Entry) -> tuple[Entry, ...]:
        """Return the entries referenced by ``entry.related`` that exist, in order."""
        found = (self._by_id.get(rid) for rid in entry.related or ())
        return tuple(r for r in found if r is not None)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        return f"Dataset({len(self)} entries, {self.min_year}-{self.max_year})"


def parse_entries(raw: Any, source: Path | str = "<memory>") -> Dataset:
    """Validate already-decoded JSON into a :class:`Dataset`."""
    try:
        entries = _ENTRIES_ADAPTER.validate_python(raw)
        return Dataset(entries)
    except ValidationError as exc:
        raise DatasetError(source, f"{exc.error_count()} schema error(s): {exc}") from exc
    except ValueError as exc:
        raise DatasetError(source, str(exc)) from exc


def _read_text(path: Path | None) -> tuple[str, str]:
    if path is not None:
        try:
            return path.read_text(encoding="utf-8"), str(path)
        except OSError as exc:
            raise DatasetError(path, f"cannot read file ({exc})") from exc

    resource = resources.files("ostimeline").joinpath("data", BUNDLED_DATASET)
    return resource.read_text(encoding="utf-8"), f"ostimeline/data/{BUNDLED_DATASET}"


def load_dataset(path: Path | None = None) -> Dataset:
    """Load and validate a dataset.

    Parameters
    ----------
    path:
        JSON file to read. Falls back to `OSTIMELINE_DATASET_PATH`, then to the
        bundled dataset.
    """
    if path is None:
        path = load_settings().dataset_path

    text, source = _read_text(path)
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatasetError(source, f"invalid JSON ({exc})") from exc

    dataset = parse_entries(raw, source)
    logger.info(
        "Loaded %d entries from %s (%d-%d)",
        len(dataset),
        source,
        dataset.min_year,
        dataset.max_year,
    )
    return dataset


@lru_cache(maxsize=1)
def default_dataset() -> Dataset:
    """Load the configured dataset once per process.

    Tests that change `OSTIMELINE_DATASET_PATH` call
    `default_dataset.cache_clear()` afterwards.
    """
    return load_dataset()


__all__ = ["Dataset", "parse_entries", "load_dataset", "default_dataset"]
