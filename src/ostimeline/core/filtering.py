"""
Filter Engine: dataset + filter state → ordered list of entries.

An entry is kept when all four tests pass:

1. **Range overlap** - its active interval ``[year_start, year_end ?? year_start]``
   intersects ``[range_from, range_to]``. Entries that start before or end
   after the range but touch it are kept.
2. **Family** - ``entry.family`` is selected.
3. **Type** - ``entry.type`` is selected.
4. **Text** - the trimmed, lower-cased query is empty, or is a substring of
   :meth:`Entry.searchable_text`.

The result is sorted ascending by `year_start`. Python's sort is stable, so
entries sharing a start year keep their dataset declaration order.
"""

from __future__ import annotations

from collections.abc import Iterable

from ostimeline.core.contracts.entry import Entry
from ostimeline.core.contracts.state import FilterState


def overlaps_range(entry: Entry, range_from: int, range_to: int) -> bool:
    """Interval-overlap test between an entry's active years and the range."""
    return entry.year_start <= range_to and entry.year_end_or_start >= range_from


def normalize_query(query: str) -> str:
    return query.strip().lower()


def matches_query(entry: Entry, needle: str) -> bool:
    """Case-insensitive substring match; ``needle`` must already be normalized."""
    if not needle:
        return True
    return needle in entry.searchable_text()


def filter_entries(entries: Iterable[Entry], state: FilterState) -> list[Entry]:
    """Return the entries passing every filter in `state`, ordered by start year."""
    needle = normalize_query(state.query)
    kept = [
        e
        for e in entries
        if overlaps_range(e, state.range_from, state.range_to)
        and e.family in state.selected_families
        and e.type in state.selected_types
        and matches_query(e, needle)
    ]
    return sorted(kept, key=lambda e: e.year_start)


__all__ = ["filter_entries", "overlaps_range", "matches_query", "normalize_query"]
