"""Decade bucketing of an already-filtered, year-sorted entry list."""

from __future__ import annotations

from collections.abc import Sequence

from ostimeline.core.contracts.entry import Entry
from ostimeline.core.contracts.view import DecadeBucket


def year_to_decade(year: int) -> int:
    """Return the decade a year belongs to, e.g. ``1991 -> 1990``, ``2000 -> 2000``."""
    return (year // 10) * 10


def group_by_decade(entries: Sequence[Entry]) -> list[DecadeBucket]:
    """Partition ``entries`` into decade buckets keyed on `year_start`.

    Items keep their input order within a bucket; buckets are emitted in
    ascending decade order. An empty input yields an empty list.
    """
    buckets: dict[int, list[Entry]] = {}
    for entry in entries:
        buckets.setdefault(year_to_decade(entry.year_start), []).append(entry)
    return [DecadeBucket(decade=d, items=tuple(buckets[d])) for d in sorted(buckets)]


__all__ = ["year_to_decade", "group_by_decade"]
