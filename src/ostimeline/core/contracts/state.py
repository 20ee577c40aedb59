"""FilterState: an immutable snapshot of the user's current filters.

The host (CLI invocation, HTTP request, or :class:`TimelineSession`) owns the
mutable container; core functions only ever receive a snapshot and every
`with_*` helper returns a new instance.

Range clamping
--------------
Range endpoints are clamped, never rejected:

- moving `from` clamps it to ``[min_year, range_to]``
- moving `to` clamps it to ``[range_from, max_year]``

so ``range_from <= range_to`` holds after any sequence of moves that started
from a valid state.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from .entry import ENTRY_TYPES, FAMILIES, EntryType, Family


def clamp(n: int, lo: int, hi: int) -> int:
    """Clamp ``n`` into ``[lo, hi]``."""
    return max(lo, min(hi, n))


class FilterState(BaseModel):
    """Query, facet selections and year range currently in effect."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(default="")
    selected_types: frozenset[EntryType] = Field(default_factory=lambda: frozenset(ENTRY_TYPES))
    selected_families: frozenset[Family] = Field(default_factory=lambda: frozenset(FAMILIES))
    range_from: int
    range_to: int

    @classmethod
    def initial(cls, min_year: int, max_year: int) -> FilterState:
        """Fresh-load state: empty query, every facet selected, full range."""
        return cls(range_from=min_year, range_to=max_year)

    def with_query(self, query: str) -> FilterState:
        return self.model_copy(update={"query": query})

    def with_types(self, types: Iterable[EntryType]) -> FilterState:
        return self.model_copy(update={"selected_types": frozenset(types)})

    def with_families(self, families: Iterable[Family]) -> FilterState:
        return self.model_copy(update={"selected_families": frozenset(families)})

    def with_range_from(self, value: int, min_year: int) -> FilterState:
        """Move the lower endpoint, clamped against the dataset floor and `range_to`."""
        return self.model_copy(update={"range_from": clamp(value, min_year, self.range_to)})

    def with_range_to(self, value: int, max_year: int) -> FilterState:
        """Move the upper endpoint, clamped against `range_from` and the dataset ceiling."""
        return self.model_copy(update={"range_to": clamp(value, self.range_from, max_year)})


__all__ = ["FilterState", "clamp"]
