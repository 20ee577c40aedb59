"""Derived, read-only views handed to renderers (CLI, HTTP)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .entry import Entry


class DecadeBucket(BaseModel):
    """Entries whose `year_start` falls in ``[decade, decade + 9]``, year-ascending."""

    model_config = ConfigDict(frozen=True)

    decade: int
    items: tuple[Entry, ...]


class TimelineView(BaseModel):
    """Result of one filter → group recomputation.

    An empty view (``count == 0``) is a valid "no results" state.
    """

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    entries: tuple[Entry, ...] = Field(default=())
    decades: tuple[DecadeBucket, ...] = Field(default=())

    @property
    def is_empty(self) -> bool:
        return self.count == 0


class EntryDetail(BaseModel):
    """An entry together with its resolvable `related` entries."""

    model_config = ConfigDict(frozen=True)

    entry: Entry
    related: tuple[Entry, ...] = Field(default=())


__all__ = ["DecadeBucket", "TimelineView", "EntryDetail"]
