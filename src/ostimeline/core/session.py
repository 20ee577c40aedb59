"""
TimelineSession: the host-owned mutable container around :class:`FilterState`.

The core functions are pure; something still has to hold "the current
filters" between user intents. A session does that and nothing else:

- every intent (``set_query``, ``toggle_type``, ``set_range_to``, ...) swaps
  in a new immutable `FilterState` and bumps a revision counter;
- every transition is recorded as a :class:`SessionSnapshot` so a CLI or
  test can inspect how the current state was reached;
- :meth:`view` runs filter → group synchronously against the latest state.

`last_view` is ``None`` until the first :meth:`view` call and after every
transition, which keeps "not yet computed" distinct from an empty result.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from ostimeline.core.contracts.entry import ENTRY_TYPES, FAMILIES, EntryType, Family
from ostimeline.core.contracts.state import FilterState
from ostimeline.core.contracts.view import EntryDetail, TimelineView
from ostimeline.core.dataset import Dataset
from ostimeline.core.errors import EntryNotFoundError
from ostimeline.core.filtering import filter_entries
from ostimeline.core.grouping import group_by_decade
from ostimeline.core.selection import toggle
from ostimeline.core.settings import get_logger

logger = get_logger(__name__)

HISTORY_LIMIT = 256


def build_view(dataset: Dataset, state: FilterState) -> TimelineView:
    """Run the filter → group pipeline for one state snapshot."""
    entries = filter_entries(dataset, state)
    return TimelineView(
        count=len(entries),
        entries=tuple(entries),
        decades=tuple(group_by_decade(entries)),
    )


def entry_detail(dataset: Dataset, entry_id: str) -> EntryDetail:
    """Return ``entry_id`` with its resolvable related entries."""
    entry = dataset.get(entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    return EntryDetail(entry=entry, related=dataset.resolve_related(entry))


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """
    Immutable record of a session transition.

    Attributes
    ----------
    timestamp : str
        ISO-8601 UTC timestamp with a trailing ``Z``.
    revision : int
        Session revision after the transition.
    note : str
        The intent that caused it, e.g. ``"toggle_family Linux"``.
    state : dict[str, Any]
        JSON-safe dump of the resulting `FilterState`.
    """

    timestamp: str
    revision: int
    note: str
    state: dict[str, Any] = field(default_factory=dict)


class TimelineSession:
    """Current filters, expanded entry and transition history for one user.

    Only the newest `history_limit` snapshots are kept; `revision` keeps
    counting past it.
    """

    __slots__ = ("dataset", "_state", "_expanded", "_rev", "_history", "_view")

    def __init__(self, dataset: Dataset, history_limit: int = HISTORY_LIMIT) -> None:
        self.dataset = dataset
        self._state = FilterState.initial(dataset.min_year, dataset.max_year)
        self._expanded: str | None = None
        self._rev = 0
        self._history: deque[SessionSnapshot] = deque(maxlen=history_limit)
        self._view: TimelineView | None = None

    # ------------------------------ Accessors -------------------------------

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def expanded(self) -> str | None:
        """Id of the entry whose details are open, if any."""
        return self._expanded

    @property
    def revision(self) -> int:
        return self._rev

    @property
    def last_view(self) -> TimelineView | None:
        return self._view

    def history(self) -> tuple[SessionSnapshot, ...]:
        return tuple(self._history)

    # ------------------------------ Intents ---------------------------------

    def set_query(self, query: str) -> FilterState:
        return self._apply(self._state.with_query(query), f"set_query {query!r}")

    def toggle_type(self, entry_type: EntryType) -> FilterState:
        chosen = toggle(self._state.selected_types, ENTRY_TYPES, entry_type)
        return self._apply(self._state.with_types(chosen), f"toggle_type {entry_type.value}")

    def toggle_family(self, family: Family) -> FilterState:
        chosen = toggle(self._state.selected_families, FAMILIES, family)
        return self._apply(self._state.with_families(chosen), f"toggle_family {family.value}")

    def set_range_from(self, year: int) -> FilterState:
        new = self._state.with_range_from(year, self.dataset.min_year)
        return self._apply(new, f"set_range_from {year}")

    def set_range_to(self, year: int) -> FilterState:
        new = self._state.with_range_to(year, self.dataset.max_year)
        return self._apply(new, f"set_range_to {year}")

    def reset(self) -> FilterState:
        """Back to the fresh-load state; the expanded entry stays open."""
        initial = FilterState.initial(self.dataset.min_year, self.dataset.max_year)
        return self._apply(initial, "reset")

    def toggle_expanded(self, entry_id: str) -> str | None:
        """Open ``entry_id``'s details, or close them if already open."""
        self._expanded = None if self._expanded == entry_id else entry_id
        return self._expanded

    # ------------------------------ Derived ---------------------------------

    def view(self) -> TimelineView:
        """Recompute and cache the timeline for the current state."""
        self._view = build_view(self.dataset, self._state)
        return self._view

    def detail(self, entry_id: str) -> EntryDetail:
        return entry_detail(self.dataset, entry_id)

    # ------------------------------ Internals -------------------------------

    def _apply(self, new_state: FilterState, note: str) -> FilterState:
        self._state = new_state
        self._view = None
        self._rev += 1
        self._history.append(
            SessionSnapshot(
                timestamp=datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
                revision=self._rev,
                note=note,
                state=new_state.model_dump(mode="json"),
            )
        )
        logger.debug("rev %d: %s", self._rev, note)
        return new_state


__all__ = ["TimelineSession", "SessionSnapshot", "build_view", "entry_detail"]
