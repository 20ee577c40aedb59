"""
Facet chip toggling with "isolate / reset" semantics.

Each facet (entry type, family) is an independent instance of the same
state machine over a subset ``S`` of the facet's universe ``U``:

- ``S == U``         → clicking ``x`` isolates it: ``{x}``
- ``S == {x}``       → clicking ``x`` again resets: ``U``
- otherwise          → plain toggle of ``x``

For a one-member universe the first two rules coincide and every click
resets to ``U``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")


def toggle(selected: Iterable[T], universe: Sequence[T], clicked: T) -> frozenset[T]:
    """Return the selection after clicking ``clicked``.

    Raises
    ------
    ValueError
        If ``clicked`` is not a member of ``universe``.
    """
    if clicked not in universe:
        raise ValueError(f"{clicked!r} is not a valid option")

    current = frozenset(selected)
    everything = frozenset(universe)

    if current == everything:
        return frozenset((clicked,))
    if current == {clicked}:
        return everything
    if clicked in current:
        return current - {clicked}
    return current | {clicked}


def ordered(selected: Iterable[T], universe: Sequence[T]) -> list[T]:
    """Return ``selected`` in universe display order."""
    chosen = set(selected)
    return [item for item in universe if item in chosen]


__all__ = ["toggle", "ordered"]
