"""Unit tests for the filter engine: range overlap, facets, text search, ordering."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from ostimeline.core.contracts.entry import Entry, EntryType, Family
from ostimeline.core.contracts.state import FilterState
from ostimeline.core.dataset import Dataset, load_dataset
from ostimeline.core.filtering import filter_entries, matches_query, overlaps_range
from tests.entry_factory import make_entry


def _ids(entries: Sequence[Entry]) -> list[str]:
    return [e.id for e in entries]


def _initial(ds: Dataset) -> FilterState:
    return FilterState.initial(ds.min_year, ds.max_year)


# --------------------------------------------------------------------------- #
# Range overlap
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    ("range_from", "range_to", "expected"),
    [
        (1998, 1999, True),  # range inside the entry's span
        (2001, 2010, False),  # range after the span
        (1990, 1995, True),  # touches the start year
        (2000, 2005, True),  # touches the end year
        (1980, 1994, False),  # range before the span
    ],
)
def test_overlaps_range_span(range_from: int, range_to: int, expected: bool) -> None:
    entry = make_entry("span", 1995, year_end=2000)
    assert overlaps_range(entry, range_from, range_to) is expected


def test_point_in_time_entry_uses_start_as_end() -> None:
    entry = make_entry("point", 1995)
    assert overlaps_range(entry, 1995, 1995)
    assert not overlaps_range(entry, 1996, 2000)
    assert not overlaps_range(entry, 1990, 1994)


def test_range_filter_keeps_overlapping_spans(sample_dataset: Dataset) -> None:
    state = _initial(sample_dataset).model_copy(update={"range_from": 1996, "range_to": 1999})
    # alpha (1965-2000) and charlie (1995-2000) overlap; bravo/echo (1991) and delta (2000) don't
    assert _ids(filter_entries(sample_dataset, state)) == ["alpha", "charlie"]


# --------------------------------------------------------------------------- #
# Facets
# --------------------------------------------------------------------------- #


def test_initial_state_keeps_everything_sorted(sample_dataset: Dataset) -> None:
    out = filter_entries(sample_dataset, _initial(sample_dataset))
    assert _ids(out) == ["alpha", "bravo", "echo", "charlie", "delta"]


def test_family_filter(sample_dataset: Dataset) -> None:
    state = _initial(sample_dataset).with_families([Family.LINUX])
    assert _ids(filter_entries(sample_dataset, state)) == ["bravo", "charlie"]


def test_type_filter(sample_dataset: Dataset) -> None:
    state = _initial(sample_dataset).with_types([EntryType.KERNEL, EntryType.RTOS])
    assert _ids(filter_entries(sample_dataset, state)) == ["bravo", "echo", "delta"]


def test_facets_combine_with_and(sample_dataset: Dataset) -> None:
    state = (
        _initial(sample_dataset)
        .with_types([EntryType.KERNEL])
        .with_families([Family.BSD, Family.UNIX])
    )
    assert _ids(filter_entries(sample_dataset, state)) == ["echo"]


def test_empty_type_selection_yields_empty_list(sample_dataset: Dataset) -> None:
    state = _initial(sample_dataset).with_types([])
    assert filter_entries(sample_dataset, state) == []


# --------------------------------------------------------------------------- #
# Text search
# --------------------------------------------------------------------------- #


def test_query_is_case_insensitive_on_highlights(sample_dataset: Dataset) -> None:
    state = _initial(sample_dataset).with_query("zfs")
    assert _ids(filter_entries(sample_dataset, state)) == ["bravo"]


def test_query_is_trimmed(sample_dataset: Dataset) -> None:
    state = _initial(sample_dataset).with_query("   ")
    assert len(filter_entries(sample_dataset, state)) == len(sample_dataset)

    state = _initial(sample_dataset).with_query("  ROLLING ")
    assert _ids(filter_entries(sample_dataset, state)) == ["charlie"]


def test_query_matches_version_labels_but_not_notes() -> None:
    entry = make_entry(
        "k",
        1991,
        versions=({"version": "2.6", "year": 2003, "notes": "O(1) scheduler"},),
    )
    assert matches_query(entry, "2.6")
    assert not matches_query(entry, "scheduler")


def test_query_ignores_platform_family_and_type() -> None:
    entry = make_entry("plain", 2000, name="Plain", description="Nothing to see")
    assert not matches_query(entry, "desktop")
    assert not matches_query(entry, "unix")
    assert not matches_query(entry, "operating system")


def test_query_spans_joined_fields() -> None:
    """Parts are joined with a space, so a needle may straddle two fields."""
    entry = make_entry("j", 2000, name="Foo", description="bar")
    assert matches_query(entry, "foo bar")


def test_zfs_matches_real_dataset() -> None:
    ds = load_dataset()
    state = _initial(ds).with_query("zfs")
    ids = _ids(filter_entries(ds, state))
    assert {"solaris", "freebsd", "ubuntu"} <= set(ids)


# --------------------------------------------------------------------------- #
# Ordering & purity
# --------------------------------------------------------------------------- #


def test_output_sorted_and_stable_across_runs() -> None:
    ds = load_dataset()
    state = _initial(ds)
    first = filter_entries(ds, state)
    second = filter_entries(ds, state)
    assert _ids(first) == _ids(second)
    years = [e.year_start for e in first]
    assert years == sorted(years)


def test_ties_keep_declaration_order(sample_dataset: Dataset) -> None:
    out = filter_entries(sample_dataset, _initial(sample_dataset))
    ties = [e.id for e in out if e.year_start == 1991]
    assert ties == ["bravo", "echo"]


def test_filter_does_not_mutate_state(sample_dataset: Dataset) -> None:
    state = _initial(sample_dataset).with_query("zfs")
    before = state.model_dump()
    filter_entries(sample_dataset, state)
    assert state.model_dump() == before
