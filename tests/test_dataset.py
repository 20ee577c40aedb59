"""Tests for dataset loading, validation and related-entry lookup."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from ostimeline.core.contracts.entry import ENTRY_TYPES, FAMILIES, EntryType, Family
from ostimeline.core.contracts.state import FilterState
from ostimeline.core.dataset import Dataset, default_dataset, load_dataset, parse_entries
from ostimeline.core.errors import DatasetError
from ostimeline.core.session import build_view

from tests.entry_factory import make_entry


def _raw(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": "x",
        "name": "X",
        "type": "Kernel",
        "family": "Linux",
        "platform": ["Server"],
        "yearStart": 1999,
        "description": "d",
    }
    record.update(overrides)
    return record


# --------------------------------------------------------------------------- #
# Bundled dataset
# --------------------------------------------------------------------------- #


def test_bundled_dataset_loads() -> None:
    ds = load_dataset()
    assert len(ds) == 92
    assert ds.min_year == 1965
    assert ds.max_year == 2024


def test_bundled_ids_unique_and_related_resolve() -> None:
    ds = load_dataset()
    ids = [e.id for e in ds]
    assert len(ids) == len(set(ids))
    for e in ds:
        assert len(ds.resolve_related(e)) == len(e.related or ())


def test_bundled_dataset_uses_only_known_facets() -> None:
    ds = load_dataset()
    assert {e.type for e in ds} <= set(ENTRY_TYPES)
    assert {e.family for e in ds} <= set(FAMILIES)
    # every type and family in the universe is represented at least once
    assert {e.type for e in ds} == set(ENTRY_TYPES)
    assert {e.family for e in ds} == set(FAMILIES)


def test_bundled_entry_fields() -> None:
    linux = load_dataset().get("linux")
    assert linux is not None
    assert linux.type is EntryType.KERNEL
    assert linux.family is Family.LINUX
    assert linux.year_start == 1991
    assert linux.year_end is None
    assert linux.versions is not None and linux.versions[0].version == "1.0"


def test_default_dataset_is_cached() -> None:
    assert default_dataset() is default_dataset()


# --------------------------------------------------------------------------- #
# Derived bounds & lookup
# --------------------------------------------------------------------------- #


def test_year_bounds_use_end_when_present(sample_dataset: Dataset) -> None:
    assert sample_dataset.min_year == 1965
    assert sample_dataset.max_year == 2000


def test_resolve_related_skips_dangling(sample_dataset: Dataset) -> None:
    charlie = sample_dataset.get("charlie")
    assert charlie is not None
    related = sample_dataset.resolve_related(charlie)
    assert [r.id for r in related] == ["bravo"]


def test_get_unknown_returns_none(sample_dataset: Dataset) -> None:
    assert sample_dataset.get("nope") is None


def test_end_before_start_is_not_rejected() -> None:
    ds = Dataset([make_entry("odd", 2000, year_end=1990)])
    assert ds.min_year == 2000
    assert ds.max_year == 1990
    # the fresh-load range is inverted, so nothing overlaps it
    assert build_view(ds, FilterState.initial(ds.min_year, ds.max_year)).is_empty


# --------------------------------------------------------------------------- #
# Validation failures
# --------------------------------------------------------------------------- #


def test_duplicate_ids_rejected() -> None:
    with pytest.raises(DatasetError, match="Duplicate entry id 'x'"):
        parse_entries([_raw(), _raw(name="Another X")])


def test_unknown_family_rejected() -> None:
    with pytest.raises(DatasetError, match="schema error"):
        parse_entries([_raw(family="Plan 10")])


def test_empty_platform_rejected() -> None:
    with pytest.raises(DatasetError):
        parse_entries([_raw(platform=[])])


def test_unknown_key_rejected() -> None:
    with pytest.raises(DatasetError):
        parse_entries([_raw(yearstart=1999)])


def test_empty_dataset_rejected() -> None:
    with pytest.raises(DatasetError, match="at least one entry"):
        parse_entries([])


def test_invalid_json_file(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[{", encoding="utf-8")
    with pytest.raises(DatasetError) as info:
        load_dataset(bad)
    assert info.value.source == str(bad)
    assert "invalid JSON" in info.value.reason


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DatasetError, match="cannot read file"):
        load_dataset(tmp_path / "missing.json")


def test_dataset_path_setting(tmp_path: Path, monkeypatch: Any) -> None:
    """`OSTIMELINE_DATASET_PATH` replaces the bundled file."""
    custom = tmp_path / "custom.json"
    custom.write_text(json.dumps([_raw(yearEnd=2005)]), encoding="utf-8")
    monkeypatch.setenv("OSTIMELINE_DATASET_PATH", str(custom))
    from ostimeline.core.settings import load_settings

    load_settings.cache_clear()
    default_dataset.cache_clear()

    ds = default_dataset()
    assert len(ds) == 1
    assert (ds.min_year, ds.max_year) == (1999, 2005)
