"""Shared fixtures: a small hand-built dataset and settings-cache hygiene.

Fixture dataset (declaration order → sorted order)
--------------------------------------------------
    alpha    1965-2000  Operating System  Unix
    delta    2000       RTOS              Other/Alt
    bravo    1991       Kernel            Linux      highlights: ZFS
    charlie  1995-2000  Distro            Linux      related: bravo, ghost
    echo     1991       Kernel            BSD

Sorted by start year: alpha, bravo, echo, charlie, delta (bravo before echo
because it is declared first).
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from ostimeline.core.contracts.entry import EntryType, Family
from ostimeline.core.dataset import Dataset, default_dataset
from ostimeline.core.settings import load_settings
from tests.entry_factory import make_entry


@pytest.fixture
def sample_dataset() -> Dataset:
    return Dataset(
        [
            make_entry("alpha", 1965, year_end=2000, highlights=("Time-sharing",)),
            make_entry("delta", 2000, type=EntryType.RTOS, family=Family.OTHER_ALT),
            make_entry(
                "bravo",
                1991,
                type=EntryType.KERNEL,
                family=Family.LINUX,
                highlights=("SMP", "ZFS"),
                versions=({"version": "2.6", "year": 2003, "notes": "O(1) scheduler"},),
            ),
            make_entry(
                "charlie",
                1995,
                year_end=2000,
                type=EntryType.DISTRO,
                family=Family.LINUX,
                description="Rolling release distro",
                related=("bravo", "ghost"),
            ),
            make_entry("echo", 1991, type=EntryType.KERNEL, family=Family.BSD),
        ]
    )


@pytest.fixture(autouse=True)
def _fresh_caches() -> Generator[None, None, None]:
    """Drop cached settings/dataset after each test so env tweaks don't leak."""
    yield
    load_settings.cache_clear()
    default_dataset.cache_clear()
