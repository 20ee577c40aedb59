"""Entry: one curated record describing an operating system, kernel or distro.

This module defines the closed record shape used throughout ostimeline:

- `EntryType`, `Family`, `Platform`: fixed enumerations. Declaration order is
  the display order of the filter chips, and `ENTRY_TYPES` / `FAMILIES` are
  the universes used by the facet toggle.
- `VersionRecord`: a named release of an entry.
- `Entry`: the record itself.

Field naming
------------
Python attributes are snake_case (`year_start`, `year_end`). The JSON form,
both in the bundled dataset and in exports, uses camelCase (`yearStart`,
`yearEnd`) through pydantic aliases. Optional fields are modelled as `None`
rather than absent keys; `model_dump(exclude_none=True)` restores the compact
JSON shape.

Notes
-----
- Models are frozen: the dataset is immutable for the life of the process.
- `extra="forbid"` turns typos in the curated file into load-time errors.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EntryType(str, Enum):
    """Kind of entry."""

    KERNEL = "Kernel"
    OPERATING_SYSTEM = "Operating System"
    RTOS = "RTOS"
    MICROKERNEL = "Microkernel"
    MOBILE_OS = "Mobile OS"
    DISTRO = "Distro"


class Family(str, Enum):
    """Lineage grouping."""

    EARLY_PRE_UNIX = "Early/Pre-Unix"
    UNIX = "Unix"
    BSD = "BSD"
    SYSTEM_V = "System V"
    LINUX = "Linux"
    WINDOWS_MSDOS = "Windows/MS-DOS"
    MACOS_NEXT = "macOS/OS X/NeXT"
    MOBILE_ANDROID = "Mobile: Android"
    MOBILE_IOS = "Mobile: iOS/iPadOS"
    MOBILE_OTHER = "Mobile: Other"
    OTHER_ALT = "Other/Alt"
    RESEARCH = "Research"


class Platform(str, Enum):
    """Target platform tag (display only, never filtered on)."""

    MAINFRAME = "Mainframe"
    MINI = "Mini"
    WORKSTATION = "Workstation"
    DESKTOP = "Desktop"
    SERVER = "Server"
    EMBEDDED = "Embedded"
    MOBILE = "Mobile"
    TABLET = "Tablet"
    CONSOLE = "Console"
    EXPERIMENTAL = "Experimental"


ENTRY_TYPES: tuple[EntryType, ...] = tuple(EntryType)
FAMILIES: tuple[Family, ...] = tuple(Family)
PLATFORMS: tuple[Platform, ...] = tuple(Platform)


class VersionRecord(BaseModel):
    """A named release, e.g. ``{"version": "2.6", "year": 2003}``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str
    year: int
    notes: str | None = Field(default=None)


class Entry(BaseModel):
    """A single OS / kernel / distro on the timeline."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id: str = Field(min_length=1, description="Stable lookup key, never displayed")
    name: str
    type: EntryType
    family: Family
    platform: tuple[Platform, ...] = Field(min_length=1)
    year_start: int = Field(alias="yearStart")
    year_end: int | None = Field(default=None, alias="yearEnd")
    description: str
    highlights: tuple[str, ...] | None = Field(default=None)
    versions: tuple[VersionRecord, ...] | None = Field(default=None)
    related: tuple[str, ...] | None = Field(default=None)

    @property
    def year_end_or_start(self) -> int:
        """End of the active interval; point-in-time entries end where they start."""
        return self.year_end if self.year_end is not None else self.year_start

    def searchable_text(self) -> str:
        """Lower-cased haystack for free-text search.

        Only name, description, highlights and version labels are searched.
        Version notes, platforms, family and type are not.
        """
        parts = [self.name, self.description]
        parts.extend(self.highlights or ())
        parts.extend(v.version for v in self.versions or ())
        return " ".join(parts).lower()

    def to_json_dict(self) -> dict[str, Any]:
        """Return the camelCase JSON form with absent optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "EntryType",
    "Family",
    "Platform",
    "ENTRY_TYPES",
    "FAMILIES",
    "PLATFORMS",
    "VersionRecord",
    "Entry",
]
