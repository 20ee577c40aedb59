"""Exception hierarchy for ostimeline.

Only the dataset loader and explicit entry lookups raise. Filtering, grouping,
facet toggling and range clamping accept any well-typed input without error.
"""

from __future__ import annotations

from pathlib import Path


class OSTimelineError(Exception):
    """Base class for all ostimeline errors."""


class DatasetError(OSTimelineError):
    """The dataset file could not be read, parsed or validated."""

    def __init__(self, source: Path | str, reason: str) -> None:
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Invalid dataset {self.source}: {reason}")


class EntryNotFoundError(OSTimelineError, LookupError):
    """No entry with the requested id exists in the dataset."""

    def __init__(self, entry_id: str) -> None:
        self.entry_id = entry_id
        super().__init__(f"Entry {entry_id!r} not found")


__all__ = ["OSTimelineError", "DatasetError", "EntryNotFoundError"]
