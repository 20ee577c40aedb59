"""JSON export of the currently filtered entries.

- :func:`export_snapshot` produces the bytes and a suggested filename and has
  no side effects; exporting the same list twice yields identical bytes.
- :class:`ExportWriter` is the delivery mechanism for hosts with a filesystem
  (the CLI). The HTTP API streams the bytes as an attachment instead.

Format
------
A top-level JSON array of entries in camelCase, keys in schema order, absent
optional fields omitted, two-space indent, UTF-8 with non-ASCII characters
kept as-is, trailing newline.

Filename pattern: ``os-kernel-timeline-{from}-{to}.json``.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from ostimeline.core.contracts.entry import Entry
from ostimeline.core.settings import get_logger, load_settings

logger = get_logger(__name__)

EXPORT_MEDIA_TYPE = "application/json"


def export_filename(range_from: int, range_to: int) -> str:
    return f"os-kernel-timeline-{range_from}-{range_to}.json"


def export_snapshot(
    entries: Sequence[Entry], range_from: int, range_to: int
) -> tuple[bytes, str]:
    """Serialize ``entries`` and return ``(payload, suggested_filename)``."""
    payload = [e.to_json_dict() for e in entries]
    text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
    return text.encode("utf-8"), export_filename(range_from, range_to)


def _default_dir() -> Path:
    """Return the configured export directory."""
    return load_settings().export_dir


class ExportWriter:
    """Write export snapshots to disk."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir: Path = base_dir if base_dir is not None else _default_dir()

    def write(
        self,
        entries: Sequence[Entry],
        range_from: int,
        range_to: int,
        output: Path | None = None,
    ) -> Path:
        """Write the snapshot and return the created file path.

        ``output`` overrides the suggested name and directory; parent
        directories are created as needed.
        """
        data, filename = export_snapshot(entries, range_from, range_to)
        path = output if output is not None else self.base_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Exported %d entries to %s", len(entries), path)
        return path


__all__ = ["EXPORT_MEDIA_TYPE", "export_filename", "export_snapshot", "ExportWriter"]
