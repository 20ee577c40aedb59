"""ostimeline: an interactive, filterable timeline of kernels and operating systems.

The curated dataset lives in ``ostimeline/data/entries.json``; the core logic
(filter, decade grouping, facet toggling, export) lives in ``ostimeline.core``.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
