"""Core package for ostimeline.

Pure, side-effect-free timeline logic plus the settings/logging conveniences:
    from ostimeline.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
