"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod

Filter state is deliberately absent here: every fresh load starts from the
full dataset range with every facet selected.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `OSTIMELINE_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    dataset_path : Optional[Path]
        Alternative dataset file to load instead of the bundled one.
        Maps from `OSTIMELINE_DATASET_PATH`.
    export_dir : Path
        Default directory for JSON exports; maps from `OSTIMELINE_EXPORT_DIR`.
    api_host, api_port
        Bind address for the development API server.
    """

    environment: EnvName = Field(default="dev", alias="OSTIMELINE_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    dataset_path: Path | None = Field(default=None, alias="OSTIMELINE_DATASET_PATH")
    export_dir: Path = Field(default=Path("artifacts") / "exports", alias="OSTIMELINE_EXPORT_DIR")
    api_host: str = Field(default="127.0.0.1", alias="OSTIMELINE_API_HOST")
    api_port: int = Field(default=8000, ge=1, le=65535, alias="OSTIMELINE_API_PORT")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("OSTIMELINE_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "ostimeline") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
