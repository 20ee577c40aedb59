"""
ASGI Entry Point for the ostimeline API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads `.env` first so `OSTIMELINE_*` settings are visible before the
application factory runs.

Usage
-----
    $ python -m ostimeline.api.server
    $ uvicorn ostimeline.api.server:app --reload
"""

from __future__ import annotations

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from ostimeline.api.app import create_app
from ostimeline.core.settings import load_settings

load_dotenv(dotenv_path=Path(".env"))

app = create_app()


def main(host: str | None = None, port: int | None = None, reload: bool | None = None) -> None:
    """Run the API server; defaults come from `OSTIMELINE_API_HOST` / `OSTIMELINE_API_PORT`.

    Auto-reload is on by default only in the dev environment.
    """
    cfg = load_settings()
    if reload is None:
        reload = cfg.is_dev
    uvicorn.run(
        "ostimeline.api.server:app",
        host=host or cfg.api_host,
        port=port or cfg.api_port,
        reload=reload,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
