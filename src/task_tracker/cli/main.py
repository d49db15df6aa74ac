# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then serves the HTTP API with uvicorn.
uvicorn owns signal handling (Ctrl+C / SIGTERM stop the server cleanly).
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

import uvicorn

from ..api.app import create_app
from ..cli.bootstrap import create_initial_state
from ..config import Settings, get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None, settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=f"Run the {settings.app_name} HTTP API")
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Host to bind to (default: {settings.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to bind to (default: {settings.port})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        type=str.upper,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help=f"Console logging level (default: {settings.log_level})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    args = _parse_args(argv, settings)

    # IMPORTANT: one settings object for the whole process, CLI flags win.
    settings = replace(settings, host=args.host, port=args.port, log_level=args.log_level)

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s on %s:%s...", settings.app_name, settings.host, settings.port)

    state = create_initial_state(settings=settings)
    app = create_app(state)

    try:
        # log_config=None: keep the handlers installed by setup_logging.
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
