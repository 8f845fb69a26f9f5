"""Logging setup for the orderlines command line."""

from __future__ import annotations

import logging

# Libraries that log each request or connection on their own.
NOISY_LOGGERS = ("httpx", "httpcore", "httpx_retries")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    Storage calls are logged by the gateway, so the HTTP libraries are held back to
    WARNING unless ``level`` is stricter still. ``force=True`` replaces handlers a
    previous call installed.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
