"""Mini README: Application-wide logging helpers for BudgetBite.

Structure:
    * configure_root_logger - one-time root handler setup, level from settings.
    * get_logger - factory returning module loggers with baseline configuration.

Usage:
    Modules create ``LOGGER = get_logger(__name__)`` at import time. The
    root handler is installed exactly once so the CLI, the web app and the
    test-suite can all import ledger modules without duplicating output.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    """Translate textual levels such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str, None] = None) -> None:
    """Configure the root logger with a readable, timestamped formatter.

    When ``level`` is omitted the configured ``BUDGETBITE_LOG_LEVEL`` is used.
    Calling the helper again after initialisation only adjusts the level.
    """

    global _LOGGER_INITIALISED
    if level is None:
        from .configuration import get_settings

        level = get_settings().log_level

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    if not _LOGGER_INITIALISED:
        configure_root_logger(logging.INFO)
    return logging.getLogger(name)
