"""Logging setup for scripts and host applications.

Library modules only create loggers; configuring handlers is left to the
process entry point.
"""

from __future__ import annotations

import logging
import sys

from .config import get_config


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging with the level from APPSTORAGE_LOG_LEVEL unless given."""
    if level is None:
        level = get_config().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )
