"""Centralized logging configuration."""
from __future__ import annotations

import sys
from typing import Any

from loguru import logger

from planproof.settings import VALID_LEVELS, get_settings

_FORMAT = "[{time}] [{level}] [{extra[name]}] {message}"


def setup_logging(level: str | None = None) -> None:
    """Configure the logging system.

    Replaces every existing loguru sink with a single stderr sink.

    Args:
        level: The logging level (e.g. ``"DEBUG"``, ``"INFO"``).  Defaults to
            ``PlanProofSettings.log_level`` (``PLANPROOF_LOG_LEVEL``).

    Raises:
        ValueError: If the log level is invalid.
    """
    if level is None:
        level = get_settings().log_level
    if level.upper() not in VALID_LEVELS:
        msg = f"Invalid log level: {level}. Must be one of {sorted(VALID_LEVELS)}"
        raise ValueError(msg)

    logger.remove()
    logger.configure(extra={"name": "planproof"})
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT)


def get_logger(name: str) -> Any:  # Loguru type stubs are incomplete
    """Return a logger bound to ``name`` (usually ``__name__``)."""
    return logger.bind(name=name)
