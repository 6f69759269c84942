"""Logging helpers for the fastakit CLI."""

from __future__ import annotations

import logging
from typing import Optional

LOGGER_NAME = "fastakit"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure root logger and return the package logger."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    return logger


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or its child for ``component``."""

    logger = logging.getLogger(LOGGER_NAME)
    return logger.getChild(component) if component else logger
