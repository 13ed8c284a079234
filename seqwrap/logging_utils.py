"""Logging setup shared by the seqwrap command line."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "seqwrap"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Send log records to stderr so stdout only carries scan results."""

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    return logger


def get_logger(suffix: str | None = None) -> logging.Logger:
    """Return the package logger, or one of its children."""

    name = f"{LOGGER_NAME}.{suffix}" if suffix else LOGGER_NAME
    return logging.getLogger(name)
