"""Logger hierarchy shared by the gosort modules."""

from __future__ import annotations

import logging
from typing import TextIO

ROOT_LOGGER = "gosort"
LOG_FORMAT = "[gosort] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `gosort.<name>`, or the root gosort logger when no name is given."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Send gosort records to `stream` (stderr by default).

    Verbose runs show per-file progress at DEBUG; otherwise only INFO and
    above reach the console. Calling this again replaces the previous handler.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console)
    return logger


__all__ = ["LOG_FORMAT", "ROOT_LOGGER", "configure_logging", "get_logger"]
