"""Logging configuration for mindmap-outline."""

import sys
from typing import TextIO

from loguru import logger

LOG_FORMAT = "{level: <7} {message}"
VERBOSE_LOG_FORMAT = "{time:HH:mm:ss.SSS} {level: <7} {name}:{function} {message}"


def configure_logging(*, verbose: bool = False, sink: TextIO | None = None) -> None:
    """Send logs to stderr (or ``sink``), INFO and up unless ``verbose``.

    Verbose output adds a timestamp and the emitting function, which is where
    the per-edit DEBUG lines of the session show up.
    """
    logger.remove()
    if verbose:
        logger.add(sink or sys.stderr, level="DEBUG", format=VERBOSE_LOG_FORMAT)
    else:
        logger.add(sink or sys.stderr, level="INFO", format=LOG_FORMAT)
