"""
clugen.logging_config — Opt-in handlers for the ``clugen`` logger namespace.

Modules only create loggers (``logging.getLogger(__name__)``) and emit DEBUG
records about cluster sizes, resolved strategies and merges. Nothing is
printed until an application calls :func:`setup_logging`.
"""
from __future__ import annotations
import logging
import sys
from typing import IO, Optional

LOGGER_NAME = "clugen"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Route ``clugen`` log records to ``stream`` (stdout by default) and, optionally, ``log_file``.

    Handlers installed by a previous call are closed and replaced, so calling
    this again only changes the destination and level.

    Example
    -------
    >>> import logging
    >>> from clugen import setup_logging
    >>> log = setup_logging(logging.DEBUG)
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(stream if stream is not None else sys.stdout)]
    if log_file: handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
