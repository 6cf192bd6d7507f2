"""Logger for soft assertion sessions."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "softly"

_FORMAT = "[%(asctime)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def get_logger(debug_file: Path | None = None, verbose: bool = False, logger_name: str = LOGGER_NAME) -> logging.Logger:
    """
    Return the logger a session reports synthesis, collection and checkpoints to.

    Without a debug file or verbose output the library logger is returned as
    is, so the host application's logging configuration applies. Otherwise the
    logger's previous handlers are closed and replaced.

    Args:
        debug_file: Append DEBUG records to this file, creating parent directories.
        verbose: Also write records to stderr.
        logger_name: Name of the logger (sessions with different names stay independent).
    """
    logger = logging.getLogger(logger_name)
    if debug_file is None and not verbose:
        return logger

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    handlers: list[logging.Handler] = []
    if debug_file is not None:
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(debug_file, mode="a"))
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
