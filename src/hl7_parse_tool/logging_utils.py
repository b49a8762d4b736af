# src/hl7_parse_tool/logging_utils.py
"""
Logging utilities for hl7_parse_tool.

The library itself only creates module loggers and never installs handlers.
Applications embedding the parser call configure_logging() once.
"""

import logging
import sys
from typing import IO, Optional


_VERBOSITY_LEVELS = {
    0: logging.INFO,
    1: logging.DEBUG,  # any value >= 1 maps to DEBUG
}

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    verbosity: int = 0,
    stream: Optional[IO[str]] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for an application using hl7_parse_tool.

    Parameters
    ----------
    verbosity : int, default=0
        Verbosity level:
        - 0 -> INFO
        - 1 or higher -> DEBUG (includes per-message parse steps)
        Must be a non-negative integer.
    stream : IO[str] or None, default=None
        Target stream for the StreamHandler. Defaults to sys.stderr if None.
    logger_name : str or None, default=None
        Logger to configure, e.g. "hl7_parse_tool" to scope output to this
        package. Defaults to the root logger.

    Returns
    -------
    logging.Logger
        The configured logger.

    Raises
    ------
    TypeError
        If verbosity is not an int, or if a stream is provided that does not
        have a write method.
    ValueError
        If verbosity is negative.
    """
    if isinstance(verbosity, bool) or not isinstance(verbosity, int):
        raise TypeError(f"verbosity must be int, got {type(verbosity).__name__}")
    if verbosity < 0:
        raise ValueError(f"verbosity must be non-negative, got {verbosity}")

    level = _VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    if stream is None:
        stream = sys.stderr
    elif not hasattr(stream, "write"):
        raise TypeError("stream must be file-like (support .write(...))")

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger = logging.getLogger(logger_name)
    # Replace only existing StreamHandlers; leave other handlers intact (e.g.,
    #   FileHandler)
    logger.handlers = [
        h
        for h in logger.handlers
        if not isinstance(h, logging.StreamHandler)
        or isinstance(h, logging.FileHandler)
    ]
    logger.addHandler(handler)
    logger.setLevel(level)

    return logger
