"""Logging setup for the chat-transcript command line.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are attached here, by the CLI, on the ``chat_transcript`` package
logger so embedding applications keep control of the root logger.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "chat_transcript"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Marks the handler installed by setup_logging so repeated calls reuse it.
_HANDLER_ATTR = "_chat_transcript_handler"


def resolve_level(level: str | int) -> int:
    """Turn a level name (``"debug"``, ``"INFO"``) or number into an int.

    Raises:
        ValueError: If *level* is not a recognised logging level.
    """
    if isinstance(level, int):
        return level
    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")
    return numeric_level


def setup_logging(level: str | int = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Attach a pipe-formatted handler to the package logger.

    Calling this more than once only updates the level of the existing
    handler.

    Args:
        level: Level name or number.
        stream: Destination stream; defaults to *stderr*.

    Returns:
        The configured ``chat_transcript`` logger.

    Raises:
        ValueError: If *level* is not a recognised logging level.
    """
    numeric_level = resolve_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    for handler in logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            handler.setLevel(numeric_level)
            return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    setattr(handler, _HANDLER_ATTR, True)
    logger.addHandler(handler)
    return logger
