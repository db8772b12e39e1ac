"""Logging for zenith.

Every module asks ``get_logger(__name__)`` for a logger in the ``zenith``
namespace and never adds handlers itself. The CLI callback calls
``configure_logging`` once per run: ``--verbose`` turns on DEBUG output,
otherwise ``ZENITH_LOG_LEVEL`` decides and WARNING is the default. Log lines
go to stderr so they never mix with the tables printed on stdout.
"""

import logging
import os
import sys
from typing import IO

LOGGER_NAME = "zenith"
LEVEL_ENV_VAR = "ZENITH_LOG_LEVEL"
DEFAULT_LEVEL = logging.WARNING
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_configured = False


def parse_level(level: int | str | None) -> int:
    """Turn "debug", "10" or logging.DEBUG into a level number.

    Unrecognised names and None fall back to ZENITH_LOG_LEVEL, then WARNING.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelName(name)
        if isinstance(numeric, int):
            return numeric
    from_env = os.getenv(LEVEL_ENV_VAR)
    if from_env and from_env != level:
        return parse_level(from_env)
    return DEFAULT_LEVEL


def configure_logging(level: int | str | None = None, *, stream: IO[str] = sys.stderr) -> None:
    """Send zenith's log records to stream. Later calls do nothing."""
    global _configured
    if _configured:
        return

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    resolved = parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    # Records stop here; the root logger belongs to whoever embeds zenith
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a zenith module. Silent until configure_logging runs."""
    root = logging.getLogger(LOGGER_NAME)
    if not _configured and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
