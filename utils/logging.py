"""Logging setup for TabularIngest.

Only this project's loggers follow the requested level. Third-party
libraries (pandas, openpyxl, pyarrow) stay at WARNING so a verbose run
shows import and inference decisions, not engine chatter.
"""

import logging
import sys
from typing import Union

from .constants import DEFAULT_LOG_LEVEL

# Top-level packages whose module loggers (getLogger(__name__)) are ours
PROJECT_LOGGERS = ("cli", "ingestion", "inference", "options", "utils")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(level: Union[int, str, None], verbose: bool = False) -> int:
    """Turn a level name or number into a logging level.

    Args:
        level: Level number, or a name such as ``"debug"``; None falls back
            to DEBUG when verbose, else DEFAULT_LOG_LEVEL
        verbose: Shortcut for DEBUG

    Returns:
        Numeric logging level

    Raises:
        ValueError: If the level name is unknown
    """
    if level is None:
        return logging.DEBUG if verbose else logging.getLevelName(DEFAULT_LOG_LEVEL)
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(verbose: bool = False, level: Union[int, str, None] = None) -> None:
    """Configure logging for TabularIngest.

    Messages go to stderr, so ``--json`` output on stdout stays parseable.
    Safe to call more than once.

    Args:
        verbose: If True and no level is given, log at DEBUG
        level: Explicit level (number or name), overrides verbose
    """
    log_level = resolve_log_level(level, verbose)

    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    for name in PROJECT_LOGGERS:
        logging.getLogger(name).setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
