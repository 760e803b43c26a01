"""Logging setup for the command-line entry point.

Library modules only create module-level loggers; handlers are
installed here, once, by the CLI.  Output goes to stderr so that
result tables on stdout stay clean.
"""

import logging
import sys
from typing import Union

#: Level names accepted by :func:`parse_log_level`.
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_log_level(level: Union[str, int]) -> int:
    """Convert a level name (case-insensitive) or number to a level.

    Raises:
        ValueError: If *level* is not a known level name.
    """
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level: {level} (expected one of {', '.join(LOG_LEVELS)})"
        )
    return getattr(logging, name)


def setup_logging(level: Union[str, int] = "WARNING") -> None:
    """Install a single stderr handler on the root logger.

    Calling it again replaces the previous handler instead of
    stacking a second one.

    Args:
        level: Level name or number.
    """
    numeric = parse_log_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
    root_logger.addHandler(handler)

    root_logger.debug("Logging initialized: level=%s", logging.getLevelName(numeric))


def set_log_level(level: Union[str, int], logger_name: str = "welch_psd") -> None:
    """Change the level of one logger at runtime.

    Args:
        level: New level name or number.
        logger_name: Logger to adjust; defaults to the package logger.
    """
    logging.getLogger(logger_name).setLevel(parse_log_level(level))
