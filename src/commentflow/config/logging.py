# topmark:header:start
#
#   project      : CommentFlow
#   file         : logging.py
#   file_relpath : src/commentflow/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CommentFlow logging with a TRACE level.

Internal diagnostics are logged to stderr, never to stdout: in ``--stdout``
mode standard output carries nothing but file content. The level is CRITICAL
unless ``COMMENTFLOW_LOG_LEVEL`` asks for more.

Levels used by the engine:
    * TRACE: every rule that declines a line, and why;
    * DEBUG: per-file step results;
    * INFO: every rule application with its line range;
    * WARNING: formatter failures and unterminated blocks.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "COMMENTFLOW_LOG_LEVEL"

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

# Highest threshold first; a record takes the color of the first threshold it reaches.
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)

_LEVEL_ALIASES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "WARN": logging.WARNING,
    "FATAL": logging.CRITICAL,
}


class CommentflowLogger(logging.Logger):
    """Logger class with a ``trace()`` method below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` with severity TRACE.

        Args:
            msg (object): The message to be logged.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Extra attributes for the record.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(CommentflowLogger)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each record by severity."""

    def format(self, record: logging.LogRecord) -> str:
        """Return the formatted record wrapped in its level color."""
        message: str = super().format(record)
        for threshold, color in _LEVEL_COLORS:
            if record.levelno >= threshold:
                return color(message)
        return chalk.dim(message)


def level_from_name(name: str) -> int | None:
    """Translate a level name (``"debug"``, ``"trace"``) or number into a level.

    Returns:
        int | None: The level, or ``None`` if ``name`` is not recognized.
    """
    key: str = name.strip().upper()
    if not key:
        return None
    if key.isdigit():
        return int(key)
    if key in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[key]
    level = logging.getLevelName(key)
    return level if isinstance(level, int) else None


def resolve_env_log_level() -> int | None:
    """Return the level requested through ``COMMENTFLOW_LOG_LEVEL``, if any."""
    return level_from_name(os.environ.get(LOG_LEVEL_ENV_VAR, ""))


def setup_logging(level: int | None = None) -> None:
    """Install a single colored stderr handler on the root logger.

    Args:
        level (int | None): Level to use; when ``None`` the environment is
            consulted and CRITICAL is the fallback.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(
        ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    )
    root_logger.addHandler(stream_handler)


def get_logger(name: str) -> CommentflowLogger:
    """Return the `CommentflowLogger` registered under ``name``."""
    return cast("CommentflowLogger", logging.getLogger(name))
