# topmark:header:start
#
#   project      : CommentFlow
#   file         : options.py
#   file_relpath : src/commentflow/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color) and their
resolution logic, so the group and its commands can stay thin. The helpers
here are Click-aware.
"""

from __future__ import annotations

from typing import Callable, ParamSpec, TypeVar

import click

from commentflow.cli.errors import CommentflowUsageError
from commentflow.config.logging import get_logger

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from the ``-v``/``-q`` counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        ``verbose_count`` (0 = terse, 1 = list rule applications, 2+ = more),
        or ``-quiet_count`` when quiet was requested.

    Raises:
        CommentflowUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise CommentflowUsageError(
            "The '--verbose' and '--quiet' options are mutually exclusive."
        )
    if quiet_count > 0:
        return -quiet_count
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress per-file output. Specify twice to also hide the summary.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --no-color option to a command."""
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        default=False,
        help="Disable ANSI colors in program output.",
    )(f)
    return f
