# topmark:header:start
#
#   project      : CommentFlow
#   file         : errors.py
#   file_relpath : src/commentflow/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI exception types carrying CommentFlow exit codes.

Every error is a `click.ClickException`, so Click prints it and exits with
its ``exit_code``. When a console is present in the Click context the message
is rendered through it instead of Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from commentflow.cli.exit_codes import ExitCode


class CommentflowError(click.ClickException):
    """Base class for all CommentFlow CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colors are applied in `show()`)."""
        return str(self.message)

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class CommentflowUsageError(CommentflowError):
    """Error for command-line invocation errors (invalid flag combinations)."""

    exit_code = ExitCode.USAGE_ERROR


class CommentflowConfigError(CommentflowError):
    """Error for invalid configuration values."""

    exit_code = ExitCode.CONFIG_ERROR


class CommentflowFileNotFoundError(CommentflowError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class CommentflowIOError(CommentflowError):
    """Error for files that could not be read or written."""

    exit_code = ExitCode.IO_ERROR


class CommentflowEncodingError(CommentflowError):
    """Error for files that could not be decoded with the configured encoding."""

    exit_code = ExitCode.ENCODING_ERROR


class CommentflowFormatterError(CommentflowError):
    """Error when the external formatter is enabled but unavailable."""

    exit_code = ExitCode.FORMATTER_UNAVAILABLE
