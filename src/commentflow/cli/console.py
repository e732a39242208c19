# topmark:header:start
#
#   project      : CommentFlow
#   file         : console.py
#   file_relpath : src/commentflow/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console for user-facing program output.

Per-file results, summaries and diffs go through `ClickConsole`, which the
group command stores in ``ctx.obj["console"]``. Log records never do.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click


class ClickConsole:
    """Program-output console backed by `click.echo`.

    Args:
        enable_color (bool): Keep ANSI styling; when False, `styled()` returns
            plain text and click strips any codes on output.
        out (TextIO | None): Output stream (``sys.stdout`` when None).
        err (TextIO | None): Error stream (``sys.stderr`` when None).
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out
        self.err = err

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to the output stream."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write ``text`` to the error stream in bright red."""
        click.echo(
            self.styled(text, fg="bright_red"),
            nl=nl,
            file=self.err or sys.stderr,
            color=self.enable_color,
        )

    def styled(self, text: str, **style: Any) -> str:
        """Return ``text`` passed through `click.style`, or unchanged without color."""
        return click.style(text, **style) if self.enable_color else text
