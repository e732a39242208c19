# topmark:header:start
#
#   project      : CommentFlow
#   file         : diff.py
#   file_relpath : src/commentflow/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff creation and colorized rendering."""

from __future__ import annotations

import difflib
from typing import Sequence

from yachalk import chalk

from commentflow.config.logging import get_logger

logger = get_logger(__name__)


def unified_diff(
    original: Sequence[str],
    updated: Sequence[str],
    path: str,
    newline_style: str = "\n",
) -> str:
    """Return a unified diff between two line images of ``path``.

    Args:
        original: Lines before reflowing, terminators included.
        updated: Lines after reflowing, terminators included.
        path: File name used in the ``---``/``+++`` headers.
        newline_style: Terminator used for the diff's own header lines.

    Returns:
        The diff text, or an empty string when both images are equal.
    """
    patch_lines: list[str] = list(
        difflib.unified_diff(
            list(original),
            list(updated),
            fromfile=f"{path} (current)",
            tofile=f"{path} (reflowed)",
            n=3,
            lineterm=newline_style,
        )
    )
    # Content lines without a terminator come from an unterminated last line.
    return "".join(
        line
        if line.endswith(("\n", "\r"))
        else f"{line}{newline_style}\\ No newline at end of file{newline_style}"
        for line in patch_lines
    )


def render_patch(patch: Sequence[str] | str) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch: A unified diff as either a sequence of lines or a single
            multiline string.

    Returns:
        The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = [line.rstrip("\r\n") for line in patch]

    def process_line(line: str) -> str:
        # Make stray carriage returns visible.
        content: str = line.replace("\r", "\\r")
        if content.startswith(("---", "+++")):
            return chalk.bold(content)
        match content[:1]:
            case "-":
                return chalk.red(content)
            case "+":
                return chalk.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return content

    return "".join(f"{process_line(line)}\n" for line in lines)
