# topmark:header:start
#
#   project      : CommentFlow
#   file         : lines.py
#   file_relpath : src/commentflow/utils/lines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-level helpers used by the reflow rules.

All helpers operate on a single physical line (with or without its original
terminator) and never mutate their input.
"""

from __future__ import annotations

from typing import Iterable


def strip_terminator(line: str) -> str:
    """Return ``line`` without its trailing ``\\r``/``\\n`` characters."""
    return line.rstrip("\r\n")


def indent_of(line: str) -> int:
    """Return the number of leading whitespace characters of ``line``.

    The terminator never counts as indentation: a blank line has indent 0.
    """
    body: str = strip_terminator(line)
    return len(body) - len(body.lstrip())


def is_full_line_comment(line: str, marker: str = "#") -> bool:
    """Return True if the first non-whitespace text of ``line`` is ``marker``."""
    return line.lstrip().startswith(marker)


def is_overlong(line: str, limit: int) -> bool:
    """Return True if ``line`` (terminator stripped) is longer than ``limit``."""
    return len(strip_terminator(line)) > limit


def strip_marker(text: str, marker: str = "#") -> str:
    """Strip leading whitespace, one ``marker`` and the whitespace following it.

    Text that does not start with ``marker`` (after whitespace) is only
    left-trimmed.
    """
    body: str = text.lstrip()
    if body.startswith(marker):
        body = body[len(marker) :]
    return body.lstrip()


def render_block(
    body_lines: Iterable[str],
    indent: int,
    delimiter: str = '"""',
) -> list[str]:
    """Render ``body_lines`` as a delimited block at ``indent`` spaces.

    Each body line is right-trimmed and indented; empty lines are dropped.
    The block opens and closes with ``delimiter`` on its own line at the same
    indentation. Every returned line ends with ``"\\n"``.

    Args:
        body_lines (Iterable[str]): Block content, one entry per output line.
        indent (int): Number of spaces to prefix each line with.
        delimiter (str): Block delimiter (``\"\"\"`` by default).

    Returns:
        list[str]: The rendered lines including both delimiter lines.
    """
    pad: str = " " * indent
    rendered: list[str] = [f"{pad}{delimiter}\n"]
    for raw in body_lines:
        text: str = raw.rstrip()
        if not text:
            continue
        rendered.append(f"{pad}{text}\n")
    rendered.append(f"{pad}{delimiter}\n")
    return rendered
