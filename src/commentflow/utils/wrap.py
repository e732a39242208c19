# topmark:header:start
#
#   project      : CommentFlow
#   file         : wrap.py
#   file_relpath : src/commentflow/utils/wrap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Greedy, break-character-aware text wrapper.

`wrap_text` splits a single flat string into segments no longer than
``max_width`` whenever a break point exists. Unlike `textwrap`, it breaks on a
configurable set of punctuation characters as well as spaces, and the break
character itself is consumed (never carried to the start of the next segment).

Cut selection for each segment:
    1. the last break character at or before column ``max_width``;
    2. otherwise the first break character in ``max_width + 1 .. max_width + 9``
       (a bounded overflow instead of splitting a token);
    3. otherwise a hard cut exactly at ``max_width``.
"""

from __future__ import annotations

from typing import Final

from commentflow.constants import DEFAULT_BREAK_CHARS

# How far past ``max_width`` the forward scan may look for a break character.
FORWARD_LOOKAHEAD: Final[int] = 10


def find_cut(text: str, max_width: int, break_chars: str = DEFAULT_BREAK_CHARS) -> int:
    """Return the index at which ``text`` should be cut for ``max_width``.

    Assumes ``len(text) > max_width``.
    """
    for i in range(max_width, -1, -1):
        if text[i] in break_chars:
            return i
    for i in range(max_width + 1, min(len(text), max_width + FORWARD_LOOKAHEAD)):
        if text[i] in break_chars:
            return i
    return max_width


def wrap_text(text: str, max_width: int, break_chars: str = DEFAULT_BREAK_CHARS) -> str:
    """Wrap ``text`` into ``"\\n"``-joined segments of at most ``max_width`` characters.

    Segments only exceed ``max_width`` when the forward scan picked a break
    character past the limit. After each cut the run of break characters at
    the cut point and any following whitespace are skipped.

    Args:
        text (str): A single line of text (no embedded newlines expected).
        max_width (int): Maximum segment width; must be at least 1.
        break_chars (str): Characters that may end a segment.

    Returns:
        str: The wrapped text; ``text`` itself when it already fits.

    Raises:
        ValueError: If ``max_width`` is smaller than 1.
    """
    if max_width < 1:
        raise ValueError(f"max_width must be >= 1 (got {max_width})")

    segments: list[str] = []
    rest: str = text
    while len(rest) > max_width:
        cut: int = find_cut(rest, max_width, break_chars)
        segments.append(rest[:cut])

        skip: int = cut
        while skip < len(rest) and rest[skip] in break_chars:
            skip += 1
        while skip < len(rest) and rest[skip].isspace():
            skip += 1
        # A hard cut at max_width >= 1 or a consumed break character always advances.
        rest = rest[skip:]

    segments.append(rest)
    return "\n".join(segments)
