# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_lines.py
#   file_relpath : tests/utils/test_lines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line helpers: indentation, comment detection, marker stripping and block rendering."""

from __future__ import annotations

from commentflow.utils.lines import (
    indent_of,
    is_full_line_comment,
    is_overlong,
    render_block,
    strip_marker,
    strip_terminator,
)
from tests.conftest import parametrize


@parametrize(
    "line, expected",
    [
        ("x = 1\n", "x = 1"),
        ("x = 1\r\n", "x = 1"),
        ("x = 1\r", "x = 1"),
        ("x = 1", "x = 1"),
    ],
)
def test_strip_terminator(line: str, expected: str) -> None:
    """Any trailing terminator is removed, nothing else."""
    assert strip_terminator(line) == expected


def test_indent_ignores_terminator() -> None:
    """A blank line has no indentation; tabs count as one column each."""
    assert indent_of("    x\n") == 4
    assert indent_of("\tx\n") == 1
    assert indent_of("\n") == 0
    assert indent_of("   \r\n") == 3


def test_full_line_comment_detection() -> None:
    """Only lines whose first non-blank text is the marker qualify."""
    assert is_full_line_comment("# note\n")
    assert is_full_line_comment("    #note")
    assert not is_full_line_comment("x = 1  # note")
    assert not is_full_line_comment("\n")
    assert is_full_line_comment("// note", "//")


def test_overlong_excludes_terminator() -> None:
    """Terminators do not count towards the length."""
    assert not is_overlong("x" * 10 + "\r\n", 10)
    assert is_overlong("x" * 11 + "\n", 10)


@parametrize(
    "text, expected",
    [
        ("# hello", "hello"),
        ("    #hello", "hello"),
        ("## twice", "# twice"),
        ("no marker", "no marker"),
        ("#", ""),
    ],
)
def test_strip_marker_removes_exactly_one_marker(text: str, expected: str) -> None:
    """Leading whitespace, one marker and following whitespace are removed."""
    assert strip_marker(text) == expected


def test_render_block_indents_and_drops_empty_lines() -> None:
    """Lines are right-trimmed, empties dropped and delimiters added at the indent."""
    assert render_block(["first  ", "", "second"], 2) == [
        '  """\n',
        "  first\n",
        "  second\n",
        '  """\n',
    ]


def test_render_block_with_custom_delimiter() -> None:
    """The delimiter is configurable."""
    assert render_block(["x"], 0, "'''") == ["'''\n", "x\n", "'''\n"]
