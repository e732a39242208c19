# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_diff.py
#   file_relpath : tests/utils/test_diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diff utils: unified diff creation and rendering from text or sequences."""

from __future__ import annotations

from commentflow.utils.diff import render_patch, unified_diff


def test_unified_diff_headers_and_hunks() -> None:
    """The diff names both sides of the file and lists removed and added lines."""
    patch: str = unified_diff(["a\n", "b\n"], ["a\n", "c\n"], "pkg/mod.py")
    lines: list[str] = patch.splitlines()
    assert lines[0] == "--- pkg/mod.py (current)"
    assert lines[1] == "+++ pkg/mod.py (reflowed)"
    assert "-b" in lines
    assert "+c" in lines


def test_unified_diff_of_equal_images_is_empty() -> None:
    """No differences means an empty diff."""
    assert unified_diff(["a\n"], ["a\n"], "x.py") == ""


def test_unified_diff_marks_missing_final_newline() -> None:
    """An unterminated last line is followed by the usual marker line."""
    patch: str = unified_diff(["a\n", "b"], ["a\n", "c"], "x.py")
    assert "-b\n\\ No newline at end of file\n" in patch
    assert "+c\n\\ No newline at end of file\n" in patch


def test_render_patch_accepts_str_and_list() -> None:
    """`render_patch` should accept both a diff string and an iterable of lines."""
    diff_text = "--- a\n+++ b\n-foo\n+bar\n"
    s1 = render_patch(diff_text)
    s2 = render_patch(diff_text.splitlines(False))

    assert isinstance(s1, str) and isinstance(s2, str) and s1 and s2
    assert "foo" in s1 and "bar" in s2


def test_render_patch_keeps_one_output_line_per_diff_line() -> None:
    """Every diff line is rendered once, unprefixed, and a CR is made visible."""
    out: str = render_patch(["-a\r\n", "+b\n", " c\n"])
    assert len(out.splitlines()) == 3
    assert "-a\\r" in out
    assert out.endswith(" c\n")


def test_render_patch_empty_input_is_safe() -> None:
    """Empty diff input should not raise and should return a string."""
    assert render_patch("") == ""
