# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_wrap.py
#   file_relpath : tests/utils/test_wrap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the break-character-aware text wrapper.

Example-based tests pin the cut selection order (backward scan, bounded
forward scan, hard cut); property tests check that short input is left alone,
that segments only overflow when the forward scan picked a later break
character, and that no non-break character is lost.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from commentflow.constants import DEFAULT_BREAK_CHARS
from commentflow.utils.wrap import FORWARD_LOOKAHEAD, find_cut, wrap_text
from tests.conftest import parametrize


def test_short_text_is_returned_unchanged() -> None:
    """Text within the width is not touched, even if it contains break characters."""
    assert wrap_text("a, b. c", 20) == "a, b. c"


def test_wraps_at_last_space_before_limit() -> None:
    """The backward scan picks the last break character at or before the limit."""
    assert wrap_text("alpha beta gamma delta", 12) == "alpha beta\ngamma delta"


def test_break_character_is_consumed() -> None:
    """A punctuation break character is dropped and never starts the next segment."""
    assert wrap_text("one,two,three", 8) == "one,two\nthree"


def test_run_of_break_characters_and_spaces_is_skipped() -> None:
    """After a cut, consecutive break characters and whitespace are skipped."""
    assert wrap_text("abcdefg., hij", 5) == "abcdefg\nhij"


def test_forward_scan_allows_bounded_overflow() -> None:
    """Without a break before the limit, the first break shortly after it is used."""
    # The space sits at index 7, past max_width=5 but inside the lookahead window.
    assert wrap_text("abcdefg hij", 5) == "abcdefg\nhij"


def test_hard_cut_when_no_break_character_is_near() -> None:
    """A token longer than the width and the lookahead window is cut at the limit."""
    token: str = "x" * 30
    assert wrap_text(token, 10) == "\n".join(["x" * 10] * 3)


def test_forward_scan_window_is_bounded() -> None:
    """A break character beyond the lookahead window is not used."""
    text: str = "y" * (5 + FORWARD_LOOKAHEAD) + " z"
    assert find_cut(text, 5, " ") == 5


def test_custom_break_characters() -> None:
    """Only the configured break characters are candidates."""
    assert wrap_text("a-b-c-d", 3, "-") == "a-b\nc-d"
    assert wrap_text("a b c d", 3, "-") == "a b\nc d"


@parametrize("width", [0, -1])
def test_non_positive_width_is_rejected(width: int) -> None:
    """A width below 1 cannot make progress and raises ``ValueError``."""
    with pytest.raises(ValueError):
        wrap_text("some text", width)


def test_width_one_terminates() -> None:
    """The smallest width still terminates with one character per segment."""
    assert wrap_text("abc", 1) == "a\nb\nc"


_words = st.text(alphabet="abcdefghij", min_size=1, max_size=12)
_separators = st.sampled_from([" ", ", ", ". ", ": ", "; "])


@st.composite
def s_sentence(draw: st.DrawFn) -> str:
    """Words joined by space or punctuation separators."""
    words: list[str] = draw(st.lists(_words, min_size=1, max_size=30))
    out: str = words[0]
    for word in words[1:]:
        out += draw(_separators) + word
    return out


@settings(max_examples=200, deadline=None)
@given(text=s_sentence(), width=st.integers(min_value=1, max_value=120))
def test_wrap_is_identity_on_short_input(text: str, width: int) -> None:
    """Text that already fits comes back unchanged."""
    if len(text) <= width:
        assert wrap_text(text, width) == text


@settings(max_examples=200, deadline=None)
@given(text=s_sentence(), width=st.integers(min_value=1, max_value=60))
def test_no_overflow_except_forward_cuts(text: str, width: int) -> None:
    """Segments only exceed the width by less than the lookahead window."""
    for segment in wrap_text(text, width).split("\n"):
        assert len(segment) < width + FORWARD_LOOKAHEAD


@settings(max_examples=200, deadline=None)
@given(text=s_sentence(), width=st.integers(min_value=1, max_value=60))
def test_tokens_are_preserved(text: str, width: int) -> None:
    """Dropping break characters and whitespace, the character stream is intact."""

    def squash(s: str) -> str:
        return "".join(c for c in s if c not in DEFAULT_BREAK_CHARS and not c.isspace())

    assert squash(wrap_text(text, width)) == squash(text)
