# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_inline_comment.py
#   file_relpath : tests/pipeline/rules/test_inline_comment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Inline comment rule: split an overlong code line into comment + code."""

from __future__ import annotations

from commentflow.pipeline.rules import InlineCommentRule, RuleKind, RuleOutcome
from tests.conftest import make_config, mark_pipeline, parametrize


def _rule() -> InlineCommentRule:
    return InlineCommentRule(make_config(line_length=30))


@mark_pipeline
def test_comment_moves_above_code_at_same_indent() -> None:
    """The comment goes first at the code's indentation, then the code."""
    lines: list[str] = ["    value = compute(x)  # explain the computation\n"]
    outcome: RuleOutcome = _rule().apply(lines, 0)

    assert outcome.fired
    assert outcome.rule is RuleKind.INLINE_COMMENT
    assert outcome.resume_at == 1
    assert outcome.lines == (
        "    # explain the computation\n",
        "    value = compute(x)\n",
    )


@mark_pipeline
def test_split_happens_at_first_marker() -> None:
    """Everything after the first marker is comment text, even a second marker."""
    lines: list[str] = ["x = 1  # first part # second part of it\n"]
    outcome: RuleOutcome = _rule().apply(lines, 0)
    assert outcome.lines == ("# first part # second part of it\n", "x = 1\n")


@mark_pipeline
@parametrize(
    "line",
    [
        "x = 1  # short\n",  # fits the limit
        "value = some_function_name(argument_one)\n",  # no marker
        "    # a full-line comment that is rather long\n",  # left to the run rule
    ],
)
def test_declines(line: str) -> None:
    """Short lines, lines without a marker and full-line comments are declined."""
    assert not _rule().apply([line], 0).fired
