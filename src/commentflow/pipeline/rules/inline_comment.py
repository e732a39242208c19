# topmark:header:start
#
#   project      : CommentFlow
#   file         : inline_comment.py
#   file_relpath : src/commentflow/pipeline/rules/inline_comment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Move a trailing comment of an overlong code line onto its own line.

``    value = compute(x)  # explain the computation`` becomes::

    # explain the computation
    value = compute(x)

The line is split at the first comment marker; no attempt is made to detect a
marker inside a string literal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from commentflow.pipeline.rules.base import BaseRule, RuleKind, RuleOutcome
from commentflow.utils.lines import (
    indent_of,
    is_full_line_comment,
    is_overlong,
    strip_marker,
    strip_terminator,
)


@dataclass
class InlineCommentRule(BaseRule):
    """Rule B: split an inline comment from its code."""

    kind = RuleKind.INLINE_COMMENT

    def apply(self, lines: Sequence[str], index: int) -> RuleOutcome:
        """Split ``lines[index]`` into a comment line and a code line."""
        marker: str = self.config.comment_marker
        line: str = strip_terminator(lines[index])
        if not is_overlong(line, self.config.line_length):
            return self.decline(index, "line fits")
        hash_at: int = line.find(marker)
        if hash_at < 0:
            return self.decline(index, "no comment marker")
        if is_full_line_comment(line, marker):
            return self.decline(index, "already a full-line comment")

        code: str = line[:hash_at].rstrip()
        comment: str = strip_marker(line[hash_at:], marker)
        pad: str = " " * indent_of(line)
        return RuleOutcome.replaced(
            self.kind, [f"{pad}{marker} {comment}\n", f"{code}\n"], index + 1
        )
