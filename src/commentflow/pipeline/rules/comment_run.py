# topmark:header:start
#
#   project      : CommentFlow
#   file         : comment_run.py
#   file_relpath : src/commentflow/pipeline/rules/comment_run.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Merge a run of full-line comments into one reflowed block.

The run starts at an overlong full-line comment and extends over every
following full-line comment, whatever its length; the first line that is not a
full-line comment (including a blank line) or end of file ends it. The
comment text is flattened into one paragraph, wrapped at
``line_length - common_indent`` and rendered as a triple-quoted block at the
smallest indentation found in the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from commentflow.pipeline.rules.base import BaseRule, RuleKind, RuleOutcome
from commentflow.utils.lines import (
    indent_of,
    is_full_line_comment,
    is_overlong,
    render_block,
    strip_marker,
    strip_terminator,
)
from commentflow.utils.wrap import wrap_text


@dataclass
class CommentRunRule(BaseRule):
    """Rule C: merge consecutive full-line comments."""

    kind = RuleKind.COMMENT_RUN

    def run_end(self, lines: Sequence[str], index: int) -> int:
        """Return the index just past the comment run starting at ``index``."""
        end: int = index
        while end < len(lines) and is_full_line_comment(lines[end], self.config.comment_marker):
            end += 1
        return end

    def apply(self, lines: Sequence[str], index: int) -> RuleOutcome:
        """Merge the comment run starting at ``lines[index]``."""
        marker: str = self.config.comment_marker
        if not is_full_line_comment(lines[index], marker):
            return self.decline(index, "not a full-line comment")
        if not is_overlong(lines[index], self.config.line_length):
            return self.decline(index, "line fits")

        end: int = self.run_end(lines, index)
        run: Sequence[str] = lines[index:end]
        common_indent: int = min(indent_of(line) for line in run)

        fragments: list[str] = [
            strip_marker(strip_terminator(line)[common_indent:], marker) for line in run
        ]
        text: str = " ".join(f.rstrip() for f in fragments if f.strip())
        wrapped: str = wrap_text(
            text, self.wrap_width(common_indent), self.config.break_chars
        ).lstrip()

        rendered: list[str] = render_block(
            wrapped.split("\n"), common_indent, self.config.block_delimiter
        )
        return RuleOutcome.replaced(self.kind, rendered, end)
