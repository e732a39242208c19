# topmark:header:start
#
#   project      : CommentFlow
#   file         : block_comment.py
#   file_relpath : src/commentflow/pipeline/rules/block_comment.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reflow an existing triple-quoted block.

Applies at a line whose first non-whitespace text is the block delimiter. The
block text is collected up to the closing delimiter, flattened into a single
paragraph, wrapped to fit the limit and rendered back as::

    <indent>\"\"\"
    <indent>wrapped text ...
    <indent>\"\"\"<anything that followed the closing delimiter>

Collection:
    * text after the opening delimiter is the first fragment;
    * each following line without a delimiter is a fragment;
    * on the closing line, the text before the delimiter is the last fragment.

Fragments are whitespace-trimmed and empty fragments are dropped, so that
re-running the rule on its own output is a no-op. A block that opens and
closes on the same line and already fits is left alone. A block that never
closes is consumed through end of file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from commentflow.pipeline.rules.base import BaseRule, RuleKind, RuleOutcome
from commentflow.utils.lines import indent_of, is_overlong, render_block, strip_terminator
from commentflow.utils.wrap import wrap_text


@dataclass
class BlockCommentRule(BaseRule):
    """Rule D: reflow a triple-quoted block comment."""

    kind = RuleKind.BLOCK_COMMENT

    def apply(self, lines: Sequence[str], index: int) -> RuleOutcome:
        """Reflow the block opening at ``lines[index]``."""
        delimiter: str = self.config.block_delimiter
        opening: str = strip_terminator(lines[index])
        open_at: int = opening.find(delimiter)
        if open_at < 0:
            return self.decline(index, "no block delimiter on line")

        indent: int = indent_of(opening)
        fragments: list[str] = []
        suffix: str = ""
        closed_at_eof: bool = False
        end: int = index + 1

        remainder: str = opening[open_at + len(delimiter) :]
        close_at: int = remainder.find(delimiter)
        if close_at >= 0:
            # Opened and closed on the same line.
            if not is_overlong(opening, self.config.line_length):
                return self.decline(index, "single-line block already fits")
            fragments.append(remainder[:close_at])
            suffix = remainder[close_at + len(delimiter) :]
        else:
            fragments.append(remainder)
            while end < len(lines):
                body: str = strip_terminator(lines[end])
                end += 1
                close_at = body.find(delimiter)
                if close_at >= 0:
                    fragments.append(body[:close_at])
                    suffix = body[close_at + len(delimiter) :]
                    break
                fragments.append(body)
            else:
                closed_at_eof = True

        text: str = " ".join(f.strip() for f in fragments if f.strip())
        wrapped: str = wrap_text(
            text, self.wrap_width(indent), self.config.break_chars
        ).lstrip()

        rendered: list[str] = render_block(wrapped.split("\n"), indent, delimiter)
        if suffix.rstrip():
            rendered[-1] = rendered[-1].rstrip("\n") + suffix.rstrip() + "\n"
        return RuleOutcome.replaced(self.kind, rendered, end, closed_at_eof=closed_at_eof)
