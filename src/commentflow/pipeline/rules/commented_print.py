# topmark:header:start
#
#   project      : CommentFlow
#   file         : commented_print.py
#   file_relpath : src/commentflow/pipeline/rules/commented_print.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Turn an overlong commented-out ``print(...)`` into a formatted block.

Example (limit 40)::

    # print("a rather long message", value, other_value)

becomes::

    \"\"\"
    print(
        "a rather long message", value, other_value
    )
    \"\"\"

The statement is formatted by the injected
[`CodeFormatter`][commentflow.formatter.CodeFormatter]. Without a formatter,
or when formatting fails, the rule declines and later rules get a chance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from commentflow.config.logging import get_logger
from commentflow.formatter import FormatterError
from commentflow.pipeline.rules.base import BaseRule, RuleKind, RuleOutcome
from commentflow.utils.lines import (
    indent_of,
    is_full_line_comment,
    is_overlong,
    render_block,
    strip_marker,
    strip_terminator,
)

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.formatter import CodeFormatter

logger: CommentflowLogger = get_logger(__name__)


@dataclass
class CommentedPrintRule(BaseRule):
    """Rule A: reformat a commented-out print statement.

    Attributes:
        formatter (CodeFormatter | None): Formatting capability; ``None``
            disables the rule.
    """

    kind = RuleKind.COMMENTED_PRINT

    formatter: CodeFormatter | None = None

    def apply(self, lines: Sequence[str], index: int) -> RuleOutcome:
        """Replace ``lines[index]`` with the formatted statement block."""
        cfg = self.config
        line: str = strip_terminator(lines[index])
        if self.formatter is None:
            return self.decline(index, "no formatter configured")
        if not is_overlong(line, cfg.line_length):
            return self.decline(index, "line fits")
        if not is_full_line_comment(line, cfg.comment_marker):
            return self.decline(index, "not a full-line comment")

        code: str = strip_marker(line, cfg.comment_marker)
        if not code.startswith(cfg.statement_prefix):
            return self.decline(index, f"comment does not start with {cfg.statement_prefix!r}")
        if line.find(cfg.comment_marker) >= cfg.line_length:
            return self.decline(index, "comment marker beyond the limit")
        if cfg.excluded_prefix and code.startswith(cfg.excluded_prefix):
            return self.decline(index, f"comment starts with {cfg.excluded_prefix!r}")

        try:
            formatted: str = self.formatter.format(code)
        except FormatterError as exc:
            logger.warning(
                "Could not format commented-out statement at line %d: %s", index + 1, exc
            )
            return RuleOutcome.declined()

        formatted = formatted.rstrip("\r\n")
        if formatted.startswith(cfg.comment_marker):
            formatted = strip_marker(formatted, cfg.comment_marker)

        rendered: list[str] = render_block(
            formatted.splitlines(), indent_of(line), cfg.block_delimiter
        )
        return RuleOutcome.replaced(self.kind, rendered, index + 1)
