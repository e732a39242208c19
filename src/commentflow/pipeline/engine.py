# topmark:header:start
#
#   project      : CommentFlow
#   file         : engine.py
#   file_relpath : src/commentflow/pipeline/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-classification and block-reflow engine.

[`ReflowEngine.reflow`][commentflow.pipeline.engine.ReflowEngine.reflow] walks a
file's lines once, top to bottom. At every index it tries the rules in a fixed
priority order and lets the first one that fires consume its span:

| Priority | Rule | Tried when |
|---|---|---|
| 1 | block comment (D) | the line starts with the block delimiter |
| 2 | commented-out print (A) | always |
| 3 | inline comment (B) | always |
| 4 | comment run (C) | the line is an overlong full-line comment |

A line no rule claims is copied through unchanged, terminator included. The
index only ever moves forward, so the walk always terminates.

The engine keeps no per-file state; one instance is reused across files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from commentflow.config.logging import get_logger
from commentflow.pipeline.rules import (
    BlockCommentRule,
    CommentedPrintRule,
    CommentRunRule,
    InlineCommentRule,
    RuleKind,
    RuleOutcome,
)
from commentflow.utils.lines import is_full_line_comment, is_overlong

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.config.model import Config
    from commentflow.formatter import CodeFormatter

logger: CommentflowLogger = get_logger(__name__)


@dataclass(frozen=True)
class RewriteEvent:
    """One successful rule application.

    Attributes:
        rule (RuleKind): The rule that fired.
        first_line (int): 1-based number of the first consumed input line.
        last_line (int): 1-based number of the last consumed input line.
        output_lines (int): Number of lines emitted in place of the span.
        closed_at_eof (bool): True if the span ran to end of file unterminated.
    """

    rule: RuleKind
    first_line: int
    last_line: int
    output_lines: int
    closed_at_eof: bool = False

    def describe(self) -> str:
        """Return a short human-readable description (``lines 3-7: ...``)."""
        if self.first_line == self.last_line:
            where: str = f"line {self.first_line}"
        else:
            where = f"lines {self.first_line}-{self.last_line}"
        return f"{where}: {self.rule.value}"


@dataclass
class ReflowResult:
    """Output of reflowing one file.

    Attributes:
        lines (list[str]): The rewritten line sequence.
        events (list[RewriteEvent]): Rule applications in file order.
        modified (bool): True when ``lines`` differs from the input.
        rewritten (set[int]): Indices into ``lines`` of the lines emitted by
            rules; every other line is an input line copied through.
    """

    lines: list[str] = field(default_factory=lambda: [])
    events: list[RewriteEvent] = field(default_factory=lambda: [])
    rewritten: set[int] = field(default_factory=lambda: set())
    modified: bool = False

    @property
    def changes(self) -> int:
        """Number of rule applications (the per-file change counter)."""
        return len(self.events)


class ReflowEngine:
    """Apply the rewrite rules to whole files.

    Args:
        config (Config): Formatting settings shared by all rules.
        formatter (CodeFormatter | None): Capability used by the commented-print
            rule; ``None`` disables that rule.
    """

    def __init__(self, config: Config, formatter: CodeFormatter | None = None) -> None:
        self.config = config
        self.formatter = formatter
        self.block_rule = BlockCommentRule(config)
        self.print_rule = CommentedPrintRule(config, formatter=formatter)
        self.inline_rule = InlineCommentRule(config)
        self.run_rule = CommentRunRule(config)

    def try_rules(self, lines: Sequence[str], index: int) -> RuleOutcome:
        """Return the outcome of the first rule that fires at ``index``.

        Args:
            lines (Sequence[str]): The file's lines.
            index (int): Current position.

        Returns:
            RuleOutcome: The winning outcome, or ``declined`` if no rule fired.
        """
        cfg = self.config
        line: str = lines[index]

        if line.lstrip().startswith(cfg.block_delimiter):
            outcome: RuleOutcome = self.block_rule.apply(lines, index)
            if outcome.fired:
                return outcome

        outcome = self.print_rule.apply(lines, index)
        if outcome.fired:
            return outcome

        outcome = self.inline_rule.apply(lines, index)
        if outcome.fired:
            return outcome

        if is_full_line_comment(line, cfg.comment_marker) and is_overlong(line, cfg.line_length):
            return self.run_rule.apply(lines, index)

        return RuleOutcome.declined()

    def reflow(self, lines: Sequence[str], *, source: str = "<string>") -> ReflowResult:
        """Rewrite ``lines`` and report every rule application.

        Args:
            lines (Sequence[str]): The file's lines with their terminators.
            source (str): Name used in log messages (usually the file path).

        Returns:
            ReflowResult: The rewritten lines and the rewrite events.
        """
        result = ReflowResult()
        index: int = 0
        count: int = len(lines)

        while index < count:
            outcome: RuleOutcome = self.try_rules(lines, index)
            if not outcome.fired:
                result.lines.append(lines[index])
                index += 1
                continue

            assert outcome.rule is not None and outcome.resume_at is not None
            resume_at: int = outcome.resume_at
            event = RewriteEvent(
                rule=outcome.rule,
                first_line=index + 1,
                last_line=resume_at,
                output_lines=len(outcome.lines),
                closed_at_eof=outcome.closed_at_eof,
            )
            self._log_event(event, source)
            result.events.append(event)
            start: int = len(result.lines)
            result.lines.extend(outcome.lines)
            result.rewritten.update(range(start, len(result.lines)))
            index = resume_at

        result.modified = result.lines != list(lines)
        logger.debug(
            "Reflowed %s: %d change(s), %d -> %d line(s)",
            source,
            result.changes,
            count,
            len(result.lines),
        )
        return result

    def reflow_text(self, text: str, *, source: str = "<string>") -> str:
        """Convenience wrapper around `reflow` for a whole text buffer."""
        return "".join(self.reflow(text.splitlines(keepends=True), source=source).lines)

    def _log_event(self, event: RewriteEvent, source: str) -> None:
        match event.rule:
            case RuleKind.BLOCK_COMMENT:
                logger.info(
                    "Processed triple-quoted block in %s (lines %d-%d).",
                    source,
                    event.first_line,
                    event.last_line,
                )
                if event.closed_at_eof:
                    logger.warning(
                        "Unterminated triple-quoted block in %s starting at line %d; "
                        "reflowed through end of file.",
                        source,
                        event.first_line,
                    )
            case RuleKind.COMMENTED_PRINT:
                logger.info(
                    "Modified commented-out print in %s at line %d.", source, event.first_line
                )
            case RuleKind.INLINE_COMMENT:
                logger.info("Split inline comment in %s at line %d.", source, event.first_line)
            case RuleKind.COMMENT_RUN:
                logger.info(
                    "Merged comment block in %s from line %d to %d.",
                    source,
                    event.first_line,
                    event.last_line,
                )
