# topmark:header:start
#
#   project      : CommentFlow
#   file         : base.py
#   file_relpath : src/commentflow/pipeline/rules/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class and result types shared by all rewrite rules.

A rule inspects the line sequence at a start index and either *declines* or
returns replacement lines together with ``resume_at``, the index of the first
input line it did not consume. Rules are stateless apart from their
configuration, so one instance can serve any number of files.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Sequence

from yachalk import chalk

from commentflow.config.logging import get_logger
from commentflow.constants import MIN_WRAP_WIDTH
from commentflow.utils.colored_enum import ColoredStrEnum

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.config.model import Config

logger: CommentflowLogger = get_logger(__name__)


class RuleKind(ColoredStrEnum):
    """Identifies the rule that produced a rewrite."""

    BLOCK_COMMENT = ("reflowed triple-quoted block", chalk.cyan)
    COMMENTED_PRINT = ("reformatted commented-out print", chalk.magenta)
    INLINE_COMMENT = ("split inline comment", chalk.yellow)
    COMMENT_RUN = ("merged comment block", chalk.blue)


@dataclass(frozen=True)
class RuleOutcome:
    """Result of trying one rule at one line index.

    Attributes:
        rule (RuleKind | None): The rule that fired, or ``None`` when it declined.
        lines (tuple[str, ...]): Replacement lines, each ending in ``"\\n"``.
            Empty when the rule declined.
        resume_at (int | None): Index of the first unconsumed input line, or
            ``None`` when the rule declined.
        closed_at_eof (bool): True when a multi-line span had no terminator and
            was closed at end of file.
    """

    rule: RuleKind | None = None
    lines: tuple[str, ...] = ()
    resume_at: int | None = None
    closed_at_eof: bool = False

    @classmethod
    def declined(cls) -> RuleOutcome:
        """Return the outcome of a rule that does not apply."""
        return cls()

    @classmethod
    def replaced(
        cls,
        rule: RuleKind,
        lines: Sequence[str],
        resume_at: int,
        *,
        closed_at_eof: bool = False,
    ) -> RuleOutcome:
        """Return the outcome of a rule that rewrote ``[start, resume_at)``."""
        return cls(
            rule=rule, lines=tuple(lines), resume_at=resume_at, closed_at_eof=closed_at_eof
        )

    @property
    def fired(self) -> bool:
        """Return True if the rule produced a replacement."""
        return self.resume_at is not None


@dataclass
class BaseRule:
    """Reusable foundation for rewrite rules.

    Subclasses set ``kind`` and implement ``apply()``. The engine guarantees
    that ``index`` is a valid position in ``lines``.

    Attributes:
        config (Config): Formatting settings (limit, markers, break characters).
    """

    kind: ClassVar[RuleKind]

    config: Config

    def apply(self, lines: Sequence[str], index: int) -> RuleOutcome:
        """Try the rule at ``lines[index]``.

        Args:
            lines (Sequence[str]): The whole file, one entry per physical line.
            index (int): Start index.

        Returns:
            RuleOutcome: ``declined`` or the replacement and resume index.
        """
        raise NotImplementedError

    def wrap_width(self, indent: int) -> int:
        """Return the wrapper width left once ``indent`` columns are reserved."""
        return max(MIN_WRAP_WIDTH, self.config.line_length - indent)

    def decline(self, index: int, reason: str) -> RuleOutcome:
        """Log why the rule declines at ``index`` and return a declined outcome."""
        logger.trace("%s: declined at line %d (%s)", type(self).__name__, index + 1, reason)
        return RuleOutcome.declined()
