# topmark:header:start
#
#   project      : CommentFlow
#   file         : reflower.py
#   file_relpath : src/commentflow/pipeline/steps/reflower.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Reflow step: run the rule engine over the file image.

The engine emits new lines terminated by ``"\n"``; this step converts them to
the file's own newline style and restores a missing final terminator, so
``ctx.updated`` is exactly what the writer will commit. Untouched lines are
passed through byte for byte.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Collection

from commentflow.config.logging import get_logger
from commentflow.pipeline.status import Axis, ContentStatus, ReflowStatus
from commentflow.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.pipeline.context import ProcessingContext
    from commentflow.pipeline.engine import ReflowResult

logger: CommentflowLogger = get_logger(__name__)


def normalize_terminators(
    lines: list[str],
    rewritten: Collection[int],
    newline_style: str,
    ends_with_newline: bool,
) -> list[str]:
    """Return ``lines`` with the engine's ``"\\n"`` terminators in ``newline_style``.

    Only the lines at the ``rewritten`` indices are touched; input lines the
    engine copied through keep their own terminator. When the original file
    did not end with a terminator and its tail was rewritten, the last line
    loses its own.
    """
    out: list[str] = list(lines)
    for i in rewritten:
        line: str = out[i]
        if newline_style != "\n" and line.endswith("\n") and not line.endswith(newline_style):
            out[i] = line[:-1] + newline_style
    last: int = len(out) - 1
    if last in rewritten and not ends_with_newline and out[last].endswith(newline_style):
        out[last] = out[last][: -len(newline_style)]
    return out


class ReflowStep(BaseStep):
    """Apply the rewrite rules and set `ReflowStatus`.

    Axis written: reflow

    Sets:
      - ReflowStatus: {UNCHANGED, CHANGED, SKIPPED}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__, primary_axis=Axis.REFLOW)

    def may_proceed(self, ctx: ProcessingContext) -> bool:
        """Run only on a successfully read file."""
        return not ctx.is_halted and ctx.status.content in (ContentStatus.OK, ContentStatus.EMPTY)

    def run(self, ctx: ProcessingContext) -> None:
        """Reflow ``ctx.lines`` into ``ctx.updated``."""
        result: ReflowResult = ctx.engine.reflow(ctx.lines, source=str(ctx.path))
        ctx.result = result

        if not result.events:
            ctx.status.reflow = ReflowStatus.UNCHANGED
            logger.debug("No rule fired for %s", ctx.path)
            return

        updated: list[str] = normalize_terminators(
            result.lines,
            result.rewritten,
            ctx.newline_style,
            ctx.ends_with_newline is not False,
        )
        if updated == ctx.lines:
            ctx.status.reflow = ReflowStatus.UNCHANGED
            ctx.updated = None
            logger.debug("No changes for %s", ctx.path)
            return

        ctx.updated = updated
        ctx.status.reflow = ReflowStatus.CHANGED
        logger.debug("%d change(s) for %s", result.changes, ctx.path)

    def hint(self, ctx: ProcessingContext) -> None:
        """Surface engine warnings (unterminated blocks) as file diagnostics."""
        if ctx.status.content not in (ContentStatus.OK, ContentStatus.EMPTY):
            if ctx.status.reflow == ReflowStatus.PENDING:
                ctx.status.reflow = ReflowStatus.SKIPPED
            return
        for event in ctx.events:
            if event.closed_at_eof:
                ctx.add_warning(
                    f"Unterminated triple-quoted block starting at line {event.first_line} "
                    "was reflowed through end of file"
                )
