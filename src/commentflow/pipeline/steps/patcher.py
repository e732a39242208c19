# topmark:header:start
#
#   project      : CommentFlow
#   file         : patcher.py
#   file_relpath : src/commentflow/pipeline/steps/patcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Patch (diff) generation step.

Compares ``ctx.lines`` with ``ctx.updated`` and stores a unified diff in
``ctx.diff``. The step performs no I/O; the CLI decides how to display diffs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from commentflow.config.logging import get_logger
from commentflow.pipeline.status import Axis, PatchStatus, ReflowStatus
from commentflow.pipeline.steps.base import BaseStep
from commentflow.utils.diff import render_patch, unified_diff

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.pipeline.context import ProcessingContext

logger: CommentflowLogger = get_logger(__name__)


class PatcherStep(BaseStep):
    """Build a unified diff for changed files and set `PatchStatus`.

    Axis written: patch

    Sets:
      - PatchStatus: {GENERATED, SKIPPED}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__, primary_axis=Axis.PATCH)

    def may_proceed(self, ctx: ProcessingContext) -> bool:
        """Run only once the reflow step has finished."""
        return not ctx.is_halted and ctx.status.reflow != ReflowStatus.PENDING

    def run(self, ctx: ProcessingContext) -> None:
        """Attach ``ctx.diff`` when the file would change."""
        if ctx.status.reflow != ReflowStatus.CHANGED or ctx.updated is None:
            ctx.status.patch = PatchStatus.SKIPPED
            ctx.diff = None
            return

        text: str = unified_diff(ctx.lines, ctx.updated, str(ctx.path), ctx.newline_style)
        if not text:
            ctx.status.patch = PatchStatus.SKIPPED
            ctx.diff = None
            return

        ctx.diff = text
        ctx.status.patch = PatchStatus.GENERATED
        logger.trace("Patch (rendered):\n%s", render_patch(text))
