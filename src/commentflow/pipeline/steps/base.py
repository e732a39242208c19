# topmark:header:start
#
#   project      : CommentFlow
#   file         : base.py
#   file_relpath : src/commentflow/pipeline/steps/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class for class-based pipeline steps.

Steps are invoked as callables. `BaseStep` implements the shared lifecycle:

    ctx = step(ctx)  # internally: may_proceed -> run? -> hint

Subclasses gate themselves in ``may_proceed()``, mutate the context in
``run()`` and only write to the axis they declare.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from commentflow.config.logging import get_logger

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.pipeline.context import ProcessingContext
    from commentflow.pipeline.status import Axis

logger: CommentflowLogger = get_logger(__name__)


@dataclass
class BaseStep:
    """Reusable foundation for pipeline steps.

    Attributes:
        name (str): Stable step identifier for logs.
        primary_axis (Axis | None): The status axis this step writes.
    """

    name: str
    primary_axis: Axis | None

    def __call__(self, ctx: ProcessingContext) -> ProcessingContext:
        """Invoke the step lifecycle: gate, run (if allowed), hint.

        Args:
            ctx (ProcessingContext): The mutable processing context for the current file.

        Returns:
            ProcessingContext: The same context instance after mutation.
        """
        ctx.steps.append(self)

        if self.may_proceed(ctx):
            logger.debug("Pipeline step %s - running for %s", self.name, ctx.path)
            self.run(ctx)
            if ctx.flow.halt is True:
                logger.info("Pipeline halted by %s: %s", ctx.flow.at_step, ctx.flow.reason)
        else:
            logger.debug("Pipeline step %s may not proceed for %s", self.name, ctx.path)

        self.hint(ctx)
        return ctx

    def may_proceed(self, ctx: ProcessingContext) -> bool:
        """Return whether the step should run given the current context.

        Default: run unless a previous step halted the pipeline.
        """
        return not ctx.is_halted

    def run(self, ctx: ProcessingContext) -> None:
        """Perform the step's work, mutating ``ctx`` in place."""
        pass

    def hint(self, ctx: ProcessingContext) -> None:
        """Attach non-binding diagnostics to ``ctx`` (optional)."""
        pass
