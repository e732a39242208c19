# topmark:header:start
#
#   project      : CommentFlow
#   file         : runner.py
#   file_relpath : src/commentflow/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run a pipeline for one file or for a list of files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from commentflow.config.logging import get_logger
from commentflow.pipeline.context import ProcessingContext

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from commentflow.config.logging import CommentflowLogger
    from commentflow.config.model import Config
    from commentflow.pipeline.engine import ReflowEngine
    from commentflow.pipeline.steps.base import BaseStep

logger: CommentflowLogger = get_logger(__name__)


def run(ctx: ProcessingContext, steps: Sequence[BaseStep]) -> ProcessingContext:
    """Execute the pipeline sequentially.

    Args:
        ctx (ProcessingContext): Mutable processing context.
        steps (Sequence[BaseStep]): Ordered sequence of pipeline steps.

    Returns:
        ProcessingContext: The final processing context after all steps have run.
    """
    for step in steps:
        ctx = step(ctx)
    return ctx


def process_files(
    paths: Iterable[Path],
    config: Config,
    engine: ReflowEngine,
    steps: Sequence[BaseStep],
) -> list[ProcessingContext]:
    """Run ``steps`` for every path, one fresh context per file.

    Problems with one file are recorded on its context; they never prevent
    the remaining files from being processed.

    Args:
        paths (Iterable[Path]): Files to process, in order.
        config (Config): Effective configuration.
        engine (ReflowEngine): Engine shared by all files.
        steps (Sequence[BaseStep]): Pipeline to run.

    Returns:
        list[ProcessingContext]: One finished context per input path.
    """
    results: list[ProcessingContext] = []
    for path in paths:
        ctx = ProcessingContext.bootstrap(path=path, config=config, engine=engine)
        logger.debug("Processing %s", path)
        results.append(run(ctx, steps))
    logger.info("Processed %d file(s)", len(results))
    return results
