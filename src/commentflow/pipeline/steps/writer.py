# topmark:header:start
#
#   project      : CommentFlow
#   file         : writer.py
#   file_relpath : src/commentflow/pipeline/steps/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Writer step for committing reflowed content to a sink.

This is the only step that touches the destination. The sink is chosen from
the configuration:

Sinks
-----
- NullSink: no-op (dry run, the default).
- StdoutSink: prints the reflowed content (``--stdout``).
- FileSystemSink: writes a temporary file next to the target and renames it
  over the original with ``os.replace`` (``write_strategy = "atomic"``).
- InPlaceSink: truncates and rewrites the target directly
  (``write_strategy = "inplace"``).

A failed write is recorded on the context (``WriteStatus.FAILED`` plus an
error diagnostic) and never propagates, so other files are still processed.
With the atomic sink the original file is left untouched on failure.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import click

from commentflow.config.logging import get_logger
from commentflow.config.model import WriteStrategy
from commentflow.pipeline.status import Axis, ContentStatus, ReflowStatus, WriteStatus
from commentflow.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.pipeline.context import ProcessingContext

logger: CommentflowLogger = get_logger(__name__)


class WriteSink(Protocol):
    """Protocol for write sinks used by the writer step."""

    def write(self, *, ctx: ProcessingContext) -> WriteResult:
        """Write the reflowed content for ``ctx`` to the target sink.

        Args:
            ctx (ProcessingContext): Context that holds the reflowed lines.

        Returns:
            WriteResult: The write status and the number of bytes written.

        Raises:
            OSError: If the destination cannot be written.
        """
        ...


@dataclass
class WriteResult:
    """Structured result of a write operation."""

    status: WriteStatus
    bytes_written: int = 0


def render_output(ctx: ProcessingContext) -> str:
    """Return the full text to commit for ``ctx`` (BOM restored)."""
    lines: list[str] = ctx.updated if ctx.updated is not None else ctx.lines
    text: str = "".join(lines)
    if ctx.leading_bom:
        text = "\ufeff" + text
    return text


class NullSink:
    """Dry-run sink: does not write anything."""

    def write(self, *, ctx: ProcessingContext) -> WriteResult:
        """Return ``SKIPPED`` without touching anything."""
        return WriteResult(status=WriteStatus.SKIPPED, bytes_written=0)


class StdoutSink:
    """Standard-output sink."""

    def write(self, *, ctx: ProcessingContext) -> WriteResult:
        """Print the file's content (reflowed if changed) to standard output.

        Returns:
            WriteResult: ``WRITTEN`` when reflowed content was printed,
            ``SKIPPED`` when the unchanged original was echoed.
        """
        text: str = render_output(ctx)
        click.echo(text, nl=False)
        status: WriteStatus = (
            WriteStatus.WRITTEN if ctx.updated is not None else WriteStatus.SKIPPED
        )
        return WriteResult(status=status, bytes_written=len(text.encode(ctx.config.encoding)))


class InPlaceSink:
    """Filesystem sink that rewrites ``ctx.path`` directly."""

    def write(self, *, ctx: ProcessingContext) -> WriteResult:
        """Overwrite ``ctx.path`` with the reflowed content."""
        data: bytes = render_output(ctx).encode(ctx.config.encoding)
        with open(ctx.path, "wb") as f:
            f.write(data)
        logger.debug("InPlaceSink: wrote %d bytes to file %s", len(data), ctx.path)
        return WriteResult(status=WriteStatus.WRITTEN, bytes_written=len(data))


class FileSystemSink:
    """Filesystem sink that replaces ``ctx.path`` atomically."""

    def write(self, *, ctx: ProcessingContext) -> WriteResult:
        """Write to a temporary sibling file, then rename it over ``ctx.path``.

        The temporary file inherits the target's permission bits. It is
        removed if anything fails before the rename.
        """
        data: bytes = render_output(ctx).encode(ctx.config.encoding)
        target: Path = ctx.path
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            shutil.copymode(target, tmp_path)
            os.replace(tmp_path, target)
            tmp_path = None
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
        logger.debug("FileSystemSink: wrote %d bytes to file %s", len(data), target)
        return WriteResult(status=WriteStatus.WRITTEN, bytes_written=len(data))


def select_sink(ctx: ProcessingContext) -> WriteSink:
    """Return the appropriate sink for the given context.

    Args:
        ctx (ProcessingContext): Processing context for the current file.

    Returns:
        WriteSink: ``StdoutSink`` when printing, ``NullSink`` when not applying,
        otherwise the filesystem sink for the configured write strategy.
    """
    if ctx.config.stdout:
        logger.debug("Selected STDOUT sink (ctx.config.stdout is True)")
        return StdoutSink()
    if not ctx.config.apply_changes:
        logger.debug("Selected NULL sink (ctx.config.apply_changes is False)")
        return NullSink()
    if ctx.config.write_strategy == WriteStrategy.INPLACE:
        logger.debug("Selected in-place file system sink")
        return InPlaceSink()
    logger.debug("Selected atomic file system sink")
    return FileSystemSink()


class WriterStep(BaseStep):
    """Commit the reflowed content and set `WriteStatus`.

    Axis written: write

    Sets:
      - WriteStatus: {WRITTEN, SKIPPED, FAILED}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__, primary_axis=Axis.WRITE)

    def may_proceed(self, ctx: ProcessingContext) -> bool:
        """Write changed files; with ``--stdout`` echo every readable file."""
        if ctx.is_halted:
            return False
        if ctx.config.stdout:
            return ctx.status.content in (ContentStatus.OK, ContentStatus.EMPTY)
        return ctx.status.reflow == ReflowStatus.CHANGED

    def run(self, ctx: ProcessingContext) -> None:
        """Write through the selected sink, recording failures on the context."""
        sink: WriteSink = select_sink(ctx)
        try:
            result: WriteResult = sink.write(ctx=ctx)
        except OSError as exc:
            ctx.status.write = WriteStatus.FAILED
            message: str = f"Cannot write {ctx.path}: {exc}"
            ctx.add_error(message)
            logger.error(message)
            return
        ctx.status.write = result.status
        ctx.bytes_written = result.bytes_written

    def hint(self, ctx: ProcessingContext) -> None:
        """Mark files that needed no write as ``SKIPPED``."""
        if ctx.status.write == WriteStatus.PENDING:
            ctx.status.write = WriteStatus.SKIPPED
