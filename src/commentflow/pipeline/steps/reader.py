# topmark:header:start
#
#   project      : CommentFlow
#   file         : reader.py
#   file_relpath : src/commentflow/pipeline/steps/reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Reader step: load the file image with its original line endings.

The file is decoded with the configured encoding and ``newline=""`` so every
line keeps its own terminator (``"\n"``, ``"\r\n"`` or ``"\r"``). The dominant
terminator becomes ``ctx.newline_style``; lines emitted by the rules are
converted to it later. A leading UTF-8 BOM is removed from the image and
remembered in ``ctx.leading_bom``.

Failures are local to the file: the content axis records the reason, an error
diagnostic is added and the pipeline halts for that file only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from commentflow.config.logging import get_logger
from commentflow.pipeline.status import Axis, ContentStatus
from commentflow.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.pipeline.context import ProcessingContext

logger: CommentflowLogger = get_logger(__name__)


def newline_histogram(lines: list[str]) -> dict[str, int]:
    """Count the line terminators used in ``lines``."""
    hist: dict[str, int] = {"\n": 0, "\r\n": 0, "\r": 0}
    for ln in lines:
        if ln.endswith("\r\n"):
            hist["\r\n"] += 1
        elif ln.endswith("\n"):
            hist["\n"] += 1
        elif ln.endswith("\r"):
            hist["\r"] += 1
    return hist


class ReaderStep(BaseStep):
    """Load the file and set `ContentStatus`.

    Axis written: content

    Sets:
      - ContentStatus: {OK, EMPTY, NOT_FOUND, UNREADABLE, DECODE_ERROR}
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__, primary_axis=Axis.CONTENT)

    def run(self, ctx: ProcessingContext) -> None:
        """Read ``ctx.path`` into ``ctx.lines``.

        Args:
            ctx (ProcessingContext): The processing context for the current file.
        """
        try:
            with ctx.path.open("r", encoding=ctx.config.encoding, newline="") as f:
                lines: list[str] = list(f)
        except FileNotFoundError:
            self._fail(ctx, ContentStatus.NOT_FOUND, f"File not found: {ctx.path}")
            return
        except UnicodeDecodeError as exc:
            self._fail(
                ctx,
                ContentStatus.DECODE_ERROR,
                f"Cannot decode {ctx.path} as {ctx.config.encoding}: {exc.reason}",
            )
            return
        except OSError as exc:
            self._fail(ctx, ContentStatus.UNREADABLE, f"Cannot read {ctx.path}: {exc}")
            return

        if lines and lines[0].startswith("\ufeff"):
            ctx.leading_bom = True
            lines[0] = lines[0][1:]
            if lines[0] == "":
                lines = lines[1:]

        ctx.lines = lines
        if not lines:
            ctx.ends_with_newline = False
            ctx.status.content = ContentStatus.EMPTY
            logger.debug("Reader: empty file %s", ctx.path)
            return

        ctx.ends_with_newline = lines[-1].endswith(("\r\n", "\n", "\r"))
        hist: dict[str, int] = newline_histogram(lines)
        dominant, count = max(hist.items(), key=lambda kv: kv[1])
        if count > 0:
            ctx.newline_style = dominant

        ctx.status.content = ContentStatus.OK
        logger.debug(
            "Reader step completed for %s: %d line(s), newline style %r, ends_with_newline: %s",
            ctx.path,
            len(lines),
            ctx.newline_style,
            ctx.ends_with_newline,
        )

    def _fail(self, ctx: ProcessingContext, status: ContentStatus, message: str) -> None:
        ctx.status.content = status
        ctx.add_error(message)
        logger.error(message)
        ctx.request_halt(reason=status.value, at_step=self)
