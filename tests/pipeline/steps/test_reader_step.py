# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_reader_step.py
#   file_relpath : tests/pipeline/steps/test_reader_step.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the `reader` pipeline step.

The reader keeps every line's own terminator, records the dominant newline
style and whether the file ends with a terminator, strips a leading BOM, and
halts the pipeline (for that file only) when the file cannot be read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from commentflow.pipeline.context import ProcessingContext
from commentflow.pipeline.status import ContentStatus
from commentflow.pipeline.steps.reader import ReaderStep, newline_histogram
from tests.conftest import mark_pipeline
from tests.pipeline.conftest import run_steps, write_bytes

if TYPE_CHECKING:
    from pathlib import Path


@mark_pipeline
def test_reader_preserves_terminators(tmp_path: Path) -> None:
    """Lines keep CRLF terminators and the style is detected."""
    path: Path = write_bytes(tmp_path / "a.py", "x = 1\r\ny = 2\r\n")
    ctx: ProcessingContext = run_steps(path, [ReaderStep()])

    assert ctx.status.content == ContentStatus.OK
    assert ctx.lines == ["x = 1\r\n", "y = 2\r\n"]
    assert ctx.newline_style == "\r\n"
    assert ctx.ends_with_newline is True


@mark_pipeline
def test_reader_detects_missing_final_newline(tmp_path: Path) -> None:
    """A file whose last line has no terminator is flagged."""
    path: Path = write_bytes(tmp_path / "a.py", "x = 1\ny = 2")
    ctx: ProcessingContext = run_steps(path, [ReaderStep()])
    assert ctx.lines == ["x = 1\n", "y = 2"]
    assert ctx.ends_with_newline is False


@mark_pipeline
def test_reader_strips_bom(tmp_path: Path) -> None:
    """A leading BOM is removed from the image and remembered."""
    path: Path = write_bytes(tmp_path / "a.py", "\ufeffx = 1\n")
    ctx: ProcessingContext = run_steps(path, [ReaderStep()])
    assert ctx.leading_bom is True
    assert ctx.lines == ["x = 1\n"]


@mark_pipeline
def test_reader_empty_file(tmp_path: Path) -> None:
    """An empty file is readable but has no lines."""
    path: Path = write_bytes(tmp_path / "a.py", "")
    ctx: ProcessingContext = run_steps(path, [ReaderStep()])
    assert ctx.status.content == ContentStatus.EMPTY
    assert ctx.lines == []
    assert not ctx.is_halted


@mark_pipeline
def test_reader_missing_file_halts(tmp_path: Path) -> None:
    """A file that disappeared is reported and halts its pipeline."""
    ctx: ProcessingContext = run_steps(tmp_path / "gone.py", [ReaderStep()])
    assert ctx.status.content == ContentStatus.NOT_FOUND
    assert ctx.is_halted
    assert ctx.has_errors


@mark_pipeline
def test_reader_decode_error_halts(tmp_path: Path) -> None:
    """Bytes that are not valid in the configured encoding are a decode error."""
    path: Path = tmp_path / "a.py"
    path.write_bytes(b"x = '\xff\xfe'\n")
    ctx: ProcessingContext = run_steps(path, [ReaderStep()])
    assert ctx.status.content == ContentStatus.DECODE_ERROR
    assert ctx.is_halted
    assert "utf-8" in ctx.diagnostics[0].message


@mark_pipeline
def test_reader_honours_configured_encoding(tmp_path: Path) -> None:
    """The configured encoding is used to decode the file."""
    path: Path = write_bytes(tmp_path / "a.py", "# café\n", encoding="latin-1")
    ctx: ProcessingContext = run_steps(path, [ReaderStep()], encoding="latin-1")
    assert ctx.lines == ["# café\n"]


def test_newline_histogram_counts_each_style() -> None:
    """CRLF is not double counted as LF."""
    assert newline_histogram(["a\r\n", "b\n", "c\r", "d"]) == {"\n": 1, "\r\n": 1, "\r": 1}
