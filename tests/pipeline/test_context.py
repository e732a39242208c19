# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_context.py
#   file_relpath : tests/pipeline/test_context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Processing context: headline status and per-file summaries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from commentflow.pipeline.pipelines import Pipeline
from commentflow.pipeline.status import ContentStatus, ReflowStatus, WriteStatus
from tests.conftest import mark_pipeline
from tests.pipeline.conftest import run_steps, write_bytes

if TYPE_CHECKING:
    from pathlib import Path

    from commentflow.pipeline.context import ProcessingContext

CHANGED: str = "x = 1  # a trailing comment that is long\n"


@mark_pipeline
def test_summary_for_changed_file(tmp_path: Path) -> None:
    """A dry run reports the pending change and its count."""
    path: Path = write_bytes(tmp_path / "a.py", CHANGED)
    ctx: ProcessingContext = run_steps(path, Pipeline.CHECK.steps, line_length=30)

    assert ctx.headline is ReflowStatus.CHANGED
    summary: str = ctx.format_summary()
    assert str(path) in summary
    assert "would reflow" in summary
    assert "1 change" in summary


@mark_pipeline
def test_summary_details_list_rule_applications(tmp_path: Path) -> None:
    """With verbosity every rule application is listed."""
    path: Path = write_bytes(tmp_path / "a.py", CHANGED)
    ctx: ProcessingContext = run_steps(path, Pipeline.CHECK.steps, line_length=30)
    detail: str = ctx.format_summary(verbosity_level=1)
    assert "line 1: split inline comment" in detail


@mark_pipeline
def test_headline_prefers_write_then_read_failure(tmp_path: Path) -> None:
    """Written files report the write; unreadable files report the read error."""
    path: Path = write_bytes(tmp_path / "a.py", CHANGED)
    written = run_steps(path, Pipeline.APPLY.steps, line_length=30, apply_changes=True)
    assert written.headline is WriteStatus.WRITTEN
    assert "reflowed" in written.format_summary()

    missing = run_steps(tmp_path / "gone.py", Pipeline.APPLY.steps)
    assert missing.headline is ContentStatus.NOT_FOUND
    assert "1 error" in missing.format_summary()


@mark_pipeline
def test_up_to_date_file_shows_no_change_count(tmp_path: Path) -> None:
    """Rule applications that changed nothing are not reported as changes."""
    path: Path = write_bytes(tmp_path / "a.py", '"""\nAlready fine.\n"""\n')
    ctx: ProcessingContext = run_steps(path, Pipeline.CHECK.steps)
    assert ctx.headline is ReflowStatus.UNCHANGED
    assert ctx.format_summary() == f"{path}: {ReflowStatus.UNCHANGED.render()}"
