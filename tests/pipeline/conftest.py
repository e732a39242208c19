# topmark:header:start
#
#   project      : CommentFlow
#   file         : conftest.py
#   file_relpath : tests/pipeline/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers for running pipeline steps against files in ``tmp_path``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from commentflow.pipeline.context import ProcessingContext
from commentflow.pipeline.engine import ReflowEngine
from commentflow.pipeline.runner import run
from tests.conftest import make_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from commentflow.pipeline.steps.base import BaseStep


def write_bytes(path: Path, text: str, encoding: str = "utf-8") -> Path:
    """Write ``text`` exactly (no newline translation) and return ``path``."""
    path.write_bytes(text.encode(encoding))
    return path


def make_context(path: Path, formatter: Any = None, **overrides: Any) -> ProcessingContext:
    """Return a fresh context for ``path`` with a default engine."""
    config = make_config(**overrides)
    return ProcessingContext.bootstrap(
        path=path, config=config, engine=ReflowEngine(config, formatter=formatter)
    )


def run_steps(
    path: Path, steps: Sequence[BaseStep], formatter: Any = None, **overrides: Any
) -> ProcessingContext:
    """Build a context for ``path`` and run ``steps`` over it."""
    return run(make_context(path, formatter, **overrides), steps)
