# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_formatter.py
#   file_relpath : tests/test_formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""External formatter resolution and the black-backed formatter."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Any

import pytest

from commentflow.formatter import (
    BlackFormatter,
    FormatterError,
    FormatterUnavailableError,
    resolve_formatter,
)
from tests.conftest import make_config, mark_integration


def test_disabled_formatter_resolves_to_none() -> None:
    """A disabled formatter is never looked up."""
    assert resolve_formatter(make_config(formatter_enabled=False)) is None


def test_missing_command_is_reported() -> None:
    """An enabled formatter whose command is missing fails at resolution time."""
    with pytest.raises(FormatterUnavailableError, match="not available"):
        resolve_formatter(make_config(formatter_command="commentflow-no-such-formatter"))


def test_resolved_formatter_uses_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Line length and timeout are taken from the configuration."""
    monkeypatch.setattr(shutil, "which", lambda cmd: f"/usr/bin/{cmd}")
    formatter = resolve_formatter(make_config(line_length=60, formatter_timeout=3.0))
    assert isinstance(formatter, BlackFormatter)
    assert formatter.line_length == 60
    assert formatter.timeout == 3.0


def test_nonzero_exit_raises_and_cleans_up(monkeypatch: pytest.MonkeyPatch) -> None:
    """A failing run raises `FormatterError` and removes the temporary file."""
    seen: list[Path] = []

    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        seen.append(Path(cmd[-1]))
        return subprocess.CompletedProcess(cmd, 123, stdout="", stderr="cannot parse")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(FormatterError, match="status 123"):
        BlackFormatter().format("print(")
    assert seen and not seen[0].exists()


def test_timeout_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    """A timed out run is reported as `FormatterError`."""

    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(FormatterError, match="timed out"):
        BlackFormatter(timeout=0.5).format("print(1)")


@mark_integration
@pytest.mark.skipif(shutil.which("black") is None, reason="black is not installed")
def test_black_splits_long_call() -> None:
    """``black`` explodes a call that exceeds the line length."""
    code = "print(alpha_argument, beta_argument, gamma_argument, delta_argument)"
    out: str = BlackFormatter(line_length=40).format(code)
    assert out.splitlines()[0] == "print("
    assert out.splitlines()[-1] == ")"
    assert all(len(line) <= 40 for line in out.splitlines())
