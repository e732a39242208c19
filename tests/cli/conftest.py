# topmark:header:start
#
#   project      : CommentFlow
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running CommentFlow in a controlled working directory.

`run_cli_in()` changes the process working directory to the given directory
before invoking the Click CLI, so that relative paths and config discovery
resolve against the temporary project instead of the developer's checkout.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterator, Sequence

import pytest
from click.testing import CliRunner, Result

from commentflow.cli.exit_codes import ExitCode
from commentflow.cli.main import cli
from commentflow.config.logging import TRACE_LEVEL, setup_logging

if TYPE_CHECKING:
    from pathlib import Path

# An overlong standalone comment followed by code; any line length below the
# comment's width makes the file change.
LONG_COMMENT_SOURCE: str = (
    "# This comment is deliberately far too long to fit on a single narrow line\n"
    "value = 1\n"
)

SHORT_SOURCE: str = "# fine\nvalue = 1\n"


@pytest.fixture(autouse=True)
def restore_test_logging() -> Iterator[None]:
    """Re-install the suite's logging after a CLI run reconfigured it."""
    yield
    setup_logging(level=TRACE_LEVEL)


def run_cli_in(tmp_path: Path, argv: Sequence[str]) -> Result:
    """Invoke the CLI with ``tmp_path`` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the invocation.
        argv (Sequence[str]): CLI argument vector, e.g. ``["reflow", "a.py"]``.

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, list(argv))
    finally:
        os.chdir(cwd)


def run_cli(argv: Sequence[str]) -> Result:
    """Invoke the CLI without changing the working directory."""
    return CliRunner().invoke(cli, list(argv))


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert the exit code, showing the output on mismatch."""
    assert result.exit_code == code, (
        f"expected {code.name} ({int(code)}), got {result.exit_code}\n"
        f"--- output ---\n{result.output}\n--- exception ---\n{result.exception!r}"
    )


def assert_SUCCESS(result: Result) -> None:  # pylint: disable=invalid-name
    """Assert that the command exited with `ExitCode.SUCCESS`."""
    assert_exit(result, ExitCode.SUCCESS)
