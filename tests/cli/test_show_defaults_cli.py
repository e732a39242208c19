# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_show_defaults_cli.py
#   file_relpath : tests/cli/test_show_defaults_cli.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `show-defaults` renders the bundled configuration."""

from __future__ import annotations

import toml

from commentflow.config.io import load_defaults_dict
from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import mark_cli


@mark_cli
def test_show_defaults_is_parseable_toml() -> None:
    """The default output parses back to the bundled defaults."""
    result = run_cli(["--no-color", "show-defaults"])

    assert_SUCCESS(result)
    assert toml.loads(result.output) == load_defaults_dict()


@mark_cli
def test_show_defaults_pyproject() -> None:
    """``--pyproject`` nests the document under ``[tool.commentflow]``."""
    result = run_cli(["--no-color", "show-defaults", "--pyproject"])

    assert_SUCCESS(result)
    assert "[tool.commentflow" in result.output
    assert toml.loads(result.output)["tool"]["commentflow"] == load_defaults_dict()


@mark_cli
def test_show_defaults_verbose_banners() -> None:
    """With ``-v`` the document is framed by BEGIN and END markers."""
    result = run_cli(["--no-color", "-v", "show-defaults"])

    assert_SUCCESS(result)
    assert "# === BEGIN ===" in result.output
    assert result.output.rstrip().endswith("# === END ===")
