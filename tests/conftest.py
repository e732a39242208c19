# topmark:header:start
#
#   project      : CommentFlow
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the CommentFlow test suite.

This file sets up global fixtures, typed marker helpers and the logging
configuration used during test runs.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `commentflow.config.MutableConfig` (mutable), then
      `freeze()` into a `commentflow.config.Config` for the engine and the
      pipeline.
    - Do **not** mutate a frozen `Config`. If you need to tweak one, call
      `Config.thaw()`, edit the returned `MutableConfig`, then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from commentflow.config import MutableConfig, logging
from commentflow.formatter import FormatterError
from commentflow.pipeline.engine import ReflowEngine

if TYPE_CHECKING:
    from commentflow.config import Config

F = TypeVar("F", bound=Callable[..., object])

# A decorator that returns the function it wraps, unchanged in type.
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_commentflow_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure CommentFlow's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    COMMENTFLOW_LOG_LEVEL in their shell.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so rule declines are captured in test output."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test from an isolated project directory.

    The directory holds a ``commentflow.toml`` with ``root = true`` so config
    discovery never climbs into the developer's own project files.

    Returns:
        Path: The temporary working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "commentflow.toml").write_text("root = true\n", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a mutable builder seeded from the bundled defaults.

    Args:
        **overrides (Any): Attributes set verbatim on the builder.

    Returns:
        MutableConfig: A builder ready to be frozen or further edited.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides."""
    return make_mutable_config(**overrides).freeze()


class StubFormatter:
    """In-memory `CodeFormatter` that splits call arguments one per line.

    ``print(a, b)`` becomes::

        print(
            a,
            b,
        )

    Every call is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []

    def format(self, code: str) -> str:
        """Return a black-like multi-line rendering of a single call."""
        self.calls.append(code)
        head, _, rest = code.partition("(")
        args: list[str] = [a.strip() for a in rest.rstrip().removesuffix(")").split(",")]
        body: str = "".join(f"    {a},\n" for a in args if a)
        return f"{head}(\n{body})\n"


class FailingFormatter:
    """`CodeFormatter` that always fails, as an unparsable statement would."""

    def format(self, code: str) -> str:
        """Raise `FormatterError`."""
        raise FormatterError(f"cannot parse: {code!r}")


def make_engine(formatter: Any = None, **overrides: Any) -> ReflowEngine:
    """Return an engine over ``make_config(**overrides)``."""
    return ReflowEngine(make_config(**overrides), formatter=formatter)


def reflow_lines(text: str, formatter: Any = None, **overrides: Any) -> list[str]:
    """Reflow ``text`` and return the resulting lines (terminators kept)."""
    engine: ReflowEngine = make_engine(formatter, **overrides)
    return engine.reflow(text.splitlines(keepends=True)).lines
