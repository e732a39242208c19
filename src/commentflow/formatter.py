# topmark:header:start
#
#   project      : CommentFlow
#   file         : formatter.py
#   file_relpath : src/commentflow/formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""External code formatter used by the commented-print rule.

The rule engine never discovers a formatter on its own: the CLI resolves one
at startup with [`resolve_formatter`][commentflow.formatter.resolve_formatter]
(which looks the formatter command up on ``PATH`` once) and injects it into
[`ReflowEngine`][commentflow.pipeline.engine.ReflowEngine]. Anything that
implements the [`CodeFormatter`][commentflow.formatter.CodeFormatter] protocol
can be injected, which is how the test suite substitutes a stub.

`BlackFormatter` shells out to ``black``: each call writes the snippet to a
fresh temporary ``.py`` file, formats it in place and reads it back. The
temporary file is always removed, even when ``black`` fails or times out.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from commentflow.config.logging import get_logger
from commentflow.constants import DEFAULT_FORMATTER_COMMAND, DEFAULT_LINE_LENGTH

if TYPE_CHECKING:
    from commentflow.config.logging import CommentflowLogger
    from commentflow.config.model import Config

logger: CommentflowLogger = get_logger(__name__)


class FormatterError(Exception):
    """Raised when formatting a single snippet fails."""


class FormatterUnavailableError(FormatterError):
    """Raised when the formatter command cannot be found on ``PATH``."""


class CodeFormatter(Protocol):
    """Capability that reformats a snippet of Python source code."""

    def format(self, code: str) -> str:
        """Return ``code`` reformatted.

        Args:
            code (str): Source snippet (typically a single statement).

        Returns:
            str: The formatted snippet.

        Raises:
            FormatterError: If the snippet cannot be formatted.
        """
        ...


class BlackFormatter:
    """Formatter backed by the ``black`` command line tool.

    Args:
        command (str): Executable name or path of ``black``.
        line_length (int): Value passed to ``--line-length``.
        timeout (float | None): Seconds to wait for each invocation; ``None`` waits forever.
    """

    def __init__(
        self,
        command: str = DEFAULT_FORMATTER_COMMAND,
        line_length: int = DEFAULT_LINE_LENGTH,
        timeout: float | None = None,
    ) -> None:
        self.command = command
        self.line_length = line_length
        self.timeout = timeout

    def __repr__(self) -> str:
        return (
            f"BlackFormatter(command={self.command!r}, line_length={self.line_length}, "
            f"timeout={self.timeout!r})"
        )

    def ensure_available(self) -> None:
        """Check that the formatter command can be found.

        Raises:
            FormatterUnavailableError: If ``command`` is not on ``PATH``.
        """
        if shutil.which(self.command) is None:
            raise FormatterUnavailableError(
                f"'{self.command}' is not available in your PATH "
                "(install it with: pip install black)"
            )
        logger.debug("Formatter command found: %s", self.command)

    def format(self, code: str) -> str:
        """Format ``code`` with ``black`` through a temporary file.

        Args:
            code (str): The snippet to format.

        Returns:
            str: The formatted snippet as written back by ``black``.

        Raises:
            FormatterError: If the temporary file cannot be used, the command
                cannot be started, exits non-zero or times out.
        """
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                prefix="commentflow-",
                suffix=".py",
                encoding="utf-8",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(code + "\n")

            cmd: list[str] = [
                self.command,
                "--quiet",
                "--line-length",
                str(self.line_length),
                str(tmp_path),
            ]
            logger.trace("Running formatter: %s", " ".join(cmd))
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
            if completed.returncode != 0:
                raise FormatterError(
                    f"{self.command} exited with status {completed.returncode}: "
                    f"{completed.stderr.strip()}"
                )
            return tmp_path.read_text(encoding="utf-8")
        except subprocess.TimeoutExpired as exc:
            raise FormatterError(f"{self.command} timed out after {exc.timeout} seconds") from exc
        except OSError as exc:
            raise FormatterError(f"Failed to run {self.command}: {exc}") from exc
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except FileNotFoundError:
                    pass


def resolve_formatter(config: Config) -> CodeFormatter | None:
    """Build the formatter described by ``config`` and check that it is usable.

    Args:
        config (Config): Effective configuration.

    Returns:
        CodeFormatter | None: A ready `BlackFormatter`, or ``None`` when the
        formatter is disabled (the commented-print rule then always declines).

    Raises:
        FormatterUnavailableError: If the formatter is enabled but its command
            cannot be found.
    """
    if not config.formatter_enabled:
        logger.info("External formatter disabled; commented-out print statements are kept")
        return None
    formatter = BlackFormatter(
        command=config.formatter_command,
        line_length=config.line_length,
        timeout=config.formatter_timeout,
    )
    formatter.ensure_available()
    logger.debug("Resolved formatter: %r", formatter)
    return formatter
