# topmark:header:start
#
#   project      : CommentFlow
#   file         : context.py
#   file_relpath : src/commentflow/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Processing context carried through the per-file pipeline.

A [`ProcessingContext`][commentflow.pipeline.context.ProcessingContext] holds
everything the steps know about one file: the configuration and engine, the
original and rewritten line images, per-axis status, diagnostics and the flow
control flag that lets a step stop the pipeline for that file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Sequence, cast

from yachalk import chalk

from commentflow.config.logging import get_logger
from commentflow.pipeline.status import (
    ContentStatus,
    ProcessingStatus,
    ReflowStatus,
    WriteStatus,
)

if TYPE_CHECKING:
    from pathlib import Path

    from commentflow.config.logging import CommentflowLogger
    from commentflow.config.model import Config
    from commentflow.pipeline.engine import ReflowEngine, ReflowResult, RewriteEvent
    from commentflow.pipeline.steps.base import BaseStep
    from commentflow.utils.colored_enum import ColoredStrEnum

logger: CommentflowLogger = get_logger(__name__)

__all__: list[str] = [
    "Diagnostic",
    "DiagnosticLevel",
    "FlowControl",
    "ProcessingContext",
]


class DiagnosticLevel(Enum):
    """Severity of a per-file diagnostic."""

    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the yachalk color function for this level."""
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """A message attached to one file during processing."""

    level: DiagnosticLevel
    message: str


@dataclass
class FlowControl:
    """Execution flow control for the current file."""

    halt: bool = False
    reason: str = ""
    at_step: str = ""


@dataclass
class ProcessingContext:
    r"""State of a single file as it moves through the pipeline.

    Attributes:
        path (Path): The file being processed.
        config (Config): Effective configuration.
        engine (ReflowEngine): Rule engine shared by all files of a run.
        steps (list[BaseStep]): Steps executed so far, in order.
        status (ProcessingStatus): Per-axis status.
        flow (FlowControl): Halt flag and reason.
        lines (list[str]): Original lines, terminators preserved.
        leading_bom (bool): True if the file began with a UTF-8 BOM; the reader
            strips it from ``lines`` and the writer puts it back.
        newline_style (str): Dominant line terminator (``"\\n"`` by default).
        ends_with_newline (bool | None): Whether the original ends with a terminator.
        result (ReflowResult | None): Engine output, set by the reflow step.
        updated (list[str] | None): Final rewritten lines, using ``newline_style``.
        diff (str | None): Unified diff between ``lines`` and ``updated``.
        bytes_written (int): Bytes committed by the writer.
        diagnostics (list[Diagnostic]): Collected warning and error messages.
    """

    path: Path
    config: Config
    engine: ReflowEngine
    steps: list[BaseStep] = field(default_factory=lambda: [])
    status: ProcessingStatus = field(default_factory=ProcessingStatus)
    flow: FlowControl = field(default_factory=FlowControl)

    lines: list[str] = field(default_factory=lambda: [])
    leading_bom: bool = False
    newline_style: str = "\n"
    ends_with_newline: bool | None = None

    result: ReflowResult | None = None
    updated: list[str] | None = None
    diff: str | None = None
    bytes_written: int = 0

    diagnostics: list[Diagnostic] = field(default_factory=lambda: [])

    @classmethod
    def bootstrap(cls, *, path: Path, config: Config, engine: ReflowEngine) -> ProcessingContext:
        """Create a fresh context with no derived state."""
        return cls(path=path, config=config, engine=engine)

    @property
    def is_halted(self) -> bool:
        """Return True if a step requested that processing stop."""
        return self.flow.halt

    @property
    def would_change(self) -> bool:
        """Return True if reflowing produced content different from the original."""
        return self.status.reflow == ReflowStatus.CHANGED

    @property
    def events(self) -> Sequence[RewriteEvent]:
        """Rule applications recorded by the engine (empty before the reflow step)."""
        return self.result.events if self.result is not None else ()

    @property
    def has_errors(self) -> bool:
        """Return True if any error diagnostic was recorded."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.diagnostics)

    @property
    def headline(self) -> ColoredStrEnum:
        """Return the most advanced meaningful status of this file.

        A read failure wins, then a write outcome (written or failed), then the
        reflow status.
        """
        if self.status.content not in (ContentStatus.OK, ContentStatus.EMPTY):
            return self.status.content
        if self.status.write in (WriteStatus.WRITTEN, WriteStatus.FAILED):
            return self.status.write
        return self.status.reflow

    def request_halt(self, reason: str, at_step: BaseStep) -> None:
        """Stop the remaining steps for this file.

        Args:
            reason (str): Short explanation, kept for the summary.
            at_step (BaseStep): Step requesting the halt.
        """
        logger.info("Flow halted in %s: %s", at_step.name, reason)
        self.flow = FlowControl(halt=True, reason=reason, at_step=at_step.name)

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic."""
        self.diagnostics.append(Diagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic."""
        self.diagnostics.append(Diagnostic(DiagnosticLevel.ERROR, message))

    def format_summary(self, verbosity_level: int = 0) -> str:
        """Return a one-line, colorized summary for this file.

        The line starts with the file's `headline` status. With
        ``verbosity_level >= 1`` the individual rule applications and
        diagnostics follow on separate lines.

        Examples (colors omitted):
            pkg/module.py: would reflow (3 changes)
            pkg/module.py: reflowed (3 changes)
            pkg/broken.py: cannot decode file - 1 error

        Args:
            verbosity_level (int): 0 for one line, 1 or more to list details.

        Returns:
            str: The rendered summary.
        """
        parts: list[str] = [f"{self.path}:", self.headline.render()]

        changes: int = len(self.events)
        if changes and self.would_change:
            parts.append(chalk.dim(f"({changes} change{'s' if changes != 1 else ''})"))

        n_err: int = sum(1 for d in self.diagnostics if d.level == DiagnosticLevel.ERROR)
        n_warn: int = sum(1 for d in self.diagnostics if d.level == DiagnosticLevel.WARNING)
        triage: list[str] = []
        if n_err:
            triage.append(chalk.red_bright(f"{n_err} error" + ("s" if n_err != 1 else "")))
        if n_warn:
            triage.append(chalk.yellow(f"{n_warn} warning" + ("s" if n_warn != 1 else "")))
        if triage:
            parts.append("-")
            parts.append(", ".join(triage))

        result: str = " ".join(parts)

        if verbosity_level > 0:
            details: list[str] = [
                f"  {event.rule.color(event.describe())}" for event in self.events
            ]
            details.extend(
                f"  [{d.level.color(d.level.value)}] {d.message}" for d in self.diagnostics
            )
            if details:
                result += "\n" + "\n".join(details)

        return result
