# topmark:header:start
#
#   project      : CommentFlow
#   file         : reflow.py
#   file_relpath : src/commentflow/cli/commands/reflow.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CommentFlow `reflow` command.

Reflows overlong comments, block comments and commented-out print statements.
Performs a dry run by default and writes files when ``--apply`` is given.

Examples:
  Preview which files would change (dry run):

    $ commentflow reflow src

  Rewrite files in place and show what changed:

    $ commentflow reflow --apply --diff src

  Print the reflowed content of a single file:

    $ commentflow reflow --stdout pkg/module.py
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

import click

from commentflow.cli.errors import (
    CommentflowConfigError,
    CommentflowEncodingError,
    CommentflowFileNotFoundError,
    CommentflowFormatterError,
    CommentflowIOError,
    CommentflowUsageError,
)
from commentflow.cli.exit_codes import ExitCode
from commentflow.config.logging import get_logger
from commentflow.config.model import MutableConfig, WriteStrategy
from commentflow.file_resolver import resolve_file_list
from commentflow.formatter import FormatterUnavailableError, resolve_formatter
from commentflow.pipeline.context import DiagnosticLevel
from commentflow.pipeline.engine import ReflowEngine
from commentflow.pipeline.pipelines import Pipeline
from commentflow.pipeline.runner import process_files
from commentflow.pipeline.status import ContentStatus, WriteStatus
from commentflow.utils.diff import render_patch

if TYPE_CHECKING:
    from commentflow.cli.console import ClickConsole
    from commentflow.config.logging import CommentflowLogger
    from commentflow.config.model import Config
    from commentflow.formatter import CodeFormatter
    from commentflow.pipeline.context import ProcessingContext
    from commentflow.utils.colored_enum import ColoredStrEnum

logger: CommentflowLogger = get_logger(__name__)


def build_config(
    *,
    paths: tuple[Path, ...],
    config_paths: tuple[Path, ...],
    no_config: bool,
    overrides: dict[str, object],
) -> Config:
    """Merge defaults, config files and CLI overrides into a frozen `Config`.

    Raises:
        CommentflowConfigError: If a value is invalid.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            extra_config_files=list(config_paths),
            no_config=no_config,
        )
        draft.apply_cli_args({"files": [str(p) for p in paths], **overrides})
        return draft.freeze()
    except ValueError as exc:
        raise CommentflowConfigError(str(exc)) from exc


def render_summary_counts(
    console: ClickConsole, results: list[ProcessingContext], *, total: int
) -> None:
    """Print how many files ended in each headline status."""
    counts: Counter[ColoredStrEnum] = Counter(r.headline for r in results)
    console.print(console.styled(f"Summary ({total} file(s)):", bold=True))
    for status, n in sorted(counts.items(), key=lambda item: (-item[1], item[0].value)):
        console.print(f"  {n:>5}  {status.render()}")


def failure_exit(results: list[ProcessingContext]) -> ExitCode | None:
    """Return the exit code for per-file failures, or None if there were none.

    Read and write failures (``IO_ERROR``) take precedence over decode
    failures (``ENCODING_ERROR``).
    """
    io_failed: bool = any(
        r.status.content in (ContentStatus.NOT_FOUND, ContentStatus.UNREADABLE)
        or r.status.write == WriteStatus.FAILED
        for r in results
    )
    if io_failed:
        return ExitCode.IO_ERROR
    if any(r.status.content == ContentStatus.DECODE_ERROR for r in results):
        return ExitCode.ENCODING_ERROR
    return None


@click.command(
    name="reflow",
    help="Reflow overlong comments (dry run). Use --apply to rewrite files.",
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog="""\
Examples:

  # Preview which files would change (dry run)
  commentflow reflow src

  # Rewrite files and show the diffs
  commentflow reflow --apply --diff src
""",
)
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(path_type=Path),
)
@click.option(
    "--apply", "apply_changes", is_flag=True, help="Write changes to files (off by default)."
)
@click.option("--diff", is_flag=True, help="Show unified diffs of the changes.")
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print the reflowed content instead of writing files.",
)
@click.option(
    "--summary",
    "summary_mode",
    is_flag=True,
    help="Show outcome counts instead of per-file details.",
)
@click.option(
    "--config",
    "config_paths",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Additional configuration file(s), merged after discovered ones.",
)
@click.option("--no-config", is_flag=True, help="Skip configuration file discovery.")
@click.option("--line-length", type=int, default=None, help="Maximum line length.")
@click.option(
    "--exclude",
    "-e",
    "exclude_patterns",
    multiple=True,
    help="Remove files matching these gitignore-style patterns.",
)
@click.option(
    "--extension",
    "extensions",
    multiple=True,
    help="File extension(s) to collect from directories (default: .py).",
)
@click.option(
    "--formatter", "formatter_command", default=None, help="Formatter command (default: black)."
)
@click.option(
    "--no-formatter",
    is_flag=True,
    help="Do not run the formatter; commented-out print statements are left alone.",
)
@click.option(
    "--write-mode",
    type=click.Choice([s.value for s in WriteStrategy]),
    default=None,
    help="How --apply writes files (default: atomic).",
)
def reflow_command(
    *,
    paths: tuple[Path, ...],
    apply_changes: bool,
    diff: bool,
    to_stdout: bool,
    summary_mode: bool,
    config_paths: tuple[Path, ...],
    no_config: bool,
    line_length: int | None,
    exclude_patterns: tuple[str, ...],
    extensions: tuple[str, ...],
    formatter_command: str | None,
    no_formatter: bool,
    write_mode: str | None,
) -> None:
    """Reflow comments in the given files and directories.

    Args:
        paths (tuple[Path, ...]): Files and directories to process.
        apply_changes (bool): Write changes to files; otherwise perform a dry run.
        diff (bool): Show unified diffs of the changes.
        to_stdout (bool): Print the reflowed content of every file to stdout.
        summary_mode (bool): Show outcome counts instead of per-file details.
        config_paths (tuple[Path, ...]): Extra configuration files.
        no_config (bool): Skip configuration discovery.
        line_length (int | None): Override of the maximum line length.
        exclude_patterns (tuple[str, ...]): Extra exclude patterns.
        extensions (tuple[str, ...]): File extensions to collect from directories.
        formatter_command (str | None): Override of the formatter command.
        no_formatter (bool): Disable the commented-print rule.
        write_mode (str | None): ``atomic`` or ``inplace``.

    Raises:
        CommentflowUsageError: If no path is given or options conflict.
        CommentflowConfigError: If the configuration is invalid.
        CommentflowFileNotFoundError: If a path does not exist.
        CommentflowFormatterError: If the formatter is enabled but unavailable.
        CommentflowIOError: If a file could not be read or written.
        CommentflowEncodingError: If a file could not be decoded.

    Exit Status:
        SUCCESS (0): Nothing to change, or all changes were written.
        WOULD_CHANGE (2): Dry run detected files that would change with ``--apply``.
        USAGE_ERROR (64): Invalid invocation.
        ENCODING_ERROR (65): A file could not be decoded.
        FILE_NOT_FOUND (66): A path does not exist.
        FORMATTER_UNAVAILABLE (69): The formatter command is missing.
        IO_ERROR (74): A file could not be read or written.
        CONFIG_ERROR (78): Invalid configuration.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    if not paths:
        raise CommentflowUsageError(f"{ctx.command.name}: no PATHS given.")
    if to_stdout and (apply_changes or diff):
        raise CommentflowUsageError(
            f"{ctx.command.name}: --stdout cannot be combined with --apply or --diff."
        )

    # === Build Config, file list and engine ===
    config: Config = build_config(
        paths=paths,
        config_paths=config_paths,
        no_config=no_config,
        overrides={
            "apply_changes": apply_changes,
            "stdout": to_stdout,
            "line_length": line_length,
            "exclude_patterns": exclude_patterns,
            "extensions": extensions,
            "formatter_command": formatter_command,
            "no_formatter": no_formatter,
            "write_mode": write_mode,
        },
    )
    logger.trace("Effective config: %s", config)

    try:
        file_list: list[Path] = resolve_file_list(config)
    except FileNotFoundError as exc:
        raise CommentflowFileNotFoundError(str(exc)) from exc

    try:
        formatter: CodeFormatter | None = resolve_formatter(config)
    except FormatterUnavailableError as exc:
        raise CommentflowFormatterError(f"{exc} (install it or pass --no-formatter)") from exc

    if not file_list:
        if not to_stdout:
            console.print(console.styled("No files to process.", fg="yellow"))
        return

    # Program output on stdout is reserved for file content in --stdout mode.
    chatty: bool = not to_stdout

    if chatty and vlevel > 0:
        console.print(
            console.styled(
                f"Reflowing {len(file_list)} file(s) at line length {config.line_length}",
                bold=True,
                underline=True,
            )
        )

    engine = ReflowEngine(config, formatter=formatter)
    pipeline: Pipeline = Pipeline.select(write=apply_changes or to_stdout, diff=diff)
    results: list[ProcessingContext] = process_files(file_list, config, engine, pipeline.steps)

    # === Human output ===
    if chatty:
        if summary_mode:
            if vlevel >= -1:
                render_summary_counts(console, results, total=len(file_list))
        elif vlevel >= 0:
            for r in results:
                if vlevel > 0 or r.would_change or r.diagnostics:
                    console.print(r.format_summary(verbosity_level=vlevel))

        if diff:
            for r in results:
                if r.diff:
                    console.print(render_patch(r.diff), nl=False)

        if apply_changes and vlevel >= -1:
            written: int = sum(1 for r in results if r.status.write == WriteStatus.WRITTEN)
            msg: str = f"Reflowed {written} file(s)." if written else "No changes to apply."
            console.print(console.styled(msg, fg="green", bold=True))
    else:
        for r in results:
            for d in r.diagnostics:
                if d.level == DiagnosticLevel.ERROR:
                    console.error(f"{r.path}: {d.message}")

    # === Exit code policy ===
    code: ExitCode | None = failure_exit(results)
    if code == ExitCode.IO_ERROR:
        raise CommentflowIOError("Some files could not be read or written.")
    if code == ExitCode.ENCODING_ERROR:
        raise CommentflowEncodingError(
            f"Some files could not be decoded as {config.encoding}."
        )

    if not apply_changes and not to_stdout and any(r.would_change for r in results):
        ctx.exit(ExitCode.WOULD_CHANGE)
