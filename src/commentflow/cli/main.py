# topmark:header:start
#
#   project      : CommentFlow
#   file         : main.py
#   file_relpath : src/commentflow/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CommentFlow command line entry point.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed into
  ``ctx.obj`` together with the program-output console.
- Internal logging is configured from ``COMMENTFLOW_LOG_LEVEL``; program
  output goes through the console.
- Subcommands read the shared state from ``ctx.obj``.
"""

from __future__ import annotations

import click

from commentflow.cli.commands.reflow import reflow_command
from commentflow.cli.commands.show_defaults import show_defaults_command
from commentflow.cli.commands.version import version_command
from commentflow.cli.console import ClickConsole
from commentflow.cli.options import (
    common_color_options,
    common_verbose_options,
    resolve_verbosity,
)
from commentflow.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # Configure program-output verbosity:
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Configure internal logging via env:
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    enable_color = not no_color
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,  # Always invoke the cli() function
    help="CommentFlow: reflow overlong comments in Python source files.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Entry point for the CommentFlow CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'commentflow reflow [PATHS...]' to preview changes.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(reflow_command)

cli.add_command(version_command)

cli.add_command(show_defaults_command)

if __name__ == "__main__":
    cli()
