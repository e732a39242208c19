# topmark:header:start
#
#   project      : CommentFlow
#   file         : version.py
#   file_relpath : src/commentflow/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CommentFlow `version` command.

Prints the CommentFlow version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from commentflow.constants import COMMENTFLOW_VERSION

if TYPE_CHECKING:
    from commentflow.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of CommentFlow.",
)
def version_command() -> None:
    """Show the current version of CommentFlow."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    if vlevel > 0:
        console.print(console.styled("CommentFlow version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(COMMENTFLOW_VERSION, bold=True)}")
    else:
        console.print(console.styled(COMMENTFLOW_VERSION, bold=True))
