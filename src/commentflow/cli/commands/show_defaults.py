# topmark:header:start
#
#   project      : CommentFlow
#   file         : show_defaults.py
#   file_relpath : src/commentflow/cli/commands/show_defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CommentFlow `show-defaults` command.

Displays the default configuration bundled with the package, either as a
standalone ``commentflow.toml`` or nested under ``[tool.commentflow]`` for
pasting into ``pyproject.toml``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from commentflow.config.io import load_defaults_text, nest_toml_under_section
from commentflow.constants import PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from commentflow.cli.console import ClickConsole


@click.command(
    name="show-defaults",
    help="Display the built-in default CommentFlow configuration file.",
)
@click.option(
    "--pyproject",
    is_flag=True,
    default=False,
    help=f"Nest the defaults under [{PYPROJECT_TOOL_SECTION}] for pyproject.toml.",
)
def show_defaults_command(*, pyproject: bool = False) -> None:
    """Display the built-in default configuration.

    Args:
        pyproject (bool): Render the document as a ``pyproject.toml`` section.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    text: str = load_defaults_text()
    if pyproject:
        text = nest_toml_under_section(text, PYPROJECT_TOOL_SECTION)

    if vlevel > 0:
        console.print(
            console.styled("Default CommentFlow Configuration (TOML):", bold=True, underline=True)
        )
        console.print(console.styled("# === BEGIN ===", fg="cyan", dim=True))

    console.print(console.styled(text.rstrip("\n"), fg="cyan"))

    if vlevel > 0:
        console.print(console.styled("# === END ===", fg="cyan", dim=True))
