"""
Click-based CLI for relmap.

Usage:
    from relmap.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from .context import RelmapContext

try:
    from importlib.metadata import version

    __version__ = version("relmap")
except Exception:
    __version__ = "0.3.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="relmap")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """relmap - convention-driven relation mapping

    \b
    Inspection:
        relmap relations <target>   Show a record kind's relation graph
        relmap config list          Show effective configuration
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        ctx.obj = RelmapContext.create()


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "RelmapContext",
    "__version__",
    "cli",
    "register_commands",
]
