"""
Native Click implementation of the config command.

Usage: relmap config [list|get] [key]
"""

import click

from ..context import RelmapContext


def _flatten(data: dict, prefix: str = "") -> dict[str, object]:
    flat: dict[str, object] = {}
    for key, value in data.items():
        if key.startswith("_"):
            continue
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{full_key}."))
        else:
            flat[full_key] = value
    return flat


@click.group("config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context) -> None:
    """View effective configuration.

    Config is read from .relmap/config.toml, [tool.relmap] in
    pyproject.toml and RELMAP_* environment variables.

    \b
    Examples:

        relmap config list                       # All effective values

        relmap config get conventions.id_column  # One value
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command("list")
@click.pass_obj
def config_list_cmd(ctx: RelmapContext) -> None:
    """List all effective config values."""
    settings = ctx.settings
    if settings.config_file:
        click.echo(f"Config file: {settings.config_file}")
    if settings.config_error:
        click.echo(f"Warning: {settings.config_error}")
    for key, value in _flatten(settings.to_dict()).items():
        click.echo(f"  {key} = {value}")


@config.command("get")
@click.argument("key")
@click.pass_obj
def config_get_cmd(ctx: RelmapContext, key: str) -> None:
    """Get a config value.

    Arguments:

        KEY    The config key to get (e.g. conventions.id_column)
    """
    value = ctx.settings.get(key)
    if value is None:
        click.echo(f"{key}: (not set)")
    else:
        click.echo(f"{key}: {value}")
