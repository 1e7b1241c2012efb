"""Var commands - manage global variables in the global config"""

from __future__ import annotations

import typer

from .utils import get_config, get_home, handle_error


def var_set_command(name: str, value: str) -> None:
    """Set a global variable used by every load."""
    try:
        config = get_config()
        config.set_var(name, value)
        config.save(get_home().config_file)
        typer.echo(f"{name}={value}")
    except Exception as e:
        handle_error(e)


def var_unset_command(name: str) -> None:
    """Remove a global variable."""
    try:
        config = get_config()
        if not config.unset_var(name):
            typer.echo(f"Variable '{name}' is not set")
            return
        config.save(get_home().config_file)
        typer.echo(f"Unset {name}")
    except Exception as e:
        handle_error(e)


def var_list_command() -> None:
    """Print global variables."""
    try:
        config = get_config()
    except Exception as e:
        handle_error(e)

    for name, value in sorted(config.vars.items()):
        typer.echo(f"{name}={value}")
