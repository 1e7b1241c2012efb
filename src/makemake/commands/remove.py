"""Remove command - delete a stored template"""

from __future__ import annotations

import typer

from .utils import get_store, handle_error


def remove_command(name: str) -> None:
    """Delete template `name`."""
    try:
        get_store().remove(name)
        typer.echo(f"Removed template '{name}'")
    except Exception as e:
        handle_error(e)
