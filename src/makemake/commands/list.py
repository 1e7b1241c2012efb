"""List command - list stored templates and aliases"""

from __future__ import annotations

from rich.table import Table

from .utils import console, get_config, get_store, handle_error


def list_command() -> None:
    """List all templates and aliases."""
    try:
        names = get_store().names()
        config = get_config()
    except Exception as e:
        handle_error(e)

    if not names and not config.aliases:
        console.print("[yellow]No templates found[/yellow]")
        return

    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("Template")
    table.add_column("Variables")

    for name in names:
        table.add_row(name, "", "")

    for alias, info in sorted(config.aliases.items()):
        vars = " ".join(f"{k}={v}" for k, v in sorted(info.vars.items()))
        table.add_row(f"[magenta]{alias}[/magenta]", info.template, vars)

    console.print(table)
