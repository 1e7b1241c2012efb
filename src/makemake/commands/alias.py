"""Alias commands - manage template aliases in the global config"""

from __future__ import annotations

from typing import List, Optional

import typer

from .utils import get_config, get_home, handle_error, parse_defines


def alias_set_command(
    alias: str, template: str, defines: Optional[List[str]] = None
) -> None:
    """Point `alias` at `template` with optional variable defaults."""
    try:
        config = get_config()
        config.set_alias(alias, template, parse_defines(defines))
        config.save(get_home().config_file)
        typer.echo(f"Alias '{alias}' -> '{template}'")
    except Exception as e:
        handle_error(e)


def alias_remove_command(alias: str) -> None:
    """Delete an alias."""
    try:
        config = get_config()
        config.remove_alias(alias)
        config.save(get_home().config_file)
        typer.echo(f"Removed alias '{alias}'")
    except Exception as e:
        handle_error(e)
