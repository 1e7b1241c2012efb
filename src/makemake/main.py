"""Makemake CLI Main Entry Point

Makemake - store directory trees as templates and load them anywhere,
expanding `${...}` expressions in file contents and names.

Usage:
    makemake create <name> [src]           # snapshot a directory as a template
    makemake load <name> [dest] -Dvar=val  # instantiate a template
    makemake edit <name> [dest]            # copy the raw template source out
    makemake remove <name>                 # delete a template
    makemake list                          # list templates and aliases
    makemake alias set <alias> <name>      # define an alias
    makemake var set <name> <value>        # define a global variable
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ._version import __version__
from .commands import (
    alias_remove_command,
    alias_set_command,
    create_command,
    edit_command,
    list_command,
    load_command,
    remove_command,
    var_list_command,
    var_set_command,
    var_unset_command,
)
from .commands.utils import PromptAnswer, setup_logging

typer_app = typer.Typer(help="Directory tree templates with ${...} expansion.")
alias_app = typer.Typer(help="Manage template aliases.")
var_app = typer.Typer(help="Manage global variables.")
typer_app.add_typer(alias_app, name="alias")
typer_app.add_typer(var_app, name="var")

DEFINE_HELP = "Define a variable as name=value (or just name for an empty value)."
PROMPT_HELP = "Answer prompts with yes/no, or ask (default)."


@typer_app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", help="Show version and exit."
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show what is being done."
    ),
) -> None:
    """Directory tree templates with ${...} expansion."""
    if version:
        typer.echo(f"makemake {__version__}")
        raise typer.Exit()

    setup_logging(verbose)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@typer_app.command("load")
def load(
    name: str = typer.Argument(..., help="Template or alias name."),
    dest: Path = typer.Argument(Path("."), help="Destination directory."),
    defines: Optional[List[str]] = typer.Option(
        None, "-D", "--define", help=DEFINE_HELP
    ),
    prompt: PromptAnswer = typer.Option(
        PromptAnswer.ASK, "-p", "--prompt", help=PROMPT_HELP
    ),
) -> None:
    """Load a template into a directory."""
    load_command(name, dest, defines, prompt)


@typer_app.command("create")
def create(
    name: str = typer.Argument(..., help="New template name."),
    src: Path = typer.Argument(Path("."), help="Template source directory."),
    prompt: PromptAnswer = typer.Option(
        PromptAnswer.ASK, "-p", "--prompt", help=PROMPT_HELP
    ),
) -> None:
    """Create a template from a directory."""
    create_command(name, src, prompt)


@typer_app.command("edit")
def edit(
    name: str = typer.Argument(..., help="Template name."),
    dest: Path = typer.Argument(Path("."), help="Destination directory."),
    prompt: PromptAnswer = typer.Option(
        PromptAnswer.ASK, "-p", "--prompt", help=PROMPT_HELP
    ),
) -> None:
    """Copy the template source into a directory."""
    edit_command(name, dest, prompt)


@typer_app.command("remove")
def remove(name: str = typer.Argument(..., help="Template name.")) -> None:
    """Remove a template."""
    remove_command(name)


@typer_app.command("list")
def list_templates() -> None:
    """List templates and aliases."""
    list_command()


@alias_app.command("set")
def alias_set(
    alias: str = typer.Argument(..., help="Alias name."),
    template: str = typer.Argument(..., help="Template the alias loads."),
    defines: Optional[List[str]] = typer.Option(
        None, "-D", "--define", help=DEFINE_HELP
    ),
) -> None:
    """Create or replace an alias."""
    alias_set_command(alias, template, defines)


@alias_app.command("remove")
def alias_remove(alias: str = typer.Argument(..., help="Alias name.")) -> None:
    """Remove an alias."""
    alias_remove_command(alias)


@var_app.command("set")
def var_set(
    name: str = typer.Argument(..., help="Variable name."),
    value: str = typer.Argument("", help="Variable value."),
) -> None:
    """Set a global variable."""
    var_set_command(name, value)


@var_app.command("unset")
def var_unset(name: str = typer.Argument(..., help="Variable name.")) -> None:
    """Remove a global variable."""
    var_unset_command(name)


@var_app.command("list")
def var_list() -> None:
    """List global variables."""
    var_list_command()


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    When called as a module or installed entrypoint this function launches the Typer app.
    """
    typer_app(args=argv)


if __name__ == "__main__":
    app()
