"""Edit command - copy the raw template source out for editing"""

from __future__ import annotations

from pathlib import Path

import typer

from .utils import PromptAnswer, confirm, get_store, handle_error, is_non_empty_dir


def edit_command(
    name: str,
    dest: Path,
    prompt: PromptAnswer = PromptAnswer.ASK,
) -> None:
    """Copy the source of template `name` into `dest`."""
    try:
        if is_non_empty_dir(dest) and not confirm(
            f"The directory {dest} is not empty.\n"
            "Do you want to load the template source anyway?",
            prompt,
        ):
            return

        get_store().edit(name, dest)
        typer.echo(f"Copied source of template '{name}' into {dest}")

    except Exception as e:
        handle_error(e)
