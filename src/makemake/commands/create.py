"""Create command - store a directory as a template"""

from __future__ import annotations

from pathlib import Path

import typer

from .utils import PromptAnswer, confirm, get_store, handle_error


def create_command(
    name: str,
    src: Path,
    prompt: PromptAnswer = PromptAnswer.ASK,
) -> None:
    """Create template `name` from the directory `src`."""
    try:
        store = get_store()
        overwrite = False
        if store.exists(name):
            if not confirm(
                f"Template with the name '{name}' already exists.\n"
                "Do you want to overwrite it?",
                prompt,
            ):
                return
            overwrite = True

        path = store.create(name, src, overwrite=overwrite)
        typer.echo(f"Created template '{name}' at {path}")

    except Exception as e:
        handle_error(e)
