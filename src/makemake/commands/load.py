"""Load command - instantiate a template into a directory"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from makemake.maker.variables import merge_caller_variables

from .utils import (
    PromptAnswer,
    confirm,
    get_config,
    get_store,
    handle_error,
    is_non_empty_dir,
    parse_defines,
)

log = logging.getLogger(__name__)


def load_command(
    name: str,
    dest: Path,
    defines: Optional[List[str]] = None,
    prompt: PromptAnswer = PromptAnswer.ASK,
) -> None:
    """Load template (or alias) `name` into `dest`."""
    try:
        config = get_config()
        template, alias_vars = config.resolve(name)
        if template != name:
            log.info(f"Alias '{name}' resolves to template '{template}'")

        vars = merge_caller_variables(config.vars, alias_vars, parse_defines(defines))

        if is_non_empty_dir(dest) and not confirm(
            f"The directory {dest} is not empty.\n"
            "Do you want to load the template anyway?",
            prompt,
        ):
            return

        get_store().load(template, dest, vars)
        typer.echo(f"Loaded template '{template}' into {dest}")

    except Exception as e:
        handle_error(e)
