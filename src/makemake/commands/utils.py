"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from makemake.config import Config
from makemake.exceptions import MakemakeError
from makemake.home import MakemakeHome, resolve_home
from makemake.store import TemplateStore

console = Console()


class PromptAnswer(str, Enum):
    YES = "yes"
    NO = "no"
    ASK = "ask"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the makemake CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level - shows loaded templates and hook commands
    - Debug (MAKEMAKE_DEBUG=1): DEBUG level - shows every materialized entry
    """
    if os.environ.get("MAKEMAKE_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=bool(os.environ.get("MAKEMAKE_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("makemake")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Handle and exit on makemake errors."""
    if isinstance(error, MakemakeError):
        exit_with_error(error.message, error.exit_code)
    else:
        typer.echo(f"Unexpected error: {error}", err=True)
        sys.exit(1)


def confirm(message: str, answer: PromptAnswer) -> bool:
    """Ask a yes/no question unless the answer is preset."""
    if answer is PromptAnswer.YES:
        return True
    if answer is PromptAnswer.NO:
        return False
    return typer.confirm(message, default=False)


def parse_defines(defines: Optional[List[str]]) -> Dict[str, str]:
    """Parse `name=value` / `name` pairs from -D options."""
    vars: Dict[str, str] = {}
    for define in defines or []:
        name, _, value = define.partition("=")
        if not name:
            raise MakemakeError(f"Invalid variable definition '{define}'")
        vars[name] = value
    return vars


def is_non_empty_dir(path: Path) -> bool:
    return path.is_dir() and any(path.iterdir())


def get_home() -> MakemakeHome:
    return resolve_home()


def get_store() -> TemplateStore:
    return TemplateStore(get_home())


def get_config() -> Config:
    return Config.load(get_home().config_file)
