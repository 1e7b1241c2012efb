"""MAKEMAKE_HOME resolution and directory structure"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import NamedTuple

import typer

log = logging.getLogger(__name__)

APP_NAME = "makemake"


class MakemakeHome(NamedTuple):
    """
    Resolved MAKEMAKE_HOME paths.

    Structure:
        $MAKEMAKE_HOME/
        ├── templates/<template-name>/   # stored template trees
        └── config.json                  # global vars and aliases
    """

    root: Path

    @property
    def templates(self) -> Path:
        """$MAKEMAKE_HOME/templates/"""
        return self.root / "templates"

    @property
    def config_file(self) -> Path:
        """$MAKEMAKE_HOME/config.json"""
        return self.root / "config.json"

    def template_dir(self, name: str) -> Path:
        """$MAKEMAKE_HOME/templates/<name>/"""
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise ValueError(f"Invalid template name: {name!r}")
        return self.templates / name

    def ensure_dirs(self) -> None:
        """Create the template directory"""
        self.templates.mkdir(parents=True, exist_ok=True)
        log.debug(f"Ensured template directory at {self.templates}")


def resolve_home(override: str | Path | None = None) -> MakemakeHome:
    """
    Resolve MAKEMAKE_HOME.

    Priority:
    1. Explicit override
    2. MAKEMAKE_HOME environment variable
    3. Platform application directory (e.g. ~/.config/makemake)
    """
    if override:
        root = Path(override).expanduser()
        log.debug(f"Using override MAKEMAKE_HOME: {root}")
        return MakemakeHome(root=root)

    env_home = os.environ.get("MAKEMAKE_HOME")
    if env_home:
        root = Path(env_home).expanduser()
        log.debug(f"Using MAKEMAKE_HOME from env: {root}")
        return MakemakeHome(root=root)

    root = Path(typer.get_app_dir(APP_NAME))
    log.debug(f"Using default MAKEMAKE_HOME: {root}")
    return MakemakeHome(root=root)
