"""Makemake Template Store

Filesystem-based storage of templates in $MAKEMAKE_HOME/templates/<name>/.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Mapping, Optional

from makemake.exceptions import TemplateExistsError, TemplateNotFoundError
from makemake.home import MakemakeHome, resolve_home
from makemake.maker.loader import create_template, load_template
from makemake.maker.walker import copy_dir

log = logging.getLogger(__name__)


class TemplateStore:
    """Filesystem-based template storage.

    Directory structure:
        <home>/
          templates/
            <name>/
              makemake.json   # optional manifest
              ...             # template tree
    """

    def __init__(self, home: MakemakeHome | None = None):
        """Initialize the store.

        Args:
            home: Resolved home. If None, resolves from the environment.
        """
        self.home = home or resolve_home()

    def path(self, name: str) -> Path:
        """Get the directory of a template."""
        return self.home.template_dir(name)

    def exists(self, name: str) -> bool:
        """Check if a template exists."""
        return self.path(name).is_dir()

    def _existing(self, name: str) -> Path:
        path = self.path(name)
        if not path.is_dir():
            raise TemplateNotFoundError(name)
        return path

    def names(self) -> List[str]:
        """List stored template names."""
        if not self.home.templates.is_dir():
            return []
        return sorted(p.name for p in self.home.templates.iterdir() if p.is_dir())

    def create(self, name: str, src: Path, overwrite: bool = False) -> Path:
        """Store the directory `src` as template `name`.

        Args:
            name: Template name.
            src: Directory to snapshot.
            overwrite: Replace an existing template of the same name.

        Returns:
            The template directory.

        Raises:
            TemplateExistsError: If the template exists and overwrite is False.
        """
        path = self.path(name)
        if path.exists():
            if not overwrite:
                raise TemplateExistsError(name)
            log.debug(f"Removing old template {path}")
            shutil.rmtree(path)

        self.home.ensure_dirs()
        create_template(Path(src), path)
        return path

    def load(
        self,
        name: str,
        dest: Path,
        vars: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Load template `name` into `dest`, expanding it with `vars`."""
        load_template(self._existing(name), Path(dest), vars)

    def edit(self, name: str, dest: Path) -> None:
        """Copy the raw template source (manifest included) to `dest`."""
        copy_dir(self._existing(name), Path(dest))

    def remove(self, name: str) -> None:
        """Delete a template."""
        path = self._existing(name)
        shutil.rmtree(path)
        log.info(f"Removed template {name}")
