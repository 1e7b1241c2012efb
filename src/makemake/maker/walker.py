"""Materializer - walks a template tree and produces the destination tree.

Both walks use an explicit work list of (source, destination) pairs instead
of recursion, so arbitrarily deep templates cannot exhaust the call stack.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from collections import deque
from pathlib import Path
from typing import Deque, Optional, Tuple

from makemake.exceptions import MaterializerError
from makemake.expr.evaluator import ExpandContext
from makemake.expr.expand import expand_file, expand_text
from makemake.maker.manifest import MANIFEST_FILE, Action, FileInfo, Manifest

log = logging.getLogger(__name__)

WorkList = Deque[Tuple[Path, Path]]


def _clear(dest: Path) -> None:
    """Remove a file or symlink that is about to be replaced."""
    if dest.is_symlink() or dest.is_file():
        dest.unlink()
    elif dest.is_dir():
        raise MaterializerError("Destination is a directory", dest)


def _copy_symlink(src: Path, dest: Path) -> None:
    _clear(dest)
    os.symlink(os.readlink(src), dest)


def _copy_file(src: Path, dest: Path) -> None:
    _clear(dest)
    shutil.copy(src, dest, follow_symlinks=False)


def _children(src: Path, dest: Path, work: WorkList) -> None:
    dest.mkdir(parents=True, exist_ok=True)
    for child in sorted(src.iterdir(), reverse=True):
        work.append((child, dest / child.name))


def copy_dir(src: Path, dest: Path) -> None:
    """Copy the tree at `src` to `dest` verbatim.

    Regular files are copied byte-for-byte with their permission bits,
    symlinks are re-created with the same (unresolved) target and
    directories are created as needed. No manifest is consulted.

    Raises:
        MaterializerError: On unsupported entries or filesystem failures.
    """
    src, dest = Path(src), Path(dest)
    work: WorkList = deque([(src, dest)])

    while work:
        s, d = work.pop()
        try:
            mode = s.lstat().st_mode
            if stat.S_ISLNK(mode):
                _copy_symlink(s, d)
            elif stat.S_ISREG(mode):
                _copy_file(s, d)
            elif stat.S_ISDIR(mode):
                _children(s, d, work)
            else:
                raise MaterializerError("Unsupported file type", s)
        except OSError as e:
            raise MaterializerError(f"Failed to copy {s} ({e.strerror or e})", d) from e


class Materializer:
    """Applies a manifest to a template tree.

    Each entry is looked up by its POSIX path relative to the template root
    and is either copied, expanded, ignored or (for directories) descended
    into with the same manifest.
    """

    def __init__(self, template_dir: Path, manifest: Manifest, ctx: ExpandContext):
        """Initialize the materializer.

        Args:
            template_dir: Root of the template tree.
            manifest: Per-path actions and names.
            ctx: Expansion context (final variables) for contents and names.
        """
        self.template_dir = Path(template_dir)
        self.manifest = manifest
        self.ctx = ctx

    def run(self, dest: Path) -> None:
        """Materialize the template into `dest`."""
        work: WorkList = deque([(self.template_dir, Path(dest))])

        while work:
            src, out = work.pop()
            try:
                self._step(src, out, work)
            except OSError as e:
                raise MaterializerError(
                    f"Failed to materialize {src} ({e.strerror or e})", out
                ) from e
            except UnicodeDecodeError as e:
                raise MaterializerError(
                    f"File is not valid UTF-8 ({e.reason})", src
                ) from e

    def _relative(self, src: Path) -> str:
        try:
            return src.relative_to(self.template_dir).as_posix()
        except ValueError as e:
            raise MaterializerError("Path is outside of the template", src) from e

    def _resolve(
        self, info: Optional[FileInfo], dest: Path
    ) -> Tuple[Action, Path]:
        """Get the effective action and destination for an entry.

        A name template that expands to nothing turns the entry into Ignore.
        The expanded name must be a single path component.
        """
        if info is None:
            return Action.AUTO, dest
        if info.action is Action.IGNORE or not info.name:
            return info.action, dest

        name = expand_text(info.name, self.ctx)
        if not name:
            log.debug(f"Name of {dest} expanded to nothing, ignoring")
            return Action.IGNORE, dest
        if name in (".", "..") or Path(name).name != name:
            raise MaterializerError(f"Invalid file name '{name}'", dest)
        try:
            return info.action, dest.with_name(name)
        except ValueError as e:
            raise MaterializerError(f"Invalid file name '{name}'", dest) from e

    def _step(self, src: Path, dest: Path, work: WorkList) -> None:
        if src == self.template_dir:
            if not src.is_dir():
                raise MaterializerError("Template is not a directory", src)
            _children(src, dest, work)
            return

        mode = src.lstat().st_mode
        rel = self._relative(src)
        info = self.manifest.lookup(rel)
        if info is None and rel == MANIFEST_FILE:
            log.debug(f"Skipping {rel}")
            return

        action, dest = self._resolve(info, dest)
        if action is Action.IGNORE:
            log.debug(f"Ignoring {rel}")
            return

        if stat.S_ISLNK(mode):
            log.debug(f"Symlink {rel} -> {dest}")
            _copy_symlink(src, dest)
        elif stat.S_ISREG(mode):
            if action is Action.MAKE:
                log.debug(f"Make {rel} -> {dest}")
                _clear(dest)
                expand_file(src, dest, self.ctx)
                shutil.copymode(src, dest)
            else:
                log.debug(f"Copy {rel} -> {dest}")
                _copy_file(src, dest)
        elif stat.S_ISDIR(mode):
            if action is Action.COPY:
                log.debug(f"Copy tree {rel} -> {dest}")
                copy_dir(src, dest)
            else:
                _children(src, dest, work)
        else:
            raise MaterializerError("Unsupported file type", src)


def make_dir(
    template_dir: Path, dest: Path, manifest: Manifest, ctx: ExpandContext
) -> None:
    """Materialize `template_dir` into `dest` following `manifest`."""
    Materializer(template_dir, manifest, ctx).run(dest)
