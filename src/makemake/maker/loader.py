"""Template loading and creation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from makemake.expr.evaluator import ExpandContext
from makemake.expr.expand import expand_text
from makemake.maker.hooks import run_command
from makemake.maker.manifest import MANIFEST_FILE, Manifest
from makemake.maker.variables import resolve_variables
from makemake.maker.walker import copy_dir, make_dir

log = logging.getLogger(__name__)


def create_template(src: Path, out: Path) -> None:
    """Snapshot the directory `src` as a template stored at `out`."""
    log.info(f"Creating template {out} from {src}")
    copy_dir(Path(src), Path(out))


def load_template(
    src: Path,
    dest: Path,
    vars: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> None:
    """Load the template at `src` into `dest`.

    Without a makemake.json the tree is copied verbatim. Otherwise:
    1. Parse the manifest (nothing is written if it is malformed)
    2. Resolve variables: manifest defaults < computed < `vars`
    3. Run the expanded preCommand in `dest`
    4. Materialize the tree following the manifest
    5. Run the expanded postCommand in `dest`

    Args:
        src: Template root directory.
        dest: Destination directory, created if missing.
        vars: Caller-supplied variables; they override the manifest defaults.
        platform: Override for `sys.platform` when computing `_OS`.

    Raises:
        MakemakeError: Any failure aborts the load. Files already written are
            left in place.
    """
    src, dest = Path(src), Path(dest)
    manifest_path = src / MANIFEST_FILE

    if not manifest_path.is_file():
        log.info(f"No {MANIFEST_FILE} in {src}, copying template as is")
        copy_dir(src, dest)
        return

    manifest = Manifest.load(manifest_path)
    final_vars = resolve_variables(manifest, vars or {}, dest, src, platform)
    ctx = ExpandContext(vars=final_vars, template_dir=src)

    if manifest.pre_command:
        dest.mkdir(parents=True, exist_ok=True)
        _run_hook(manifest.pre_command, ctx, dest)

    log.info(f"Loading template {src} into {dest}")
    make_dir(src, dest, manifest, ctx)

    if manifest.post_command:
        _run_hook(manifest.post_command, ctx, dest)


def _run_hook(command: str, ctx: ExpandContext, dest: Path) -> None:
    cmd = expand_text(command, ctx)
    log.info(f"Running command: {cmd}")
    run_command(cmd, template_dir=ctx.template_dir, cwd=dest, vars=ctx.vars)
