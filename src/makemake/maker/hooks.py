"""Pre/post command execution for template loading."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import List, Mapping

from makemake.exceptions import CommandError

log = logging.getLogger(__name__)


def parse_command(cmd: str) -> List[str]:
    """Split a command line into program and arguments."""
    try:
        args = shlex.split(cmd)
    except ValueError as e:
        raise CommandError(cmd, f"cannot be parsed ({e})") from e
    if not args:
        raise CommandError(cmd, "is invalid, missing program")
    return args


def resolve_program(program: str, template_dir: Path) -> str:
    """Resolve relative program paths against the template directory.

    Bare names (`git`) are looked up on PATH as usual.
    """
    path = Path(program)
    if program.startswith(".") or len(path.parts) > 1:
        return str(template_dir / path)
    return program


def run_command(
    cmd: str,
    template_dir: Path,
    cwd: Path,
    vars: Mapping[str, str],
) -> None:
    """Run one hook command and wait for it to finish.

    Args:
        cmd: Already expanded command line.
        template_dir: Template root, used to resolve relative programs.
        cwd: Working directory of the process (the destination).
        vars: Variables exported into the process environment.

    Raises:
        CommandError: If the command cannot be started or exits non-zero.
    """
    args = parse_command(cmd)
    args[0] = resolve_program(args[0], template_dir)

    env = os.environ.copy()
    env.update(vars)

    log.debug(f"Running {shlex.join(args)} in {cwd}")
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            env=env,
            capture_output=True,
            text=True,
        )
    except (OSError, ValueError) as e:
        raise CommandError(cmd, f"failed to start ({e})") from e

    if result.returncode != 0:
        raise CommandError(
            cmd, f"exited with code {result.returncode}", stderr=result.stderr
        )
