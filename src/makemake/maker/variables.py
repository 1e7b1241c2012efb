"""Variable resolution for template loading.

Precedence, lowest to highest:
1. Manifest defaults (optionally pre-expanded, see `expandVariables`)
2. Computed variables (_OS, the platform flag, _, _PDIR)
3. Caller-supplied variables (global config, alias, -D overrides)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, Mapping, Optional

from makemake.expr.evaluator import ExpandContext
from makemake.expr.expand import expand_text
from makemake.maker.manifest import Manifest

log = logging.getLogger(__name__)

# _OS value -> flag variable set to "true"
_PLATFORM_FLAGS = {
    "linux": "_LINUX",
    "windows": "_WINDOWS",
    "macos": "_MACOS",
    "ios": "_IOS",
    "freebsd": "_FREEBSD",
}


def detect_os(platform: Optional[str] = None) -> str:
    """Map `sys.platform` to the value of `_OS`."""
    platform = platform or sys.platform
    if platform.startswith("linux"):
        return "linux"
    if platform in ("win32", "cygwin"):
        return "windows"
    if platform == "darwin":
        return "macos"
    if platform == "ios":
        return "ios"
    if platform.startswith("freebsd"):
        return "freebsd"
    return platform


def internal_variables(dest: Path, platform: Optional[str] = None) -> Dict[str, str]:
    """Variables computed for every load."""
    os_name = detect_os(platform)
    vars = {"_OS": os_name, "_": "", "_PDIR": Path(dest).resolve().name}
    flag = _PLATFORM_FLAGS.get(os_name)
    if flag:
        vars[flag] = "true"
    return vars


def merge_caller_variables(*layers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Merge caller variable layers; later layers override earlier ones."""
    merged: Dict[str, str] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def resolve_variables(
    manifest: Manifest,
    caller_vars: Mapping[str, str],
    dest: Path,
    template_dir: Path,
    platform: Optional[str] = None,
) -> Dict[str, str]:
    """Build the final variable mapping for a load.

    Args:
        manifest: The template manifest (its defaults are the lowest layer).
        caller_vars: Variables supplied by the caller.
        dest: Destination directory (for _PDIR).
        template_dir: Template root, for function calls in pre-expanded defaults.
        platform: Override for `sys.platform`, mostly for tests.

    Returns:
        The merged mapping used for the whole walk.
    """
    internal = internal_variables(dest, platform)
    overrides = merge_caller_variables(internal, caller_vars)

    defaults = dict(manifest.vars)
    if manifest.expand_variables:
        ctx = ExpandContext(vars=overrides, template_dir=template_dir)
        defaults = {name: expand_text(value, ctx) for name, value in defaults.items()}
        log.debug(f"Expanded {len(defaults)} manifest variable defaults")

    return merge_caller_variables(defaults, overrides)
