"""Template materialization: manifest, tree walk, variables and hooks."""

from makemake.maker.loader import create_template, load_template
from makemake.maker.manifest import MANIFEST_FILE, Action, FileInfo, Manifest
from makemake.maker.walker import Materializer, copy_dir, make_dir

__all__ = [
    "MANIFEST_FILE",
    "Action",
    "FileInfo",
    "Manifest",
    "Materializer",
    "copy_dir",
    "create_template",
    "load_template",
    "make_dir",
]
