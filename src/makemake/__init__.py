"""Makemake - directory tree templates with `${...}` expansion"""

from makemake._version import __version__
from makemake.config import Alias, Config
from makemake.exceptions import (
    CommandError,
    EvalError,
    LexError,
    MakemakeError,
    ManifestError,
    MaterializerError,
    ParseError,
)
from makemake.expr import ExpandContext, evaluate_expression, expand_text
from makemake.home import MakemakeHome, resolve_home
from makemake.maker import Action, Manifest, copy_dir, create_template, load_template
from makemake.store import TemplateStore

__all__ = [
    "__version__",
    # expression engine
    "ExpandContext",
    "evaluate_expression",
    "expand_text",
    # materializer
    "Action",
    "Manifest",
    "copy_dir",
    "create_template",
    "load_template",
    # store / config
    "Alias",
    "Config",
    "MakemakeHome",
    "TemplateStore",
    "resolve_home",
    # errors
    "CommandError",
    "EvalError",
    "LexError",
    "MakemakeError",
    "ManifestError",
    "MaterializerError",
    "ParseError",
]
