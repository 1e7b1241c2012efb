"""Makemake Exceptions

Every failure the core can report derives from MakemakeError. The CLI turns
these into a single `Error: ...` line and the error's exit code.
"""

from __future__ import annotations


class MakemakeError(Exception):
    """Base exception for all makemake errors."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class LexError(MakemakeError):
    """Raised when the text inside `${...}` cannot be tokenized."""


class ParseError(MakemakeError):
    """Raised when the token stream does not form a valid expression."""

    def __init__(self, expected: str):
        self.expected = expected
        super().__init__(f"expected {expected}")


class EvalError(MakemakeError):
    """Raised when an expression fails during evaluation."""


class MaterializerError(MakemakeError):
    """Raised when the template tree cannot be materialized."""

    def __init__(self, message: str, path: object = None):
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)


class ManifestError(MakemakeError):
    """Raised when makemake.json cannot be decoded."""

    def __init__(self, path: object, reason: str):
        self.path = path
        super().__init__(f"Invalid manifest {path}: {reason}")


class CommandError(MakemakeError):
    """Raised when a pre/post command cannot run or exits unsuccessfully."""

    def __init__(self, command: str, reason: str, stderr: str = ""):
        self.command = command
        self.stderr = stderr
        message = f"Command '{command}' {reason}"
        if stderr.strip():
            message = f"{message}:\n{stderr.rstrip()}"
        super().__init__(message)


class ConfigError(MakemakeError):
    """Raised when the global config file cannot be decoded."""


class TemplateNotFoundError(MakemakeError):
    """Raised when a template is not found in the store."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Template not found: {name}")


class TemplateExistsError(MakemakeError):
    """Raised when creating a template that already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Template already exists: {name}")


class AliasNotFoundError(MakemakeError):
    """Raised when an alias is not defined in the config."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"Alias not found: {alias}")
