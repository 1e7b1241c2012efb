"""Global configuration: variables and template aliases.

Stored as JSON in $MAKEMAKE_HOME/config.json:

    {
      "vars": {"author": "me"},
      "aliases": {"py": {"template": "python", "vars": {"license": "MIT"}}}
    }
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

import msgspec

from makemake.exceptions import AliasNotFoundError, ConfigError


class Alias(msgspec.Struct):
    """Alternative name for a template with its own variable defaults."""

    template: str
    vars: Dict[str, str] = msgspec.field(default_factory=dict)


class Config(msgspec.Struct):
    """Top-level configuration containing global vars and aliases."""

    vars: Dict[str, str] = msgspec.field(default_factory=dict)
    aliases: Dict[str, Alias] = msgspec.field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load config from `path`; a missing file is an empty config."""
        if not path.exists():
            return cls()
        try:
            return msgspec.json.decode(path.read_bytes(), type=cls)
        except msgspec.DecodeError as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(msgspec.json.format(msgspec.json.encode(self), indent=2))

    def set_var(self, name: str, value: str) -> None:
        self.vars[name] = value

    def unset_var(self, name: str) -> bool:
        """Remove a global variable. Returns False if it was not set."""
        return self.vars.pop(name, None) is not None

    def set_alias(
        self, alias: str, template: str, vars: Optional[Dict[str, str]] = None
    ) -> None:
        self.aliases[alias] = Alias(template=template, vars=dict(vars or {}))

    def remove_alias(self, alias: str) -> None:
        if self.aliases.pop(alias, None) is None:
            raise AliasNotFoundError(alias)

    def resolve(self, name: str) -> Tuple[str, Dict[str, str]]:
        """Resolve a template or alias name.

        Returns:
            (template name, alias variables). Plain template names get no
            alias variables.
        """
        alias = self.aliases.get(name)
        if alias is None:
            return name, {}
        return alias.template, dict(alias.vars)
