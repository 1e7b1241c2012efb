"""Template manifest (makemake.json).

Schema:
- preCommand / postCommand: optional shell commands, expanded before running
- expandVariables: expand the `vars` defaults against the caller's variables
- files: per-path action, either a bare tag or {"action": ..., "name": ...}
- vars: default variable values
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from makemake.exceptions import ManifestError

MANIFEST_FILE = "makemake.json"


class Action(str, Enum):
    AUTO = "Auto"
    COPY = "Copy"
    MAKE = "Make"
    IGNORE = "Ignore"


class FileInfo(BaseModel):
    """What to do with one template entry."""

    action: Action = Field(default=Action.AUTO, description="Action on the entry")
    name: str = Field(
        default="", description="Name template for the destination entry"
    )


def normalize_key(path: str) -> str:
    """Normalize a manifest path to the form entries are looked up by."""
    return PurePosixPath(path.replace("\\", "/")).as_posix()


class Manifest(BaseModel):
    """Parsed makemake.json."""

    model_config = {"populate_by_name": True}

    pre_command: Optional[str] = Field(default=None, alias="preCommand")
    post_command: Optional[str] = Field(default=None, alias="postCommand")
    expand_variables: bool = Field(default=False, alias="expandVariables")
    files: dict[str, FileInfo] = Field(
        default_factory=dict, description="Per-path actions"
    )
    vars: dict[str, str] = Field(default_factory=dict, description="Variable defaults")

    @field_validator("files", mode="before")
    @classmethod
    def normalize_files(cls, value: Any) -> Any:
        """Accept bare action tags and normalize the path keys."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value

        files = {}
        for key, info in value.items():
            if isinstance(info, str):
                info = {"action": info}
            files[normalize_key(key)] = info
        return files

    @field_validator("vars", mode="before")
    @classmethod
    def default_vars(cls, value: Any) -> Any:
        return {} if value is None else value

    def lookup(self, rel_path: str) -> Optional[FileInfo]:
        """Get the entry for a path relative to the template root."""
        return self.files.get(rel_path)

    @classmethod
    def load(cls, path: Path) -> "Manifest":
        """Load and validate a manifest file.

        Raises:
            ManifestError: If the file is not valid JSON of the expected shape.
        """
        try:
            return cls.model_validate_json(path.read_bytes())
        except ValidationError as e:
            raise ManifestError(path, str(e)) from e
        except OSError as e:
            raise ManifestError(path, e.strerror or str(e)) from e
