"""Configuration management for goimpact."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from goimpact.core.constants import (
    AMBIGUOUS_PREFIX_ERROR,
    CONFIG_FILE,
    CONSTRAINT_DIRECTIVES,
    LOCK_FILE,
    MANIFEST_FILE,
    SOURCE_EXTENSIONS,
)
from goimpact.core.exceptions import ConfigError


class ImpactConfig(BaseModel):
    """Analysis settings, optionally stored in .goimpact.yaml."""

    manifest_file: str = Field(MANIFEST_FILE, description="Module manifest at the tree root")
    lock_file: str = Field(LOCK_FILE, description="Dependency lock file at the tree root")
    source_extensions: list[str] = Field(default_factory=lambda: SOURCE_EXTENSIONS.copy())
    constraint_directives: list[str] = Field(
        default_factory=lambda: CONSTRAINT_DIRECTIVES.copy(),
        description="Comment prefixes that exclude a file from the import graph",
    )
    ambiguous_prefix: Literal["error", "first"] = Field(
        AMBIGUOUS_PREFIX_ERROR,
        description="'error' rejects ambiguous abbreviated hashes, 'first' takes the first match",
    )
    match_module_subpackages: bool = Field(
        True, description="Imports of packages inside a changed module count as changed"
    )

    @classmethod
    def load(cls, path: Path) -> "ImpactConfig":
        """Load configuration from a YAML file."""
        if not path.exists():
            return cls()
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            return cls.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ConfigError(f"Failed to load config from {path}: {e}") from e

    @classmethod
    def discover(cls, start: Path | None = None) -> "ImpactConfig":
        """Load .goimpact.yaml from a directory (defaults to the current one)."""
        start = Path.cwd() if start is None else Path(start)
        return cls.load(start / CONFIG_FILE)

    def save(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(path, "w") as f:
                yaml.dump(
                    self.model_dump(),
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                )
        except OSError as e:
            raise ConfigError(f"Failed to save config to {path}: {e}") from e

    def is_source_file(self, path: str) -> bool:
        """Check if a repository path names a source file."""
        return any(path.endswith(ext) for ext in self.source_extensions)
