"""Core module - configuration, constants, exceptions."""

from goimpact.core.config import ImpactConfig
from goimpact.core.exceptions import (
    CommitNotFoundError,
    ConfigError,
    GoImpactError,
    LockFileMissingError,
    ManifestMalformedError,
    ManifestMissingError,
    ParseError,
    RepositoryError,
    SnapshotIOError,
)

__all__ = [
    "ImpactConfig",
    "GoImpactError",
    "ConfigError",
    "CommitNotFoundError",
    "ManifestMissingError",
    "ManifestMalformedError",
    "LockFileMissingError",
    "ParseError",
    "SnapshotIOError",
    "RepositoryError",
]
