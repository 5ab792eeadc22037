"""Data models shared by the tracking, indexing and analysis layers."""

from dataclasses import dataclass
from enum import Enum

from goimpact.utils.paths import package_id


class ChangeKind(str, Enum):
    """How a path differs between two snapshots."""

    ADDED = "added"  # present only in "to"
    REMOVED = "removed"  # present only in "from"
    MODIFIED = "modified"  # present in both with different content


@dataclass(frozen=True)
class PathChange:
    """A single path that differs between two snapshots."""

    path: str
    kind: ChangeKind


@dataclass(frozen=True)
class PackageTarget:
    """A first-party package, addressed by its directory in the repository."""

    directory: str  # "" for the repository root

    def package_id(self, namespace: str) -> str:
        return package_id(namespace, self.directory)


@dataclass(frozen=True)
class DependencyTarget:
    """A third-party module, addressed by its raw identifier."""

    identifier: str


ImpactTarget = PackageTarget | DependencyTarget


@dataclass(frozen=True)
class ImportEdge:
    """A source file declaring an import."""

    file: str
    identifier: str


@dataclass(frozen=True)
class Cause:
    """Why a package was pulled in: the file whose import triggered it."""

    file: str
    identifier: str
