"""Read-only file trees at a single commit."""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, Mapping

from git.exc import GitCommandError, ODBError
from git.objects import Blob, Commit

from goimpact.core.exceptions import SnapshotIOError
from goimpact.utils.hashing import git_blob_hash

logger = logging.getLogger(__name__)


class Snapshot(ABC):
    """Abstract immutable file tree keyed by repository-relative path."""

    commit_id: str

    @abstractmethod
    def paths(self) -> list[str]:
        """All file paths in the tree, sorted."""
        ...

    @abstractmethod
    def read(self, path: str) -> bytes:
        """
        Read the full content of a file.

        Args:
            path: Repository-relative POSIX path

        Returns:
            Raw file content

        Raises:
            KeyError: If the path is not in the tree
            SnapshotIOError: If the content cannot be read
        """
        ...

    @abstractmethod
    def fingerprint(self, path: str) -> str:
        """Content identity of a file; equal content gives equal fingerprints."""
        ...

    def exists(self, path: str) -> bool:
        """Check if a file exists in the tree."""
        return path in set(self.paths())

    def read_text(self, path: str) -> str:
        """Read a file as UTF-8 text."""
        return self.read(path).decode("utf-8", errors="replace")

    def iter_files(self, extensions: list[str] | None = None) -> Iterator[str]:
        """Iterate over file paths, optionally restricted to some extensions."""
        for path in self.paths():
            if extensions is None or any(path.endswith(ext) for ext in extensions):
                yield path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.commit_id[:7]})"


class MemorySnapshot(Snapshot):
    """Snapshot backed by an in-memory mapping of path -> content."""

    def __init__(self, files: Mapping[str, str | bytes], commit_id: str = "0" * 40) -> None:
        self.commit_id = commit_id
        self._files: dict[str, bytes] = {
            path.strip("/"): content.encode("utf-8") if isinstance(content, str) else content
            for path, content in files.items()
        }

    def paths(self) -> list[str]:
        return sorted(self._files)

    def read(self, path: str) -> bytes:
        return self._files[path]

    def fingerprint(self, path: str) -> str:
        return git_blob_hash(self._files[path])

    def exists(self, path: str) -> bool:
        return path in self._files


class GitSnapshot(Snapshot):
    """Snapshot of a GitPython commit tree."""

    def __init__(self, commit: Commit) -> None:
        """
        Initialize a git snapshot.

        Args:
            commit: The commit whose tree is exposed
        """
        self.commit = commit
        self.commit_id = commit.hexsha
        self._blobs: dict[str, Blob] | None = None

    @property
    def blobs(self) -> dict[str, Blob]:
        """Blobs of the tree keyed by path (lazy loaded)."""
        if self._blobs is None:
            try:
                self._blobs = {
                    item.path: item
                    for item in self.commit.tree.traverse()
                    if item.type == "blob"
                }
            except (GitCommandError, ODBError, ValueError, OSError) as e:
                raise SnapshotIOError(
                    f"Failed to list files of commit {self.commit_id}: {e}"
                ) from e
            logger.debug("Loaded %d files from %s", len(self._blobs), self.commit_id[:7])
        return self._blobs

    def paths(self) -> list[str]:
        return sorted(self.blobs)

    def read(self, path: str) -> bytes:
        blob = self.blobs[path]
        try:
            return blob.data_stream.read()
        except (GitCommandError, ODBError, ValueError, OSError) as e:
            raise SnapshotIOError(f"Failed to read {path} at {self.commit_id}: {e}") from e

    def fingerprint(self, path: str) -> str:
        return self.blobs[path].hexsha

    def exists(self, path: str) -> bool:
        return path in self.blobs
