"""Custom exceptions for goimpact."""


class GoImpactError(Exception):
    """Base exception for all goimpact errors."""

    pass


class ConfigError(GoImpactError):
    """Raised when there's an error with configuration."""

    pass


class CommitNotFoundError(GoImpactError):
    """Raised when a commit reference matches no commit, or several."""

    def __init__(self, ref: str, reason: str = "not found") -> None:
        self.ref = ref
        self.reason = reason
        super().__init__(f"Commit {ref} {reason}")


class ManifestMissingError(GoImpactError):
    """Raised when the module manifest is absent from a snapshot."""

    def __init__(self, path: str, commit: str | None = None) -> None:
        self.path = path
        self.commit = commit
        where = f" at {commit}" if commit else ""
        super().__init__(f"Manifest {path} not found{where}")


class ManifestMalformedError(GoImpactError):
    """Raised when the manifest declares no module namespace."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No module declaration found in {path}")


class LockFileMissingError(GoImpactError):
    """Raised when the dependency lock file is absent from a snapshot."""

    def __init__(self, path: str, commit: str | None = None) -> None:
        self.path = path
        self.commit = commit
        where = f" at {commit}" if commit else ""
        super().__init__(f"Lock file {path} not found{where}")


class ParseError(GoImpactError):
    """Raised when a source file's header cannot be parsed."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to parse {path}: {detail}")


class SnapshotIOError(GoImpactError):
    """Raised when reading from a snapshot fails."""

    pass


class RepositoryError(SnapshotIOError):
    """Raised when a repository cannot be opened or cloned."""

    pass
