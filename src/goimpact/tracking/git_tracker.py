"""Git integration: open or clone a repository and resolve commits."""

import base64
import logging
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, ODBError
from git.objects import Commit

from goimpact.core.constants import AMBIGUOUS_PREFIX_ERROR, AMBIGUOUS_PREFIX_FIRST, FILE_SCHEME
from goimpact.core.exceptions import CommitNotFoundError, RepositoryError
from goimpact.tracking.snapshot import GitSnapshot

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"[0-9a-fA-F]{1,40}")


@dataclass
class Credentials:
    """HTTP credentials for cloning a remote repository."""

    user: str | None = None
    password: str | None = None
    token: str | None = None

    def auth_header(self) -> str | None:
        """Build the HTTP Authorization header, token taking precedence."""
        if self.token:
            return f"Authorization: Bearer {self.token}"
        if self.user and self.password:
            basic = base64.b64encode(f"{self.user}:{self.password}".encode()).decode()
            return f"Authorization: Basic {basic}"
        return None

    def git_env(self) -> dict[str, str]:
        """Environment passing the header to git without touching the URL or config files."""
        header = self.auth_header()
        if header is None:
            return {}
        return {
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": "http.extraHeader",
            "GIT_CONFIG_VALUE_0": header,
        }


class GitTracker:
    """Access commits of a local or cloned repository."""

    def __init__(
        self,
        repo: Repo,
        ambiguous_prefix: str = AMBIGUOUS_PREFIX_ERROR,
        workdir: tempfile.TemporaryDirectory | None = None,
    ) -> None:
        """
        Initialize git tracker.

        Args:
            repo: The repository to read from
            ambiguous_prefix: "error" or "first", applied to abbreviated hashes
            workdir: Temporary clone directory owned by this tracker, if any
        """
        self.repo = repo
        self.ambiguous_prefix = ambiguous_prefix
        self._workdir = workdir

    @classmethod
    def open(
        cls,
        location: str,
        branch: str | None = None,
        credentials: Credentials | None = None,
        ambiguous_prefix: str = AMBIGUOUS_PREFIX_ERROR,
    ) -> "GitTracker":
        """
        Open a local repository or clone a remote one.

        Args:
            location: file://<path>, a local directory, or a clone URL
            branch: Branch to clone (remote repositories only)
            credentials: Optional HTTP credentials for cloning
            ambiguous_prefix: Policy for abbreviated hashes

        Returns:
            A tracker; close it (or use it as a context manager) to clean up clones
        """
        if location.startswith(FILE_SCHEME):
            return cls(_open_local(location[len(FILE_SCHEME):]), ambiguous_prefix)
        if Path(location).is_dir():
            return cls(_open_local(location), ambiguous_prefix)

        workdir = tempfile.TemporaryDirectory(prefix="goimpact-")
        options: dict[str, str] = {}
        if branch:
            options["branch"] = branch
        # Never block on an interactive credential prompt
        env = {"GIT_TERMINAL_PROMPT": "0", **(credentials or Credentials()).git_env()}

        logger.info("Cloning %s%s", location, f" ({branch})" if branch else "")
        try:
            repo = Repo.clone_from(location, workdir.name, bare=True, env=env, **options)
        except GitCommandError as e:
            workdir.cleanup()
            raise RepositoryError(f"Failed to clone {location}: {e.stderr.strip() or e}") from e
        return cls(repo, ambiguous_prefix, workdir)

    def close(self) -> None:
        """Release the repository and remove any temporary clone."""
        self.repo.close()
        if self._workdir is not None:
            self._workdir.cleanup()
            self._workdir = None

    def __enter__(self) -> "GitTracker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def resolve_commit(self, ref: str) -> Commit:
        """
        Find the commit named by a revision or an abbreviated hash.

        Args:
            ref: Full hash, unambiguous hash prefix, branch or tag

        Returns:
            The matching commit

        Raises:
            CommitNotFoundError: If nothing matches, or several commits match a
                prefix while the ambiguity policy is "error"
        """
        ref = ref.strip()
        if not ref:
            raise CommitNotFoundError(ref, "is empty")

        try:
            return self.repo.commit(ref)
        except (ODBError, ValueError, GitCommandError) as e:
            logger.debug("git could not resolve %s directly: %s", ref, e)

        if not _HEX_RE.fullmatch(ref):
            raise CommitNotFoundError(ref)

        # git refuses prefixes shared with non-commit objects; only commits count here
        prefix = ref.lower()
        matches: list[Commit] = []
        try:
            for commit in self.repo.iter_commits("--all"):
                if not commit.hexsha.startswith(prefix):
                    continue
                if self.ambiguous_prefix == AMBIGUOUS_PREFIX_FIRST:
                    return commit
                matches.append(commit)
        except (GitCommandError, ValueError) as e:
            raise RepositoryError(f"Failed to scan commit history: {e}") from e

        if not matches:
            raise CommitNotFoundError(ref)
        if len(matches) > 1:
            shown = ", ".join(c.hexsha[:12] for c in matches[:5])
            raise CommitNotFoundError(ref, f"is ambiguous ({shown})")
        return matches[0]

    def snapshot(self, ref: str) -> GitSnapshot:
        """Get the file tree of a commit."""
        commit = self.resolve_commit(ref)
        logger.debug("Resolved %s to %s", ref, commit.hexsha)
        return GitSnapshot(commit)


def _open_local(path: str) -> Repo:
    try:
        return Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise RepositoryError(f"No git repository found at {path}") from e
