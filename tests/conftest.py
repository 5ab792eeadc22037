"""Pytest configuration and fixtures for goimpact tests."""

from pathlib import Path
from typing import Iterable

import pytest
from git import Actor, Repo

from goimpact.tracking.snapshot import MemorySnapshot

NAMESPACE = "example.org/app"

GO_MOD = f"module {NAMESPACE}\n\ngo 1.21\n\nrequire github.com/foo/bar v1.0.0\n"

GO_SUM_OLD = (
    "github.com/foo/bar v1.0.0 h1:xyz=\n"
    "github.com/foo/bar v1.0.0/go.mod h1:xyzmod=\n"
)

GO_SUM_NEW = (
    "github.com/foo/bar v1.2.3 h1:abc=\n"
    "github.com/foo/bar v1.2.3/go.mod h1:abcmod=\n"
)


def go_source(
    package: str,
    imports: Iterable[str] = (),
    constraint: str | None = None,
    body: str = "",
) -> str:
    """Build a small Go file with the given package clause and imports."""
    lines: list[str] = []
    if constraint:
        lines += [constraint, ""]
    lines.append(f"package {package}")
    imports = list(imports)
    if imports:
        lines += ["", "import ("]
        lines += [f'\t"{path}"' for path in imports]
        lines.append(")")
    lines += ["", "func Hello() string {", f'\treturn "hello{body}"', "}", ""]
    return "\n".join(lines)


@pytest.fixture
def base_files() -> dict[str, str]:
    """A small module: root package, pkg/x, pkg/y importing x, cmd importing y."""
    return {
        "go.mod": GO_MOD,
        "go.sum": GO_SUM_OLD,
        "main.go": go_source("main", ["fmt", f"{NAMESPACE}/cmd"]),
        "pkg/x/x.go": go_source("x"),
        "pkg/y/y.go": go_source("y", [f"{NAMESPACE}/pkg/x"]),
        "cmd/cmd.go": go_source("cmd", [f"{NAMESPACE}/pkg/y"]),
        "internal/solo/solo.go": go_source("solo", ["strings"]),
        "README.md": "# app\n",
    }


@pytest.fixture
def snapshot_pair(base_files: dict[str, str]):
    """Factory producing (from, to) snapshots where "to" applies some edits."""

    def make(edits: dict[str, str | None]) -> tuple[MemorySnapshot, MemorySnapshot]:
        new_files = dict(base_files)
        for path, content in edits.items():
            if content is None:
                new_files.pop(path, None)
            else:
                new_files[path] = content
        return (
            MemorySnapshot(base_files, commit_id="a" * 40),
            MemorySnapshot(new_files, commit_id="b" * 40),
        )

    return make


class RepoBuilder:
    """Builds a throwaway git repository commit by commit."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.repo = Repo.init(path)
        self.actor = Actor("Test User", "test@example.com")

    def commit(self, files: dict[str, str | None], message: str = "change") -> str:
        """Write (or delete, for None) files and commit them; returns the hash."""
        for rel_path, content in files.items():
            if content is None:
                self.repo.index.remove([rel_path], working_tree=True)
                continue
            target = self.path / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
            self.repo.index.add([rel_path])
        commit = self.repo.index.commit(message, author=self.actor, committer=self.actor)
        return commit.hexsha


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """An empty git repository in a temporary directory."""
    builder = RepoBuilder(tmp_path / "repo")
    yield builder
    builder.repo.close()
