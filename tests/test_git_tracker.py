"""Tests for git-backed snapshots and commit resolution."""

import base64
from collections import defaultdict
from pathlib import Path

import pytest

from goimpact.analysis.impact_analyzer import analyze_repository
from goimpact.core.config import ImpactConfig
from goimpact.core.exceptions import CommitNotFoundError, RepositoryError
from goimpact.tracking.git_tracker import Credentials, GitTracker
from goimpact.tracking.snapshot import MemorySnapshot

from conftest import GO_MOD, GO_SUM_OLD, NAMESPACE, go_source


@pytest.fixture
def two_commits(repo_builder):
    """A repository with a base commit and one that edits pkg/x."""
    first = repo_builder.commit(
        {
            "go.mod": GO_MOD,
            "go.sum": GO_SUM_OLD,
            "pkg/x/x.go": go_source("x"),
            "pkg/y/y.go": go_source("y", [f"{NAMESPACE}/pkg/x"]),
        },
        "initial",
    )
    second = repo_builder.commit({"pkg/x/x.go": go_source("x", body="2")}, "edit x")
    return repo_builder, first, second


class TestOpen:
    """Tests for opening repositories."""

    def test_open_directory(self, two_commits):
        builder, first, _ = two_commits
        with GitTracker.open(str(builder.path)) as tracker:
            assert tracker.resolve_commit(first).hexsha == first

    def test_open_file_url(self, two_commits):
        builder, first, _ = two_commits
        with GitTracker.open(f"file://{builder.path}") as tracker:
            assert tracker.resolve_commit(first).hexsha == first

    def test_not_a_repository(self, tmp_path: Path):
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(RepositoryError):
            GitTracker.open(f"file://{plain}")

    def test_clone_failure(self, tmp_path: Path):
        with pytest.raises(RepositoryError):
            GitTracker.open(str(tmp_path / "missing.git"))


class TestResolveCommit:
    """Tests for locating commits by reference."""

    def test_full_and_abbreviated_hash(self, two_commits):
        builder, first, second = two_commits
        tracker = GitTracker(builder.repo)
        assert tracker.resolve_commit(second).hexsha == second
        assert tracker.resolve_commit(first[:7]).hexsha == first
        assert tracker.resolve_commit(first[:7].upper()).hexsha == first

    def test_branch_name(self, two_commits):
        builder, _, second = two_commits
        branch = builder.repo.active_branch.name
        assert GitTracker(builder.repo).resolve_commit(branch).hexsha == second

    @pytest.mark.parametrize("ref", ["no-such-branch", "deadbeef" * 5, ""])
    def test_not_found(self, two_commits, ref: str):
        builder, _, _ = two_commits
        with pytest.raises(CommitNotFoundError):
            GitTracker(builder.repo).resolve_commit(ref)

    def test_ambiguous_prefix(self, repo_builder):
        by_prefix: dict[str, list[str]] = defaultdict(list)
        # 17 commits guarantee two share a first hex digit
        for i in range(17):
            sha = repo_builder.commit({"f.txt": f"{i}\n"}, f"commit {i}")
            by_prefix[sha[0]].append(sha)
        prefix, shas = next((p, s) for p, s in by_prefix.items() if len(s) > 1)

        with pytest.raises(CommitNotFoundError) as exc_info:
            GitTracker(repo_builder.repo, ambiguous_prefix="error").resolve_commit(prefix)
        assert "ambiguous" in str(exc_info.value)

        picked = GitTracker(repo_builder.repo, ambiguous_prefix="first").resolve_commit(prefix)
        assert picked.hexsha in shas

        # Only "first" relaxes the check
        with pytest.raises(CommitNotFoundError):
            GitTracker(repo_builder.repo, ambiguous_prefix="sometimes").resolve_commit(prefix)


class TestGitSnapshot:
    """Tests for reading trees from commits."""

    def test_paths_and_content(self, two_commits):
        builder, first, _ = two_commits
        snapshot = GitTracker(builder.repo).snapshot(first)
        assert snapshot.paths() == ["go.mod", "go.sum", "pkg/x/x.go", "pkg/y/y.go"]
        assert snapshot.read_text("go.mod") == GO_MOD
        assert snapshot.exists("pkg/x/x.go")
        assert not snapshot.exists("pkg/z/z.go")
        assert snapshot.commit_id == first

    def test_fingerprint_matches_memory_snapshot(self, two_commits):
        builder, first, _ = two_commits
        snapshot = GitTracker(builder.repo).snapshot(first)
        memory = MemorySnapshot({"go.mod": GO_MOD})
        assert snapshot.fingerprint("go.mod") == memory.fingerprint("go.mod")


def test_analyze_repository(two_commits):
    builder, first, second = two_commits
    result = analyze_repository(
        f"file://{builder.path}", first[:8], second, config=ImpactConfig(), explain=True
    )
    assert result.package_ids == [f"{NAMESPACE}/pkg/x", f"{NAMESPACE}/pkg/y"]
    assert result.packages[1].causes[0].file == "pkg/y/y.go"
    assert result.from_commit == first


class TestCredentials:
    """Tests for clone authentication."""

    def test_no_credentials(self):
        assert Credentials().git_env() == {}
        assert Credentials(user="only-user").auth_header() is None

    def test_token_takes_precedence(self):
        creds = Credentials(user="u", password="p", token="tok")
        assert creds.git_env() == {
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": "http.extraHeader",
            "GIT_CONFIG_VALUE_0": "Authorization: Bearer tok",
        }

    def test_basic_auth(self):
        header = Credentials(user="u", password="p").auth_header()
        assert header == "Authorization: Basic " + base64.b64encode(b"u:p").decode()
