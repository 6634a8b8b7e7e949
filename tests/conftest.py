"""Shared fakes for changelog tests."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest

from dep_changelog.errors import GitCommandError
from dep_changelog.git.domain.entities import Commit
from dep_changelog.git.domain.value_objects import CommitRange, ShortStat
from dep_changelog.git.repositories.interfaces import GitRepository
from dep_changelog.modules.domain.value_objects import DependencyRecord, ManifestSnapshot
from dep_changelog.modules.repositories.interfaces import ManifestRepository


def run_git(repo: Path, *args: str) -> str:
    """Run git in `repo` with a fixed identity and no user configuration."""
    env = {
        **os.environ,
        "GIT_AUTHOR_NAME": "Ann Lee",
        "GIT_AUTHOR_EMAIL": "ann@example.com",
        "GIT_COMMITTER_NAME": "Ann Lee",
        "GIT_COMMITTER_EMAIL": "ann@example.com",
        "GIT_CONFIG_GLOBAL": os.devnull,
        "GIT_CONFIG_NOSYSTEM": "1",
    }
    result = subprocess.run(
        ["git", *args], cwd=repo, env=env, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def make_commit(
    commit_hash: str,
    author: str,
    subject: str = "Change things",
    insertions: int = 1,
    deletions: int = 0,
    files: int = 1,
    co_authors: tuple[str, ...] = (),
) -> Commit:
    """Build a commit authored by `author` with an email derived from the name."""
    return Commit(
        hash=commit_hash,
        author_name=author,
        author_email=f"{author.lower().replace(' ', '.')}@example.com",
        subject=subject,
        stat=ShortStat(files_changed=files, insertions=insertions, deletions=deletions),
        co_authors=co_authors,
    )


class FakeGitRepository(GitRepository):
    """In-memory GitRepository keyed by repository directory name."""

    def __init__(self) -> None:
        self.commits: dict[tuple[str, str, str], tuple[Commit, ...]] = {}
        self.remote_refs: dict[str, set[str]] = {}
        self.local_refs: dict[Path, set[str]] = {}
        self.unreachable: set[str] = set()
        self.mailmap: dict[str, str] = {}
        self.ranges: list[CommitRange] = []
        self.cloned: list[str] = []
        self.fetched: list[Path] = []
        self.release_tag = "v1.0.0"
        self._origins: dict[Path, str] = {}

    def list_commits(self, commit_range: CommitRange) -> tuple[Commit, ...]:
        self.ranges.append(commit_range)
        key = (commit_range.repo_path.name, commit_range.ref_a, commit_range.ref_b)
        return self.commits.get(key, ())

    def clone(self, url: str, destination: Path) -> None:
        if url in self.unreachable:
            raise GitCommandError(["git", "clone", url], "repository not found")
        self.cloned.append(url)
        destination.mkdir(parents=True, exist_ok=True)
        (destination / ".git").mkdir(exist_ok=True)
        self._origins[destination] = url
        self.local_refs[destination] = set()

    def fetch(self, repo_path: Path) -> None:
        self.fetched.append(repo_path)
        url = self._origins[repo_path]
        self.local_refs[repo_path] |= self.remote_refs.get(url, set())

    def has_commit(self, repo_path: Path, ref: str) -> bool:
        return ref in self.local_refs.get(repo_path, set())

    def latest_release_tag(self, repo_path: Path) -> str:
        return self.release_tag

    def check_mailmap(self, repo_path: Path, identity: str) -> str:
        return self.mailmap.get(identity, identity)


class FakeManifestRepository(ManifestRepository):
    """ManifestRepository returning prepared snapshots per reference."""

    def __init__(self, main_path: str, snapshots: dict[str, dict[str, str]]) -> None:
        self.main_path = main_path
        self.snapshots = snapshots

    def read_snapshot(self, repo_path: Path, ref: str) -> ManifestSnapshot:
        return ManifestSnapshot(
            main_path=self.main_path,
            dependencies={
                path: DependencyRecord(path=path, version=version)
                for path, version in self.snapshots[ref].items()
            },
        )


@pytest.fixture
def fake_git() -> FakeGitRepository:
    """Empty in-memory git repository fake."""
    return FakeGitRepository()
