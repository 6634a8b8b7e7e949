"""Repository interfaces for Git operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from dep_changelog.git.domain.entities import Commit
from dep_changelog.git.domain.value_objects import CommitRange


class GitRepository(ABC):
    """Interface for Git repository operations."""

    @abstractmethod
    def list_commits(self, commit_range: CommitRange) -> tuple[Commit, ...]:
        """
        List commits between two references with their diffstat.

        Args:
            commit_range: Range of commits to retrieve

        Returns:
            Tuple of commits ordered from newest to oldest

        Raises:
            UnknownStatEventError: If git reports an unknown diffstat label
        """
        ...

    @abstractmethod
    def clone(self, url: str, destination: Path) -> None:
        """
        Clone a repository as a bare repository.

        Args:
            url: URL of the repository
            destination: Directory to clone into
        """
        ...

    @abstractmethod
    def fetch(self, repo_path: Path) -> None:
        """
        Fetch all branches and tags from the origin remote.

        Args:
            repo_path: Path to the git repository
        """
        ...

    @abstractmethod
    def has_commit(self, repo_path: Path, ref: str) -> bool:
        """
        Check whether a reference resolves to a commit.

        Args:
            repo_path: Path to the git repository
            ref: Tag, branch or (abbreviated) commit hash

        Returns:
            True if the reference is available locally, False otherwise
        """
        ...

    @abstractmethod
    def latest_release_tag(self, repo_path: Path) -> str:
        """
        Get the most recent tag reachable from HEAD that is not a release candidate.

        Args:
            repo_path: Path to the git repository

        Returns:
            Name of the tag
        """
        ...

    @abstractmethod
    def check_mailmap(self, repo_path: Path, identity: str) -> str:
        """
        Map a "Name <email>" identity through the mailmap.

        Args:
            repo_path: Path to the git repository
            identity: Raw identity string

        Returns:
            Canonical "Name <email>" identity
        """
        ...
