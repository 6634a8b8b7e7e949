"""Git service for coordinating Git operations."""

import logging
from pathlib import Path

from dep_changelog.errors import FetchError, GitCommandError
from dep_changelog.git.domain.entities import Commit
from dep_changelog.git.domain.value_objects import CommitRange, ModuleSource
from dep_changelog.git.repositories.interfaces import GitRepository

logger = logging.getLogger(__name__)


class GitService:
    """Service for Git operations."""

    def __init__(
        self,
        git_repository: GitRepository,
        cache_dir: Path,
        ignore_paths: tuple[str, ...] = (),
    ) -> None:
        """
        Initialize GitService.

        Args:
            git_repository: Repository implementation for Git operations
            cache_dir: Directory holding clones of dependency repositories
            ignore_paths: Pathspecs excluded from diffstat counts
        """
        self._git_repository = git_repository
        self._cache_dir = cache_dir
        self._ignore_paths = ignore_paths

    def list_commits_between(
        self,
        repo_path: Path,
        ref_a: str,
        ref_b: str,
        subdirectory: str | None = None,
    ) -> tuple[Commit, ...]:
        """
        List commits between two references.

        Args:
            repo_path: Path to the git repository
            ref_a: Older reference
            ref_b: Newer reference
            subdirectory: Restrict the log to this directory, if set

        Returns:
            Tuple of commits ordered from newest to oldest
        """
        commit_range = CommitRange(
            repo_path=repo_path,
            ref_a=ref_a,
            ref_b=ref_b,
            subdirectory=subdirectory,
            ignore_paths=self._ignore_paths,
        )
        return self._git_repository.list_commits(commit_range)

    def clone_path(self, source: ModuleSource) -> Path:
        """Local directory where the repository of a module is cached."""
        return self._cache_dir / source.cache_key

    def ensure_refs(self, source: ModuleSource, refs: tuple[str, ...]) -> Path:
        """
        Make references of a module's repository available locally.

        Clones the repository if it is not cached yet and fetches when a
        reference is missing. No retries are made.

        Args:
            source: Location of the module
            refs: References that must resolve to commits

        Returns:
            Path to the local clone

        Raises:
            FetchError: If the repository or a reference cannot be made available
        """
        repo_path = self.clone_path(source)
        try:
            if not (repo_path / "HEAD").exists() and not (repo_path / ".git").exists():
                logger.info("Cloning %s into %s", source.clone_url, repo_path)
                self._git_repository.clone(source.clone_url, repo_path)

            missing = [ref for ref in refs if not self._git_repository.has_commit(repo_path, ref)]
            if missing:
                logger.info("Fetching %s for %s", ", ".join(missing), source.module_path)
                self._git_repository.fetch(repo_path)
        except GitCommandError as e:
            raise FetchError(f"Failed to fetch {source.clone_url}: {e}") from e

        for ref in refs:
            if not self._git_repository.has_commit(repo_path, ref):
                raise FetchError(f"Reference {ref} not found in {source.clone_url}")

        return repo_path

    def default_start_ref(self, repo_path: Path) -> str:
        """Most recent tag on HEAD that is not a release candidate."""
        return self._git_repository.latest_release_tag(repo_path)
