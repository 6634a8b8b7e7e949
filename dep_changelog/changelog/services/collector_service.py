"""Service for collecting the changes of one module."""

import logging
import re
from pathlib import Path

from dep_changelog.changelog.domain.value_objects import (
    ChangeEntry,
    ModuleChangelog,
    ModuleFailure,
    ModuleResult,
)
from dep_changelog.errors import FetchError, GitCommandError
from dep_changelog.git.domain.entities import Commit
from dep_changelog.git.domain.value_objects import CommitStatRecord, ModuleSource
from dep_changelog.git.services.git_service import GitService
from dep_changelog.git.services.identity_service import IdentityService
from dep_changelog.git.services.module_source_service import ModuleSourceService
from dep_changelog.modules.domain.value_objects import DependencyDelta

logger = logging.getLogger(__name__)

PULL_REQUEST_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\(#(?P<number>\d+)\)"),
    re.compile(r"Merge pull request #(?P<number>\d+) from"),
)
MERGE_PULL_REQUEST = PULL_REQUEST_PATTERNS[1]


def find_pull_request(subject: str) -> int | None:
    """Return the pull request number referenced by a commit subject, if any."""
    for pattern in PULL_REQUEST_PATTERNS:
        match = pattern.search(subject)
        if match:
            return int(match.group("number"))
    return None


def describe(commit: Commit) -> str:
    """Title of a commit, using the pull request title for merge commits."""
    merge = MERGE_PULL_REQUEST.match(commit.subject)
    if merge:
        for line in commit.body.splitlines():
            if line.strip():
                return f"{line.strip()} (#{merge.group('number')})"
    return commit.subject


class CollectorService:
    """Collect changelog entries and stat records for modules."""

    def __init__(
        self,
        git_service: GitService,
        identity_service: IdentityService,
        module_source_service: ModuleSourceService | None = None,
    ) -> None:
        """
        Initialize CollectorService.

        Args:
            git_service: Service for fetching repositories and listing commits
            identity_service: Service attributing commits to canonical authors
            module_source_service: Service locating module repositories
        """
        self._git_service = git_service
        self._identity_service = identity_service
        self._module_source_service = module_source_service or ModuleSourceService()

    def collect_root(
        self, repo_path: Path, module_path: str, start_ref: str, end_ref: str
    ) -> ModuleChangelog:
        """
        Collect the changes of the root module from its local repository.

        Args:
            repo_path: Path to the root module's git repository
            module_path: Module path of the root module
            start_ref: Older reference
            end_ref: Newer reference

        Returns:
            ModuleChangelog of the root module
        """
        source = self._module_source_service.locate(module_path)
        commits = self._git_service.list_commits_between(repo_path, start_ref, end_ref)
        return self._build_changelog(
            module_path, repo_path, source, start_ref, end_ref, start_ref, end_ref, commits
        )

    def collect(self, delta: DependencyDelta) -> ModuleResult:
        """
        Collect the changes of one dependency between its old and new reference.

        Fetch and log failures are returned as a ModuleFailure instead of raised.
        A dependency replaced by a fork is read from the fork's repository.

        Args:
            delta: Version change of the dependency

        Returns:
            ModuleChangelog on success, ModuleFailure if the repository or a
            reference could not be fetched, or its log could not be read

        Raises:
            UnknownStatEventError: If git reports an unknown diffstat label
        """
        source = self._module_source_service.locate(delta.source_path or delta.path)
        old_ref = self._module_source_service.qualify_ref(source, delta.old_ref)
        new_ref = self._module_source_service.qualify_ref(source, delta.new_ref)

        try:
            repo_path = self._git_service.ensure_refs(source, (old_ref, new_ref))
            commits = self._git_service.list_commits_between(
                repo_path, old_ref, new_ref, subdirectory=source.subdirectory
            )
        except (FetchError, GitCommandError) as e:
            logger.warning("Skipping changes of %s: %s", delta.path, e)
            return ModuleFailure(
                path=delta.path,
                old_version=delta.old_version,
                new_version=delta.new_version,
                reason=str(e),
            )

        return self._build_changelog(
            delta.path,
            repo_path,
            source,
            delta.old_version,
            delta.new_version,
            old_ref,
            new_ref,
            commits,
        )

    def _build_changelog(
        self,
        path: str,
        repo_path: Path,
        source: ModuleSource,
        old_version: str,
        new_version: str,
        old_ref: str,
        new_ref: str,
        commits: tuple[Commit, ...],
    ) -> ModuleChangelog:
        entries: list[ChangeEntry] = []
        stats: list[CommitStatRecord] = []
        for commit in commits:
            number = find_pull_request(commit.subject)
            url = None
            if number is not None and source.web_url:
                url = f"{source.web_url}/pull/{number}"
            entries.append(
                ChangeEntry(
                    commit_hash=commit.hash,
                    subject=describe(commit),
                    pull_request=number,
                    pull_request_url=url,
                )
            )
            stats.extend(self._identity_service.stat_records(repo_path, commit))

        logger.info("Collected %d commits for %s", len(entries), path)
        return ModuleChangelog(
            path=path,
            old_version=old_version,
            new_version=new_version,
            old_ref=old_ref,
            new_ref=new_ref,
            entries=tuple(entries),
            stats=tuple(stats),
        )
