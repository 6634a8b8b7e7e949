"""Service for normalizing commit identities through the mailmap."""

import re
from pathlib import Path

from dep_changelog.git.domain.entities import Commit
from dep_changelog.git.domain.value_objects import CommitStatRecord
from dep_changelog.git.repositories.interfaces import GitRepository

_IDENTITY = re.compile(r"^(?P<name>[^<>]+?)\s*<(?P<email>[^<>]*)>$")


class IdentityService:
    """Turn commits into per-identity stat records using canonical names."""

    def __init__(self, git_repository: GitRepository) -> None:
        """
        Initialize IdentityService.

        Args:
            git_repository: Repository implementation used for mailmap lookups
        """
        self._git_repository = git_repository
        self._cache: dict[tuple[Path, str], tuple[str, str]] = {}

    def normalize(self, repo_path: Path, identity: str) -> tuple[str, str]:
        """
        Map a "Name <email>" identity to its canonical (name, email).

        Identities that are not in "Name <email>" form are returned as the name
        with an empty email.

        Args:
            repo_path: Repository whose mailmap applies
            identity: Raw identity string

        Returns:
            Tuple of (name, email)
        """
        key = (repo_path, identity)
        if key in self._cache:
            return self._cache[key]

        match = _IDENTITY.match(identity.strip())
        if not match:
            result = (identity.strip(), "")
        else:
            canonical = self._git_repository.check_mailmap(repo_path, identity.strip())
            canonical_match = _IDENTITY.match(canonical)
            if canonical_match:
                result = (canonical_match.group("name"), canonical_match.group("email"))
            else:
                result = (match.group("name"), match.group("email"))

        self._cache[key] = result
        return result

    def stat_records(self, repo_path: Path, commit: Commit) -> tuple[CommitStatRecord, ...]:
        """
        Attribute a commit's diffstat to every distinct identity on it.

        The author comes first, followed by co-authors in trailer order. Each
        distinct name gets its own record carrying the full diffstat.

        Args:
            repo_path: Repository the commit belongs to
            commit: Commit to attribute

        Returns:
            Tuple of stat records, one per distinct author name
        """
        identities = [(commit.author_name, commit.author_email)]
        identities += [self.normalize(repo_path, value) for value in commit.co_authors]

        records: list[CommitStatRecord] = []
        seen: set[str] = set()
        for name, email in identities:
            if name in seen:
                continue
            seen.add(name)
            records.append(
                CommitStatRecord(
                    commit_hash=commit.hash,
                    author_name=name,
                    author_email=email,
                    files_changed=commit.stat.files_changed,
                    insertions=commit.stat.insertions,
                    deletions=commit.stat.deletions,
                )
            )
        return tuple(records)
