"""Concrete implementation of Git repository operations."""

import re
from dataclasses import replace
from pathlib import Path

from dep_changelog.command import DEFAULT_TIMEOUT, run_command
from dep_changelog.errors import GitCommandError, UnknownStatEventError
from dep_changelog.git.domain.entities import Commit
from dep_changelog.git.domain.value_objects import CommitRange, ShortStat
from dep_changelog.git.repositories.interfaces import GitRepository

RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x1f"
TRAILER_SEPARATOR = "\x1d"
BRANCH_REFSPEC = "+refs/heads/*:refs/heads/*"

LOG_FORMAT = (
    "%x1e%H%x1f%aN%x1f%aE%x1f%s%x1f%b%x1f"
    "%(trailers:key=Co-authored-by,valueonly,separator=%x1d)"
)

_STAT_PART = re.compile(r"^(?P<count>\d+) (?P<label>.+)$")


class GitRepositoryImpl(GitRepository):
    """Concrete implementation of Git repository operations using git commands."""

    STAT_LABELS: dict[str, str] = {
        "file changed": "files_changed",
        "files changed": "files_changed",
        "insertion(+)": "insertions",
        "insertions(+)": "insertions",
        "deletion(-)": "deletions",
        "deletions(-)": "deletions",
    }

    def __init__(
        self,
        mailmap_file: Path | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize GitRepositoryImpl.

        Args:
            mailmap_file: Extra mailmap applied to author identities
            timeout: Seconds allowed for each git command
        """
        self._mailmap_file = mailmap_file
        self._timeout = timeout

    def _git(self, args: list[str], cwd: Path | None = None) -> str:
        command = ["git"]
        if self._mailmap_file is not None:
            command += ["-c", f"mailmap.file={self._mailmap_file}"]
        return run_command(command + args, cwd=cwd, timeout=self._timeout)

    def list_commits(self, commit_range: CommitRange) -> tuple[Commit, ...]:
        """
        List commits between two references with their diffstat.

        Args:
            commit_range: Range of commits to retrieve

        Returns:
            Tuple of commits ordered from newest to oldest

        Raises:
            UnknownStatEventError: If git reports an unknown diffstat label
            GitCommandError: If git log fails
        """
        revision_range = f"{commit_range.ref_a}..{commit_range.ref_b}"
        module_pathspec = commit_range.subdirectory or "."

        # Ignored paths only change the counts; commits touching nothing else
        # are still listed.
        log_output = self._git(
            ["log", f"--format={LOG_FORMAT}", revision_range, "--", module_pathspec],
            cwd=commit_range.repo_path,
        )
        stat_pathspecs = [module_pathspec]
        stat_pathspecs += [f":(exclude){path}" for path in commit_range.ignore_paths]
        stat_output = self._git(
            ["log", "--format=%x1e%H", "--shortstat", revision_range, "--", *stat_pathspecs],
            cwd=commit_range.repo_path,
        )

        stats = self.parse_stats(stat_output)
        return tuple(
            replace(commit, stat=stats.get(commit.hash, ShortStat()))
            for commit in self.parse_log(log_output)
        )

    @staticmethod
    def parse_log(output: str) -> tuple[Commit, ...]:
        """
        Parse the output of `git log` produced with LOG_FORMAT.

        Args:
            output: Raw git log output

        Returns:
            Tuple of commits in output order, without diffstat

        Raises:
            ValueError: If a record does not have the expected fields
        """
        commits: list[Commit] = []
        for record in output.split(RECORD_SEPARATOR):
            if not record.strip():
                continue
            parts = record.split(FIELD_SEPARATOR, 5)
            if len(parts) != 6:
                raise ValueError(f"Invalid commit format: {record.strip()!r}")
            commit_hash, author_name, author_email, subject, body, trailers = parts

            co_authors = tuple(
                value.strip()
                for value in trailers.split(TRAILER_SEPARATOR)
                if value.strip()
            )
            commits.append(
                Commit(
                    hash=commit_hash,
                    author_name=author_name,
                    author_email=author_email,
                    subject=subject,
                    co_authors=co_authors,
                    body=body.strip(),
                )
            )
        return tuple(commits)

    @classmethod
    def parse_stats(cls, output: str) -> dict[str, ShortStat]:
        """
        Parse `git log --format=%x1e%H --shortstat` output into stats per commit.

        Commits without a shortstat line (merges, or only ignored paths
        touched) are absent from the result.

        Args:
            output: Raw git log output

        Returns:
            Mapping of commit hash to its diffstat

        Raises:
            UnknownStatEventError: If a diffstat label is not recognized
        """
        stats: dict[str, ShortStat] = {}
        for record in output.split(RECORD_SEPARATOR):
            if not record.strip():
                continue
            commit_hash, _, rest = record.partition("\n")
            for line in rest.splitlines():
                if line.strip():
                    stats[commit_hash.strip()] = cls.parse_shortstat(line)
        return stats

    @classmethod
    def parse_shortstat(cls, line: str) -> ShortStat:
        """
        Parse a line like " 3 files changed, 10 insertions(+), 2 deletions(-)".

        Args:
            line: Shortstat line

        Returns:
            ShortStat with the counts found in the line

        Raises:
            UnknownStatEventError: If a label is not recognized
        """
        counts = {"files_changed": 0, "insertions": 0, "deletions": 0}
        for part in line.split(","):
            match = _STAT_PART.match(part.strip())
            if not match:
                raise UnknownStatEventError(part.strip(), line)
            field_name = cls.STAT_LABELS.get(match.group("label"))
            if field_name is None:
                raise UnknownStatEventError(match.group("label"), line)
            counts[field_name] += int(match.group("count"))
        return ShortStat(**counts)

    def clone(self, url: str, destination: Path) -> None:
        """
        Clone a repository as a bare cache.

        git reads the mailmap of a bare repository from `HEAD:.mailmap`, so the
        identities of the cached module follow its own mailmap.
        """
        destination.parent.mkdir(parents=True, exist_ok=True)
        self._git(["clone", "--quiet", "--bare", url, str(destination)])

    def fetch(self, repo_path: Path) -> None:
        # Bare clones have no fetch refspec configured.
        self._git(
            ["fetch", "--quiet", "--tags", "--force", "origin", BRANCH_REFSPEC],
            cwd=repo_path,
        )

    def has_commit(self, repo_path: Path, ref: str) -> bool:
        try:
            self._git(
                ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
                cwd=repo_path,
            )
        except GitCommandError:
            return False
        return True

    def latest_release_tag(self, repo_path: Path) -> str:
        """
        Get the most recent tag reachable from HEAD that is not a release candidate.

        Raises:
            GitCommandError: If the repository has no such tag
        """
        output = self._git(
            ["describe", "--tags", "--abbrev=0", "--exclude=*-rc*"],
            cwd=repo_path,
        )
        return output.strip()

    def check_mailmap(self, repo_path: Path, identity: str) -> str:
        output = self._git(["check-mailmap", identity], cwd=repo_path)
        return output.strip() or identity
