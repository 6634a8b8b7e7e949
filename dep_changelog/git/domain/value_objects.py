"""Value objects for Git domain."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CommitRange:
    """Range of commits between two references of one repository.

    Attributes:
        repo_path: Path to the git repository
        ref_a: Older reference (excluded from the range)
        ref_b: Newer reference (included in the range)
        subdirectory: Only count commits touching this directory, if set
        ignore_paths: Pathspecs excluded from the diffstat counts
    """

    repo_path: Path
    ref_a: str
    ref_b: str
    subdirectory: str | None = None
    ignore_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class ShortStat:
    """Diffstat totals of one commit."""

    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class CommitStatRecord:
    """Diffstat of one commit attributed to one author identity."""

    commit_hash: str
    author_name: str
    author_email: str
    files_changed: int
    insertions: int
    deletions: int


@dataclass(frozen=True)
class ModuleSource:
    """Where the source of a module lives.

    Attributes:
        module_path: Module path, e.g. github.com/owner/repo/sub/v2
        clone_url: URL to clone the repository from
        web_url: Browsable URL of the repository, used for pull request links
        cache_key: Relative directory of the clone inside the cache
        subdirectory: Directory of the module inside the repository, if any
    """

    module_path: str
    clone_url: str
    web_url: str | None
    cache_key: str
    subdirectory: str | None = None
