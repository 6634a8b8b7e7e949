"""Value objects for the changelog domain."""

from dataclasses import dataclass

from dep_changelog.contributions.domain.value_objects import AuthorSummary
from dep_changelog.git.domain.value_objects import CommitStatRecord
from dep_changelog.modules.domain.value_objects import UnresolvedDependency


@dataclass(frozen=True)
class ChangeEntry:
    """One line of a module changelog."""

    commit_hash: str
    subject: str
    pull_request: int | None = None
    pull_request_url: str | None = None


@dataclass(frozen=True)
class ModuleChangelog:
    """Changes collected for one module between two references."""

    path: str
    old_version: str
    new_version: str
    old_ref: str
    new_ref: str
    entries: tuple[ChangeEntry, ...] = ()
    stats: tuple[CommitStatRecord, ...] = ()


@dataclass(frozen=True)
class ModuleFailure:
    """A module whose changes could not be collected."""

    path: str
    old_version: str
    new_version: str
    reason: str


ModuleResult = ModuleChangelog | ModuleFailure


@dataclass(frozen=True)
class ChangelogReport:
    """Everything rendered into one changelog.

    Attributes:
        start_ref: Older reference of the root module
        end_ref: Newer reference of the root module
        root: Changes of the root module itself
        modules: Per-dependency results, in path order
        skipped: Dependencies whose versions could not be resolved
        contributors: Author summaries over the root module and all dependencies
    """

    start_ref: str
    end_ref: str
    root: ModuleChangelog
    modules: tuple[ModuleResult, ...] = ()
    skipped: tuple[UnresolvedDependency, ...] = ()
    contributors: tuple[AuthorSummary, ...] = ()

    @property
    def failed_modules(self) -> tuple[ModuleFailure, ...]:
        """Dependencies whose changes could not be collected."""
        return tuple(m for m in self.modules if isinstance(m, ModuleFailure))
