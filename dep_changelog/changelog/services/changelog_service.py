"""Changelog service orchestrating one changelog run."""

import logging
from collections.abc import Mapping
from pathlib import Path

from dep_changelog.changelog.domain.value_objects import (
    ChangelogReport,
    ModuleChangelog,
    ModuleResult,
)
from dep_changelog.changelog.services.collector_service import CollectorService
from dep_changelog.contributions.services.contribution_service import ContributionService
from dep_changelog.errors import UnresolvableVersionError
from dep_changelog.git.domain.value_objects import CommitStatRecord
from dep_changelog.modules.domain.value_objects import (
    DependencyRecord,
    ResolvedDependencyRecord,
    UnresolvedDependency,
)
from dep_changelog.modules.repositories.interfaces import ManifestRepository
from dep_changelog.modules.services.dependency_diff_service import DependencyDiffService
from dep_changelog.modules.services.module_filter_service import ModuleFilterService
from dep_changelog.modules.services.version_resolver import VersionResolver

logger = logging.getLogger(__name__)


class ChangelogService:
    """Service running the snapshot, resolve, diff, filter, collect, aggregate pipeline."""

    def __init__(
        self,
        manifest_repository: ManifestRepository,
        collector_service: CollectorService,
        module_filter_service: ModuleFilterService | None = None,
        version_resolver: VersionResolver | None = None,
        dependency_diff_service: DependencyDiffService | None = None,
        contribution_service: ContributionService | None = None,
    ) -> None:
        """
        Initialize ChangelogService.

        Args:
            manifest_repository: Repository reading dependency manifests
            collector_service: Service collecting changes of each module
            module_filter_service: Filter for reported dependencies. Defaults to
                reporting every dependency
            version_resolver: Resolver from versions to git references
            dependency_diff_service: Service diffing two snapshots
            contribution_service: Service aggregating author statistics
        """
        self._manifest_repository = manifest_repository
        self._collector_service = collector_service
        self._module_filter_service = module_filter_service or ModuleFilterService()
        self._version_resolver = version_resolver or VersionResolver()
        self._dependency_diff_service = dependency_diff_service or DependencyDiffService()
        self._contribution_service = contribution_service or ContributionService()

    def generate(self, repo_path: Path, start_ref: str, end_ref: str) -> ChangelogReport:
        """
        Build the changelog of a module and its dependencies between two references.

        Args:
            repo_path: Path to the root module's git repository
            start_ref: Older reference
            end_ref: Newer reference

        Returns:
            ChangelogReport with per-module results and contributor totals

        Raises:
            MalformedManifestError: If a manifest entry is incomplete
            UnknownStatEventError: If git reports an unknown diffstat label
        """
        old_snapshot = self._manifest_repository.read_snapshot(repo_path, start_ref)
        new_snapshot = self._manifest_repository.read_snapshot(repo_path, end_ref)

        old_resolved, old_skipped = self._resolve(old_snapshot.dependencies)
        new_resolved, new_skipped = self._resolve(new_snapshot.dependencies)

        unresolvable = {u.path for u in old_skipped + new_skipped}
        old_resolved = {p: r for p, r in old_resolved.items() if p not in unresolvable}
        new_resolved = {p: r for p, r in new_resolved.items() if p not in unresolvable}

        deltas = sorted(
            self._dependency_diff_service.diff(old_resolved, new_resolved),
            key=lambda delta: delta.path,
        )
        in_scope = [d for d in deltas if self._module_filter_service.is_in_scope(d.path)]
        logger.info(
            "%d dependencies changed, %d in scope", len(deltas), len(in_scope)
        )

        root = self._collector_service.collect_root(
            repo_path, new_snapshot.main_path, start_ref, end_ref
        )

        modules: list[ModuleResult] = []
        stats: tuple[CommitStatRecord, ...] = root.stats
        for delta in in_scope:
            result = self._collector_service.collect(delta)
            modules.append(result)
            if isinstance(result, ModuleChangelog):
                stats = stats + result.stats

        return ChangelogReport(
            start_ref=start_ref,
            end_ref=end_ref,
            root=root,
            modules=tuple(modules),
            skipped=self._unique(old_skipped + new_skipped),
            contributors=self._contribution_service.aggregate(stats),
        )

    @staticmethod
    def _unique(skipped: list[UnresolvedDependency]) -> tuple[UnresolvedDependency, ...]:
        unique: dict[tuple[str, str], UnresolvedDependency] = {}
        for item in skipped:
            unique.setdefault((item.path, item.version), item)
        return tuple(unique.values())

    def _resolve(
        self, dependencies: Mapping[str, DependencyRecord]
    ) -> tuple[dict[str, ResolvedDependencyRecord], list[UnresolvedDependency]]:
        resolved: dict[str, ResolvedDependencyRecord] = {}
        skipped: list[UnresolvedDependency] = []
        for path, record in dependencies.items():
            try:
                resolved[path] = self._version_resolver.resolve(record)
            except UnresolvableVersionError as e:
                logger.warning("Skipping %s: %s", path, e)
                skipped.append(
                    UnresolvedDependency(path=path, version=record.version, reason=str(e))
                )
        return resolved, skipped
