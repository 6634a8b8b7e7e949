"""Service for computing dependency version changes between snapshots."""

from collections.abc import Mapping

from dep_changelog.modules.domain.value_objects import (
    DependencyDelta,
    ResolvedDependencyRecord,
)


class DependencyDiffService:
    """Service for diffing two resolved dependency snapshots."""

    def diff(
        self,
        old: Mapping[str, ResolvedDependencyRecord],
        new: Mapping[str, ResolvedDependencyRecord],
    ) -> tuple[DependencyDelta, ...]:
        """
        List dependencies whose version changed.

        Only paths present in both snapshots are compared; added or removed
        dependencies produce no delta.

        Args:
            old: Resolved snapshot at the start reference, keyed by path
            new: Resolved snapshot at the end reference, keyed by path

        Returns:
            Tuple of deltas in the iteration order of the new snapshot
        """
        deltas: list[DependencyDelta] = []
        for path, new_record in new.items():
            old_record = old.get(path)
            if old_record is None or old_record.version == new_record.version:
                continue
            deltas.append(
                DependencyDelta(
                    path=path,
                    old_version=old_record.version,
                    new_version=new_record.version,
                    old_ref=old_record.ref,
                    new_ref=new_record.ref,
                    source_path=new_record.source_path,
                )
            )
        return tuple(deltas)
