"""Derive git references from module version strings."""

import re
from dataclasses import dataclass

from dep_changelog.errors import UnresolvableVersionError
from dep_changelog.modules.domain.value_objects import (
    DependencyRecord,
    RefKind,
    ResolvedDependencyRecord,
)


@dataclass(frozen=True)
class _ReferenceRule:
    kind: RefKind
    pattern: re.Pattern[str]
    group: str


class VersionResolver:
    """Resolve versions into git references using rules tried in priority order."""

    RULES: tuple[_ReferenceRule, ...] = (
        _ReferenceRule(
            kind=RefKind.INCOMPATIBLE,
            pattern=re.compile(r"^(?P<ref>.*)\+incompatible$"),
            group="ref",
        ),
        _ReferenceRule(
            kind=RefKind.PSEUDO_VERSION,
            pattern=re.compile(
                r"^v\d+\.\d+\.\d+-(?:0\.)?\d{14}-(?P<ref>[0-9a-f]{12})$"
            ),
            group="ref",
        ),
        _ReferenceRule(
            kind=RefKind.TAG,
            pattern=re.compile(r"^(?P<ref>v.*)$"),
            group="ref",
        ),
    )

    def resolve_ref(self, version: str) -> tuple[str, RefKind]:
        """
        Resolve a version string into a git reference.

        Args:
            version: Module version, e.g. v1.2.3 or a pseudo-version

        Returns:
            Tuple of (reference, kind of rule that matched)

        Raises:
            UnresolvableVersionError: If no rule matches the version
        """
        for rule in self.RULES:
            match = rule.pattern.match(version)
            if match:
                return match.group(rule.group), rule.kind
        raise UnresolvableVersionError(version)

    def resolve(self, record: DependencyRecord) -> ResolvedDependencyRecord:
        """Annotate a dependency record with its git reference."""
        ref, kind = self.resolve_ref(record.version)
        return ResolvedDependencyRecord(
            path=record.path,
            version=record.version,
            ref=ref,
            ref_kind=kind,
            source_path=record.source_path,
        )
