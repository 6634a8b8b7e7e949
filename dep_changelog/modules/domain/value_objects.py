"""Value objects for the dependency module domain."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class RefKind(str, Enum):
    """How a git reference was derived from a module version."""

    INCOMPATIBLE = "incompatible"
    PSEUDO_VERSION = "pseudo_version"
    TAG = "tag"


@dataclass(frozen=True)
class DependencyRecord:
    """A module path pinned to a version in a manifest.

    Attributes:
        path: Module path as required by the main module
        version: Pinned version
        source_path: Module path of a replacement fork, if the version comes from one
    """

    path: str
    version: str
    source_path: str | None = None


@dataclass(frozen=True)
class ResolvedDependencyRecord:
    """A dependency record annotated with the git reference of its version."""

    path: str
    version: str
    ref: str
    ref_kind: RefKind
    source_path: str | None = None


@dataclass(frozen=True)
class UnresolvedDependency:
    """A dependency whose version could not be resolved to a reference."""

    path: str
    version: str
    reason: str


@dataclass(frozen=True)
class ManifestSnapshot:
    """Dependency manifest of the main module at one point in history.

    Attributes:
        main_path: Module path of the main module
        dependencies: Mapping of module path to its pinned record
    """

    main_path: str
    dependencies: Mapping[str, DependencyRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class DependencyDelta:
    """A version change of one dependency between two snapshots."""

    path: str
    old_version: str
    new_version: str
    old_ref: str
    new_ref: str
    source_path: str | None = None
