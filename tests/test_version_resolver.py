"""Unit tests for deriving git references from module versions."""

from __future__ import annotations

import pytest

from dep_changelog.errors import UnresolvableVersionError
from dep_changelog.modules.domain.value_objects import DependencyRecord, RefKind
from dep_changelog.modules.services.version_resolver import VersionResolver


@pytest.mark.parametrize(
    ("version", "expected_ref", "expected_kind"),
    [
        pytest.param("v1.2.3", "v1.2.3", RefKind.TAG, id="tag"),
        pytest.param(
            "v0.0.0-20210101000000-abcdef012345",
            "abcdef012345",
            RefKind.PSEUDO_VERSION,
            id="pseudo_version",
        ),
        pytest.param(
            "v1.4.1-0.20210101000000-0123456789ab",
            "0123456789ab",
            RefKind.PSEUDO_VERSION,
            id="pseudo_version_after_release",
        ),
        pytest.param("v2.0.0+incompatible", "v2.0.0", RefKind.INCOMPATIBLE, id="incompatible"),
        pytest.param("v1.0.0-rc.1", "v1.0.0-rc.1", RefKind.TAG, id="prerelease_tag"),
    ],
)
def test_resolve_ref(version: str, expected_ref: str, expected_kind: RefKind) -> None:
    """Each rule maps its version shape to the expected reference."""
    assert VersionResolver().resolve_ref(version) == (expected_ref, expected_kind)


def test_pseudo_version_with_short_hash_is_treated_as_tag() -> None:
    """A pseudo-version shape without a 12 hex digit hash falls through to the tag rule."""
    version = "v0.0.0-20210101000000-abcdef"
    assert VersionResolver().resolve_ref(version) == (version, RefKind.TAG)


@pytest.mark.parametrize("version", ["1.2.3", "", "latest", "master"])
def test_resolve_ref_rejects_unparsable_versions(version: str) -> None:
    """Versions matching no rule raise instead of producing a reference."""
    with pytest.raises(UnresolvableVersionError) as excinfo:
        VersionResolver().resolve_ref(version)
    assert excinfo.value.version == version
    assert repr(version) in str(excinfo.value)


def test_resolve_is_deterministic() -> None:
    """Resolving the same record twice gives equal results."""
    resolver = VersionResolver()
    record = DependencyRecord(path="github.com/a/b", version="v0.0.0-20210101000000-abcdef012345")

    first = resolver.resolve(record)
    second = resolver.resolve(record)

    assert first == second
    assert first.path == "github.com/a/b"
    assert first.version == record.version
    assert first.ref == "abcdef012345"
