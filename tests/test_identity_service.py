"""Unit tests for attributing commits to canonical identities."""

from __future__ import annotations

from pathlib import Path

from conftest import FakeGitRepository, make_commit

from dep_changelog.git.services.identity_service import IdentityService


def test_commit_without_co_authors_gives_one_record(fake_git: FakeGitRepository) -> None:
    """The author receives the whole diffstat."""
    commit = make_commit("aaa", "Ann Lee", insertions=4, deletions=2, files=3)

    records = IdentityService(fake_git).stat_records(Path("/repo"), commit)

    assert len(records) == 1
    assert records[0].commit_hash == "aaa"
    assert records[0].author_name == "Ann Lee"
    assert (records[0].files_changed, records[0].insertions, records[0].deletions) == (3, 4, 2)


def test_co_authors_fan_out_after_mailmap(fake_git: FakeGitRepository) -> None:
    """Each distinct normalized name gets its own record with the full stat."""
    fake_git.mailmap["bobby <bob@old.example.com>"] = "Bob Ray <bob@example.com>"
    commit = make_commit(
        "aaa",
        "Ann Lee",
        insertions=10,
        co_authors=("bobby <bob@old.example.com>", "Ann Lee <ann@example.com>"),
    )

    records = IdentityService(fake_git).stat_records(Path("/repo"), commit)

    assert [(r.author_name, r.author_email) for r in records] == [
        ("Ann Lee", "ann.lee@example.com"),
        ("Bob Ray", "bob@example.com"),
    ]
    assert all(r.insertions == 10 for r in records)


def test_normalize_keeps_identities_without_email(fake_git: FakeGitRepository) -> None:
    """Trailers that are not "Name <email>" are used as the name."""
    service = IdentityService(fake_git)

    assert service.normalize(Path("/repo"), " The Team ") == ("The Team", "")


def test_normalize_caches_lookups(fake_git: FakeGitRepository) -> None:
    """Mailmap lookups happen once per repository and identity."""
    calls: list[str] = []
    original = fake_git.check_mailmap

    def counting_check(repo_path: Path, identity: str) -> str:
        calls.append(identity)
        return original(repo_path, identity)

    fake_git.check_mailmap = counting_check  # type: ignore[method-assign]
    service = IdentityService(fake_git)

    service.normalize(Path("/repo"), "Cid Poe <cid@example.com>")
    service.normalize(Path("/repo"), "Cid Poe <cid@example.com>")

    assert calls == ["Cid Poe <cid@example.com>"]
