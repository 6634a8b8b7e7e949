"""Unit tests for per-author contribution aggregation."""

from __future__ import annotations

from dep_changelog.contributions.services.contribution_service import ContributionService
from dep_changelog.git.domain.value_objects import CommitStatRecord


def _record(author: str, insertions: int, deletions: int, files: int = 1, commit: str = "c") -> CommitStatRecord:
    return CommitStatRecord(
        commit_hash=commit,
        author_name=author,
        author_email=f"{author.lower()}@example.com",
        files_changed=files,
        insertions=insertions,
        deletions=deletions,
    )


def test_groups_and_sorts_by_lines() -> None:
    """X (10+2, 1+1) comes before Y (5+0)."""
    records = [_record("X", 10, 2), _record("X", 1, 1), _record("Y", 5, 0)]

    summaries = ContributionService().aggregate(records)

    assert [(s.author, s.commits, s.lines) for s in summaries] == [("X", 2, 14), ("Y", 1, 5)]
    assert summaries[0].insertions == 11
    assert summaries[0].deletions == 3
    assert summaries[0].files == 2


def test_totals_are_preserved() -> None:
    """Lines and commits over all summaries equal the input totals."""
    records = [
        _record("Ann", 3, 4, files=2),
        _record("Bob", 0, 0, files=0),
        _record("Ann", 7, 1),
        _record("Cid", 12, 30, files=5),
        _record("Bob", 2, 2),
    ]

    summaries = ContributionService().aggregate(records)

    assert sum(s.lines for s in summaries) == sum(r.insertions + r.deletions for r in records)
    assert sum(s.commits for s in summaries) == len(records)
    assert all(a.lines >= b.lines for a, b in zip(summaries, summaries[1:]))


def test_ties_keep_first_seen_order() -> None:
    """Authors with equal totals stay in the order they first appeared."""
    records = [_record("Zed", 1, 1), _record("Amy", 2, 0), _record("Max", 0, 2)]

    summaries = ContributionService().aggregate(records)

    assert [s.author for s in summaries] == ["Zed", "Amy", "Max"]


def test_names_are_compared_exactly() -> None:
    """No case folding or fuzzy matching happens in aggregation."""
    summaries = ContributionService().aggregate([_record("ann", 1, 0), _record("Ann", 1, 0)])

    assert {s.author for s in summaries} == {"ann", "Ann"}


def test_empty_input() -> None:
    """No records means no summaries."""
    assert ContributionService().aggregate([]) == ()
