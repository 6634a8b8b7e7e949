"""Value objects for the contributions domain."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthorSummary:
    """Contribution totals of one author over a changelog.

    Attributes:
        author: Canonical author name
        commits: Number of stat records attributed to the author
        insertions: Lines added
        deletions: Lines removed
        files: Files changed, summed over commits
        lines: insertions + deletions
    """

    author: str
    commits: int
    insertions: int
    deletions: int
    files: int
    lines: int
