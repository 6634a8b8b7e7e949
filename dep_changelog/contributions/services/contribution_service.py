"""Service for aggregating per-author contribution statistics."""

from collections.abc import Iterable

from dep_changelog.contributions.domain.value_objects import AuthorSummary
from dep_changelog.git.domain.value_objects import CommitStatRecord


class ContributionService:
    """Aggregate commit stat records into author summaries."""

    def aggregate(self, records: Iterable[CommitStatRecord]) -> tuple[AuthorSummary, ...]:
        """
        Group stat records by author name and total them.

        Names are compared exactly; normalization happens before records get here.

        Args:
            records: Stat records, possibly spanning many repositories

        Returns:
            Tuple of summaries sorted by lines changed, largest first.
            Authors with equal totals keep the order they were first seen in.
        """
        totals: dict[str, list[int]] = {}
        for record in records:
            # commits, insertions, deletions, files
            entry = totals.setdefault(record.author_name, [0, 0, 0, 0])
            entry[0] += 1
            entry[1] += record.insertions
            entry[2] += record.deletions
            entry[3] += record.files_changed

        summaries = [
            AuthorSummary(
                author=author,
                commits=commits,
                insertions=insertions,
                deletions=deletions,
                files=files,
                lines=insertions + deletions,
            )
            for author, (commits, insertions, deletions, files) in totals.items()
        ]
        return tuple(sorted(summaries, key=lambda summary: summary.lines, reverse=True))
