"""Git domain entities."""

from dataclasses import dataclass

from dep_changelog.git.domain.value_objects import ShortStat


@dataclass(frozen=True)
class Commit:
    """Commit entity with its diffstat."""

    hash: str
    author_name: str
    author_email: str
    subject: str
    stat: ShortStat = ShortStat()
    co_authors: tuple[str, ...] = ()
    body: str = ""
