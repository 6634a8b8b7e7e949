"""Value objects for the notifications domain."""

import re
from dataclasses import dataclass

_CHANNEL_NAME = re.compile(r"^[a-z0-9_-]+$")


@dataclass(frozen=True)
class SlackChannel:
    """Slack channel a changelog is posted to.

    Attributes:
        name: The channel name without the # prefix
    """

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Channel name cannot be empty")

        if self.name.startswith("#"):
            raise ValueError(
                f"Channel name should not include the # prefix. Use '{self.name[1:]}'"
            )

        if not _CHANNEL_NAME.match(self.name):
            raise ValueError(
                f"Invalid channel name '{self.name}'. Channel names can only contain "
                "lowercase letters, numbers, hyphens, and underscores"
            )


@dataclass(frozen=True)
class ChangelogMessage:
    """A rendered changelog to post.

    Attributes:
        text: Markdown changelog
        title: Header shown above the changelog
    """

    text: str
    title: str

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise ValueError("Changelog text cannot be empty")
