"""Repository interfaces for changelog notifications."""

from abc import ABC, abstractmethod

from dep_changelog.notifications.domain.value_objects import ChangelogMessage, SlackChannel


class NotificationRepository(ABC):
    """Interface for posting changelogs to a chat channel."""

    @abstractmethod
    def send_message(self, channel: SlackChannel, message: ChangelogMessage) -> bool:
        """
        Post a changelog to a channel.

        Args:
            channel: Channel to post to
            message: Changelog to post

        Returns:
            True if the message was accepted, False otherwise

        Raises:
            RuntimeError: If the chat service reports an error
        """
        ...
