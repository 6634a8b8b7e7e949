"""Service for orchestrating notification sending."""

from dep_changelog.notifications.domain.value_objects import ChangelogMessage, SlackChannel
from dep_changelog.notifications.repositories.interfaces import NotificationRepository


class NotificationService:
    """Service for posting changelogs."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        """Initialize the notification service.

        Args:
            notification_repository: Repository for posting messages
        """
        self._notification_repository = notification_repository

    def send_changelog(
        self, changelog: str, channel_name: str, start_ref: str, end_ref: str
    ) -> None:
        """Post a rendered changelog to a Slack channel.

        Args:
            changelog: The markdown changelog
            channel_name: The name of the Slack channel (without # prefix)
            start_ref: Older reference of the changelog
            end_ref: Newer reference of the changelog

        Raises:
            ValueError: If the channel name or changelog is invalid
            RuntimeError: If the message could not be posted
        """
        channel = SlackChannel(name=channel_name)
        message = ChangelogMessage(text=changelog, title=f"Changelog {start_ref}..{end_ref}")

        if not self._notification_repository.send_message(channel, message):
            raise RuntimeError("Failed to send message to Slack (API returned failure)")
