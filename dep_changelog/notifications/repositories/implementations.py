"""Concrete implementations of notification repositories."""

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from dep_changelog.notifications.domain.value_objects import ChangelogMessage, SlackChannel
from dep_changelog.notifications.repositories.interfaces import NotificationRepository

# Slack rejects section blocks longer than 3000 characters
MAX_BLOCK_SIZE = 2900

SLACK_ERRORS: dict[str, str] = {
    "channel_not_found": "Channel '{channel}' not found. Make sure the bot is invited to it.",
    "not_in_channel": "Bot is not a member of channel '{channel}'. Invite the bot first.",
    "invalid_auth": "Invalid Slack token. Please check SLACK_TOKEN.",
}


class SlackNotificationRepositoryImpl(NotificationRepository):
    """Post changelogs to Slack using the Slack SDK."""

    def __init__(self, token: str, client: WebClient | None = None) -> None:
        """Initialize the Slack client.

        Args:
            token: The Slack Bot User OAuth Token
            client: Preconfigured client, built from the token when omitted

        Raises:
            ValueError: If token is empty
        """
        if not token:
            raise ValueError(
                "Slack token is required. Get your token from https://api.slack.com/apps"
            )

        self._client = client or WebClient(token=token)

    def send_message(self, channel: SlackChannel, message: ChangelogMessage) -> bool:
        blocks: list[dict] = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": message.title, "emoji": True},
            }
        ]
        for chunk in split_text(message.text, MAX_BLOCK_SIZE):
            blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": chunk}})

        try:
            response = self._client.chat_postMessage(
                channel=channel.name,
                blocks=blocks,
                text=message.title,
            )
        except SlackApiError as e:
            error = e.response.get("error", "unknown error")
            template = SLACK_ERRORS.get(error, "Slack API error: {error}")
            raise RuntimeError(template.format(channel=channel.name, error=error)) from e

        return bool(response.get("ok", False))


def split_text(text: str, max_size: int) -> list[str]:
    """Split text on line boundaries into chunks of at most max_size characters.

    Lines longer than max_size are cut into max_size pieces.
    """
    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        while len(line) > max_size:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:max_size])
            line = line[max_size:]

        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > max_size:
            chunks.append(current)
            current = line
        else:
            current = candidate

    if current:
        chunks.append(current)
    return chunks
