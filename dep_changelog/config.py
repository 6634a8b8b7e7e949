"""Configuration loaded from the environment and .env files."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_IGNORE_PATHS: tuple[str, ...] = ("vendor", "go.sum")


def _load_env_file() -> None:
    """Load environment variables from .env file."""
    # Try the project root first, then the current directory
    project_root = Path(__file__).parent.parent
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        load_dotenv()


def _split(value: str | None) -> tuple[str, ...]:
    return tuple(value.split()) if value else ()


@dataclass(frozen=True)
class ChangelogConfig:
    """Settings for one changelog run.

    Attributes:
        cache_dir: Directory holding clones of dependency repositories
        include_patterns: Regexes selecting reported dependencies
        exclude_patterns: Regexes rejecting reported dependencies
        ignore_paths: Pathspecs excluded from diffstat counts
        mailmap_file: Extra mailmap for author identities
        timeout: Seconds allowed for each external command
        go_binary: go executable used to list dependencies
        log_level: Logging level name
        slack_token: Token for posting to Slack, if configured
    """

    cache_dir: Path = field(default_factory=lambda: Path.home() / ".cache" / "dep-changelog")
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    ignore_paths: tuple[str, ...] = DEFAULT_IGNORE_PATHS
    mailmap_file: Path | None = None
    timeout: float = 300.0
    go_binary: str = "go"
    log_level: str = "WARNING"
    slack_token: str | None = None


def load_config(env: dict[str, str] | None = None) -> ChangelogConfig:
    """
    Build the configuration from environment variables.

    Args:
        env: Mapping to read instead of os.environ. No .env file is loaded
            when given.

    Returns:
        ChangelogConfig with defaults for unset variables

    Raises:
        ValueError: If DEP_CHANGELOG_TIMEOUT is not a positive number
    """
    if env is None:
        _load_env_file()
        env = dict(os.environ)

    defaults = ChangelogConfig()

    timeout_value = env.get("DEP_CHANGELOG_TIMEOUT")
    timeout = defaults.timeout
    if timeout_value:
        try:
            timeout = float(timeout_value)
        except ValueError as e:
            raise ValueError(
                f"DEP_CHANGELOG_TIMEOUT must be a number of seconds, got {timeout_value!r}"
            ) from e
        if timeout <= 0:
            raise ValueError("DEP_CHANGELOG_TIMEOUT must be positive")

    cache_dir = env.get("DEP_CHANGELOG_CACHE_DIR")
    mailmap = env.get("DEP_CHANGELOG_MAILMAP")
    ignore_paths = env.get("DEP_CHANGELOG_IGNORE_PATHS")

    return ChangelogConfig(
        cache_dir=Path(cache_dir).expanduser() if cache_dir else defaults.cache_dir,
        include_patterns=_split(env.get("DEP_CHANGELOG_INCLUDE")),
        exclude_patterns=_split(env.get("DEP_CHANGELOG_EXCLUDE")),
        ignore_paths=_split(ignore_paths) if ignore_paths is not None else defaults.ignore_paths,
        mailmap_file=Path(mailmap).expanduser() if mailmap else None,
        timeout=timeout,
        go_binary=env.get("DEP_CHANGELOG_GO") or defaults.go_binary,
        log_level=(env.get("LOG_LEVEL") or defaults.log_level).upper(),
        slack_token=env.get("SLACK_TOKEN") or None,
    )
