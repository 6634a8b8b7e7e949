"""Unit tests for loading configuration from the environment."""

from __future__ import annotations

from pathlib import Path

import pytest

from dep_changelog.config import DEFAULT_IGNORE_PATHS, ChangelogConfig, load_config


def test_defaults_when_environment_is_empty() -> None:
    """Unset variables fall back to defaults."""
    config = load_config({})

    assert config == ChangelogConfig()
    assert config.ignore_paths == DEFAULT_IGNORE_PATHS
    assert config.cache_dir == Path.home() / ".cache" / "dep-changelog"
    assert config.slack_token is None


def test_values_are_read_from_environment(tmp_path: Path) -> None:
    """Whitespace-separated lists and paths are parsed."""
    config = load_config(
        {
            "DEP_CHANGELOG_CACHE_DIR": str(tmp_path),
            "DEP_CHANGELOG_INCLUDE": r"^github\.com/acme/  ^golang\.org/",
            "DEP_CHANGELOG_EXCLUDE": "tools",
            "DEP_CHANGELOG_IGNORE_PATHS": "",
            "DEP_CHANGELOG_MAILMAP": str(tmp_path / ".mailmap"),
            "DEP_CHANGELOG_TIMEOUT": "42.5",
            "DEP_CHANGELOG_GO": "/usr/local/go/bin/go",
            "LOG_LEVEL": "info",
            "SLACK_TOKEN": "xoxb-test",
        }
    )

    assert config.cache_dir == tmp_path
    assert config.include_patterns == (r"^github\.com/acme/", r"^golang\.org/")
    assert config.exclude_patterns == ("tools",)
    assert config.ignore_paths == ()
    assert config.mailmap_file == tmp_path / ".mailmap"
    assert config.timeout == 42.5
    assert config.go_binary == "/usr/local/go/bin/go"
    assert config.log_level == "INFO"
    assert config.slack_token == "xoxb-test"


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_invalid_timeout(value: str) -> None:
    """Timeouts must be positive numbers."""
    with pytest.raises(ValueError, match="DEP_CHANGELOG_TIMEOUT"):
        load_config({"DEP_CHANGELOG_TIMEOUT": value})
