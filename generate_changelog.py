#!/usr/bin/env python3
"""
Script to generate the release changelog of a Go module and its dependencies:
- start_ref (optional, defaults to the most recent non release candidate tag)
- end_ref (optional, defaults to HEAD)
- --include/--exclude: Regexes selecting which dependencies are reported
- --format: markdown or json
- --send-to-slack: Post the Markdown changelog to a Slack channel
"""

import argparse
import dataclasses
import logging
import re
import sys
from pathlib import Path

from dep_changelog.changelog.services.factory import (
    create_changelog_service,
    create_git_service,
)
from dep_changelog.changelog.services.report_service import ReportService
from dep_changelog.config import ChangelogConfig, load_config
from dep_changelog.errors import ChangelogError
from dep_changelog.notifications.repositories.implementations import (
    SlackNotificationRepositoryImpl,
)
from dep_changelog.notifications.services.notification_service import NotificationService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Generate a changelog of a module and every dependency whose version "
            "changed between two references, with contributor statistics"
        )
    )
    parser.add_argument(
        "start_ref",
        nargs="?",
        default=None,
        help="Older reference (default: most recent tag that is not a release candidate)",
    )
    parser.add_argument(
        "end_ref",
        nargs="?",
        default="HEAD",
        help="Newer reference (default: HEAD)",
    )
    parser.add_argument(
        "--repo",
        type=Path,
        default=Path("."),
        help="Path to the git repository of the root module (default: current directory)",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=None,
        help="Only report dependencies matching this regex (repeatable)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Never report dependencies matching this regex (repeatable)",
    )
    parser.add_argument(
        "--ignore-path",
        action="append",
        default=None,
        help="Pathspec excluded from diffstat counts (repeatable, default: vendor go.sum)",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Directory for dependency clones (default: ~/.cache/dep-changelog)",
    )
    parser.add_argument("--mailmap", type=Path, default=None, help="Extra mailmap file")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds allowed for each git or go command (default: 300)",
    )
    parser.add_argument(
        "--format",
        choices=("markdown", "json"),
        default="markdown",
        help="Output format (default: markdown)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the changelog to this file instead of standard output",
    )
    parser.add_argument(
        "--send-to-slack",
        action="store_true",
        help="Post the Markdown changelog to a Slack channel",
    )
    parser.add_argument(
        "--slack-channel",
        type=str,
        help="Slack channel name (required if --send-to-slack is set)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def apply_overrides(config: ChangelogConfig, args: argparse.Namespace) -> ChangelogConfig:
    """Return config with values given on the command line taking precedence."""
    overrides: dict[str, object] = {}
    if args.include is not None:
        overrides["include_patterns"] = tuple(args.include)
    if args.exclude is not None:
        overrides["exclude_patterns"] = tuple(args.exclude)
    if args.ignore_path is not None:
        overrides["ignore_paths"] = tuple(args.ignore_path)
    if args.cache_dir is not None:
        overrides["cache_dir"] = args.cache_dir
    if args.mailmap is not None:
        overrides["mailmap_file"] = args.mailmap
    if args.timeout is not None:
        if args.timeout <= 0:
            raise ValueError("--timeout must be positive")
        overrides["timeout"] = args.timeout
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return dataclasses.replace(config, **overrides)


def main(argv: list[str] | None = None) -> None:
    """Main function to parse arguments, generate the changelog and deliver it."""
    args = build_parser().parse_args(argv)

    if args.send_to_slack and not args.slack_channel:
        print("✗ Error: --slack-channel is required when --send-to-slack is set", file=sys.stderr)
        sys.exit(1)

    try:
        config = apply_overrides(load_config(), args)
    except ValueError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    repo_path = args.repo.resolve()
    try:
        git_service = create_git_service(config)
        changelog_service = create_changelog_service(config, git_service)
        start_ref = args.start_ref or git_service.default_start_ref(repo_path)

        print(f"📝 Generating changelog {start_ref}..{args.end_ref}", file=sys.stderr)
        report = changelog_service.generate(repo_path, start_ref, args.end_ref)
        rendered = ReportService().render(report, args.format)
    except re.error as e:
        print(f"✗ Invalid module pattern: {e}", file=sys.stderr)
        sys.exit(1)
    except (ChangelogError, ValueError) as e:
        print(f"✗ Failed to generate changelog: {e}", file=sys.stderr)
        sys.exit(1)

    for failure in report.failed_modules:
        print(f"✗ {failure.path}: {failure.reason}", file=sys.stderr)

    if args.output is not None:
        try:
            args.output.write_text(rendered, encoding="utf-8")
        except OSError as e:
            print(f"✗ Failed to write changelog to {args.output}: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"✓ Changelog written to {args.output.absolute()}", file=sys.stderr)
    else:
        sys.stdout.write(rendered)

    if args.send_to_slack:
        if not config.slack_token:
            print(
                "✗ Configuration error: SLACK_TOKEN environment variable is required. "
                "Set it in a .env file or as an environment variable.",
                file=sys.stderr,
            )
            sys.exit(1)

        markdown = rendered if args.format == "markdown" else ReportService().render_markdown(report)
        try:
            notification_service = NotificationService(
                SlackNotificationRepositoryImpl(token=config.slack_token)
            )
            notification_service.send_changelog(
                markdown, args.slack_channel, report.start_ref, report.end_ref
            )
        except (ValueError, RuntimeError) as e:
            print(f"✗ Failed to send to Slack: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"✓ Changelog sent to #{args.slack_channel}", file=sys.stderr)


if __name__ == "__main__":
    main()
