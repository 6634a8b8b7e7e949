"""Factory for wiring changelog services from configuration."""

from dep_changelog.changelog.services.changelog_service import ChangelogService
from dep_changelog.changelog.services.collector_service import CollectorService
from dep_changelog.config import ChangelogConfig
from dep_changelog.git.repositories.implementations import GitRepositoryImpl
from dep_changelog.git.services.git_service import GitService
from dep_changelog.git.services.identity_service import IdentityService
from dep_changelog.modules.repositories.implementations import GoListManifestRepositoryImpl
from dep_changelog.modules.services.module_filter_service import ModuleFilterService


def create_git_service(config: ChangelogConfig) -> GitService:
    """Create a GitService backed by the git command line."""
    git_repository = GitRepositoryImpl(mailmap_file=config.mailmap_file, timeout=config.timeout)
    return GitService(
        git_repository,
        cache_dir=config.cache_dir,
        ignore_paths=config.ignore_paths,
    )


def create_changelog_service(
    config: ChangelogConfig, git_service: GitService | None = None
) -> ChangelogService:
    """
    Create a ChangelogService using git and go.

    Args:
        config: Settings for the run
        git_service: Existing GitService to share, created from config if omitted

    Returns:
        ChangelogService ready to generate reports

    Raises:
        re.error: If an include or exclude pattern is invalid
    """
    git_service = git_service or create_git_service(config)
    git_repository = GitRepositoryImpl(mailmap_file=config.mailmap_file, timeout=config.timeout)
    collector_service = CollectorService(git_service, IdentityService(git_repository))
    return ChangelogService(
        manifest_repository=GoListManifestRepositoryImpl(
            go_binary=config.go_binary, timeout=config.timeout
        ),
        collector_service=collector_service,
        module_filter_service=ModuleFilterService(
            config.include_patterns, config.exclude_patterns
        ),
    )
