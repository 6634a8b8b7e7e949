"""Exceptions raised while building a changelog."""


class ChangelogError(Exception):
    """Base exception for changelog generation failures."""


class UnresolvableVersionError(ChangelogError, ValueError):
    """Raised when a version string cannot be turned into a git reference."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Cannot derive a git reference from version {version!r}")


class FetchError(ChangelogError):
    """Raised when a dependency repository or reference cannot be made available."""


class MalformedManifestError(ChangelogError):
    """Raised when the dependency manifest contains an incomplete entry."""


class UnknownStatEventError(ChangelogError):
    """Raised when git reports a diffstat label that is not understood."""

    def __init__(self, label: str, line: str) -> None:
        self.label = label
        self.line = line
        super().__init__(f"Unknown diffstat label {label!r} in line {line!r}")


class GitCommandError(ChangelogError, RuntimeError):
    """Raised when an external git or go command fails or times out."""

    def __init__(self, args: list[str], message: str) -> None:
        self.args_list = args
        super().__init__(f"Command failed: {' '.join(args)}\nError: {message}")
