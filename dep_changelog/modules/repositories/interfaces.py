"""Repository interfaces for dependency manifests."""

from abc import ABC, abstractmethod
from pathlib import Path

from dep_changelog.modules.domain.value_objects import ManifestSnapshot


class ManifestRepository(ABC):
    """Interface for reading the dependency manifest of a module."""

    @abstractmethod
    def read_snapshot(self, repo_path: Path, ref: str) -> ManifestSnapshot:
        """
        Read the full dependency manifest visible at a reference.

        Args:
            repo_path: Path to the git repository of the main module
            ref: Git reference to read the manifest at

        Returns:
            ManifestSnapshot with the main module path and its dependencies

        Raises:
            MalformedManifestError: If an entry lacks a required field
        """
        ...
