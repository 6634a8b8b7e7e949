"""Concrete implementation of manifest reading using go and git worktrees."""

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

from dep_changelog.command import DEFAULT_TIMEOUT, run_command
from dep_changelog.errors import GitCommandError, MalformedManifestError
from dep_changelog.modules.domain.value_objects import DependencyRecord, ManifestSnapshot
from dep_changelog.modules.repositories.interfaces import ManifestRepository

logger = logging.getLogger(__name__)


class GoListManifestRepositoryImpl(ManifestRepository):
    """Read manifests with `go list -m -json all` in a temporary worktree."""

    def __init__(self, go_binary: str = "go", timeout: float | None = DEFAULT_TIMEOUT) -> None:
        """
        Initialize the manifest reader.

        Args:
            go_binary: Name or path of the go executable
            timeout: Seconds allowed for each external command
        """
        self._go_binary = go_binary
        self._timeout = timeout

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
            GitCommandError: If git or go fails
        """
        with tempfile.TemporaryDirectory(prefix="dep-changelog-") as tmp_dir:
            worktree = Path(tmp_dir) / "worktree"
            run_command(
                ["git", "worktree", "add", "--detach", str(worktree), ref],
                cwd=repo_path,
                timeout=self._timeout,
            )
            try:
                output = run_command(
                    [self._go_binary, "list", "-mod=mod", "-m", "-json", "all"],
                    cwd=worktree,
                    timeout=self._timeout,
                )
            finally:
                self._remove_worktree(repo_path, worktree)

        snapshot = self.parse_manifest(output)
        logger.info(
            "Read %d dependencies of %s at %s",
            len(snapshot.dependencies),
            snapshot.main_path,
            ref,
        )
        return snapshot

    def _remove_worktree(self, repo_path: Path, worktree: Path) -> None:
        try:
            run_command(
                ["git", "worktree", "remove", "--force", str(worktree)],
                cwd=repo_path,
                timeout=self._timeout,
            )
        except GitCommandError as e:
            logger.warning("Could not remove worktree %s: %s", worktree, e)

    @staticmethod
    def parse_manifest(output: str) -> ManifestSnapshot:
        """
        Parse the concatenated JSON objects printed by `go list -m -json`.

        Args:
            output: Raw command output

        Returns:
            ManifestSnapshot built from the entries

        Raises:
            MalformedManifestError: If the stream is not valid JSON, an entry
                has no Path, a dependency has no Version or no main module is listed
        """
        decoder = json.JSONDecoder()
        entries: list[dict[str, Any]] = []
        position = 0
        while True:
            while position < len(output) and output[position].isspace():
                position += 1
            if position >= len(output):
                break
            try:
                entry, position = decoder.raw_decode(output, position)
            except json.JSONDecodeError as e:
                raise MalformedManifestError(f"Invalid manifest JSON: {e}") from e
            if not isinstance(entry, dict):
                raise MalformedManifestError(f"Manifest entry is not an object: {entry!r}")
            entries.append(entry)

        main_path: str | None = None
        dependencies: dict[str, DependencyRecord] = {}
        for entry in entries:
            path = entry.get("Path")
            if not path:
                raise MalformedManifestError(f"Manifest entry without Path: {entry!r}")
            if entry.get("Main"):
                main_path = path
                continue

            version = entry.get("Version")
            source_path = None
            replace = entry.get("Replace")
            if isinstance(replace, dict) and replace.get("Version"):
                version = replace["Version"]
                # Versions of a fork are tags of the fork repository.
                if replace.get("Path") and replace["Path"] != path:
                    source_path = replace["Path"]
            if not version:
                raise MalformedManifestError(f"Manifest entry {path!r} without Version")
            dependencies[path] = DependencyRecord(
                path=path, version=version, source_path=source_path
            )

        if main_path is None:
            raise MalformedManifestError("Manifest does not list a main module")

        return ManifestSnapshot(main_path=main_path, dependencies=dependencies)
