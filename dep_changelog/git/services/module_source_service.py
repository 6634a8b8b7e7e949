"""Service for locating the repository that hosts a module."""

import re

from dep_changelog.git.domain.value_objects import ModuleSource


class ModuleSourceService:
    """Map module paths to clone URLs and module subdirectories."""

    # Hosts where a repository is identified by host/owner/name
    THREE_SEGMENT_HOSTS: frozenset[str] = frozenset(
        {
            "github.com",
            "gitlab.com",
            "bitbucket.org",
        }
    )

    GOOGLESOURCE_PREFIXES: dict[str, str] = {
        "golang.org/x/": "https://go.googlesource.com/",
    }

    MAJOR_VERSION_SUFFIX: re.Pattern[str] = re.compile(r"^v\d+$")

    def locate(self, module_path: str) -> ModuleSource:
        """
        Find where the source of a module lives.

        Args:
            module_path: Module path, e.g. github.com/owner/repo/sub/v2

        Returns:
            ModuleSource describing the repository and subdirectory
        """
        segments = [s for s in module_path.strip("/").split("/") if s]

        for prefix, base_url in self.GOOGLESOURCE_PREFIXES.items():
            if module_path.startswith(prefix):
                prefix_len = len(prefix.strip("/").split("/"))
                repo_segments = segments[: prefix_len + 1]
                name = repo_segments[-1]
                return ModuleSource(
                    module_path=module_path,
                    clone_url=f"{base_url}{name}",
                    web_url=None,
                    cache_key="/".join(repo_segments),
                    subdirectory=self._subdirectory(segments[prefix_len + 1 :]),
                )

        hosted = bool(segments) and segments[0] in self.THREE_SEGMENT_HOSTS
        if hosted:
            repo_segments = segments[:3]
            rest = segments[3:]
        else:
            repo_segments = segments
            rest = []

        repo = "/".join(repo_segments)
        return ModuleSource(
            module_path=module_path,
            clone_url=f"https://{repo}",
            web_url=f"https://{repo}" if hosted else None,
            cache_key=repo,
            subdirectory=self._subdirectory(rest),
        )

    def _subdirectory(self, segments: list[str]) -> str | None:
        if segments and self.MAJOR_VERSION_SUFFIX.match(segments[-1]):
            segments = segments[:-1]
        return "/".join(segments) or None

    @staticmethod
    def qualify_ref(source: ModuleSource, ref: str) -> str:
        """
        Prefix a tag with the module subdirectory, as multi-module repositories tag.

        Args:
            source: Location of the module
            ref: Tag or commit hash

        Returns:
            Reference usable in the module's repository
        """
        if source.subdirectory and ref.startswith("v"):
            return f"{source.subdirectory}/{ref}"
        return ref
