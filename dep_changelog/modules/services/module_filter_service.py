"""Service for deciding which dependency modules are reported."""

import re
from collections.abc import Iterable


class ModuleFilterService:
    """Include/exclude filter over dependency module paths."""

    def __init__(
        self,
        include_patterns: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
    ) -> None:
        """
        Initialize ModuleFilterService.

        Args:
            include_patterns: Regular expressions a path must match one of.
                An empty collection matches every path.
            exclude_patterns: Regular expressions rejecting a path outright

        Raises:
            re.error: If a pattern is not a valid regular expression
        """
        self._include: tuple[re.Pattern[str], ...] = tuple(
            re.compile(pattern) for pattern in include_patterns
        )
        self._exclude: tuple[re.Pattern[str], ...] = tuple(
            re.compile(pattern) for pattern in exclude_patterns
        )

    def is_in_scope(self, module_path: str) -> bool:
        """
        Check whether a module path should appear in the changelog.

        Exclude patterns always win over include patterns.

        Args:
            module_path: Module path to check

        Returns:
            True if the module is in scope, False otherwise
        """
        if self._include and not any(p.search(module_path) for p in self._include):
            return False

        for pattern in self._exclude:
            if pattern.search(module_path):
                return False

        return True
