"""Implicit imports of build scripts.

Every build script sees a fixed set of imports without declaring them.
The compiler needs the same list to resolve script references.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

#: Packages available in every build script.
DEFAULT_IMPORTS = (
    'org.gradle.api.*',
    'org.gradle.api.artifacts.*',
    'org.gradle.api.file.*',
    'org.gradle.api.plugins.*',
    'org.gradle.api.provider.*',
    'org.gradle.api.tasks.*',
    'org.gradle.kotlin.dsl.*',
    'java.io.File',
)


class ImplicitImports:
    """Host service listing implicit script imports."""

    def __init__(self, imports: 'Iterable[str] | None' = None) -> None:
        """Initialize the service.

        Args:
            imports: Import statements; the defaults when omitted.
        """
        self._imports = tuple(DEFAULT_IMPORTS if imports is None else imports)

    @property
    def statements(self) -> list[str]:
        """Import statements in declaration order."""
        return [*self._imports]
