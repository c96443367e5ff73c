"""Plugin descriptor store.

Collects `(id, implementation class)` declarations and publishes them as
`<id>.properties` files, the form consumers use to resolve a plugin by
its identifier.
"""

import logging
from typing import TYPE_CHECKING

from pydantic import Field, ValidationError

from precompiled_plugins.errors import ErrorContext, PluginDeclarationError
from precompiled_plugins.models import SchemaModel
from precompiled_plugins.names import ClassName, PluginId  # noqa: TC001

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)

IMPLEMENTATION_CLASS_KEY = 'implementation-class'
DESCRIPTOR_EXTENSION = '.properties'


class PluginDeclaration(SchemaModel):
    """Declared plugin published to consumers."""

    id: PluginId = Field(
        title='Plugin identifier',
        description='Identifier the plugin is applied by.',
    )

    implementation_class: ClassName = Field(
        title='Implementation class',
        description='Type implementing the plugin contract.',
    )

    def render(self) -> str:
        """Render the descriptor file contents."""
        return f'{IMPLEMENTATION_CLASS_KEY}={self.implementation_class}\n'


class PluginDeclarations:
    """Store of plugin declarations keyed by plugin identifier.

    Identifiers are unique: declaring an identifier twice is an error,
    even when the implementation class is the same.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self.declarations: dict[str, PluginDeclaration] = {}

    def __len__(self) -> int:
        """Number of declared plugins."""
        return len(self.declarations)

    def __iter__(self) -> 'Iterator[PluginDeclaration]':
        """Iterate over declarations in registration order."""
        return iter(self.declarations.values())

    def register(self, plugin_id: str, implementation_class: str) -> PluginDeclaration:
        """Declare a plugin.

        Args:
            plugin_id: Plugin identifier.
            implementation_class: Type implementing the plugin.

        Returns:
            The stored declaration.

        Raises:
            PluginDeclarationError: If the identifier is already declared
                or the declaration is invalid.
        """
        if existing := self.declarations.get(plugin_id):
            raise PluginDeclarationError.duplicate(
                plugin_id,
                implementation_class,
                existing.implementation_class,
            )

        try:
            declaration = PluginDeclaration(id=plugin_id, implementation_class=implementation_class)

        except ValidationError as base:
            raise PluginDeclarationError(
                f'Invalid plugin declaration ({implementation_class})',
                context=ErrorContext(plugin_id=plugin_id),
            ) from base

        logger.debug('Declared plugin %r implemented by %s', plugin_id, implementation_class)
        self.declarations[plugin_id] = declaration

        return declaration

    def publish(self, directory: 'Path') -> list['Path']:
        """Write one descriptor file per declared plugin.

        Args:
            directory: Output directory, created when missing.

        Returns:
            Paths of written descriptor files.

        Raises:
            OSError: If files cannot be written.
        """
        directory.mkdir(parents=True, exist_ok=True)

        written = []
        for declaration in self:
            path = directory / f'{declaration.id}{DESCRIPTOR_EXTENSION}'
            path.write_text(declaration.render(), encoding='utf-8', newline='\n')
            written.append(path)

        return written
