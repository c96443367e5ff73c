"""Script plugin descriptors.

A descriptor holds everything derived from a single script file: its
plugin identifier, the name of the generated wrapper type and the name
the toolchain gives to the compiled script. Every value is a pure
function of the file path and contents, computed on first access and
cached for the lifetime of the descriptor.
"""

from functools import cached_property
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

from pydantic import Field, computed_field

from precompiled_plugins.models import SchemaModel
from precompiled_plugins.names import (
    SCRIPT_EXTENSION,
    implementation_class_name,
    remove_script_extension,
    script_class_name_for_file,
)

from .scanner import package_name_of_file

if TYPE_CHECKING:
    from collections.abc import Iterable


class ScriptPlugin(SchemaModel):
    """Plugin derived from a precompiled script file.

    The descriptor is immutable: only the source file and the script
    extension are stored, all other values are derived lazily. The
    package declaration is read from the file on first access to any
    value depending on it.
    """

    source_file: Path = Field(
        title='Source file',
        description='Script file the plugin is derived from.',
    )

    script_extension: str = Field(
        default=SCRIPT_EXTENSION,
        title='Script extension',
        description='Suffix stripped from the file name to form the plugin name.',
    )

    @computed_field  # type: ignore[prop-decorator]
    @cached_property
    def file_name_without_script_extension(self) -> str:
        """File name with the script extension removed."""
        return remove_script_extension(self.source_file.name, self.script_extension)

    @computed_field  # type: ignore[prop-decorator]
    @cached_property
    def package_name(self) -> str | None:
        """Package declared by the script, if any."""
        return package_name_of_file(self.source_file)

    @computed_field  # type: ignore[prop-decorator]
    @cached_property
    def id(self) -> str:
        """Plugin identifier consumers apply the plugin by."""
        return self._package_prefixed(self.file_name_without_script_extension)

    @computed_field  # type: ignore[prop-decorator]
    @cached_property
    def implementation_class(self) -> str:
        """Name of the generated wrapper type and of its source file."""
        return implementation_class_name(self.file_name_without_script_extension)

    @computed_field  # type: ignore[prop-decorator]
    @cached_property
    def compiled_script_type_name(self) -> str:
        """Package-qualified name of the compiled script class."""
        return self._package_prefixed(script_class_name_for_file(self.source_file.name))

    def _package_prefixed(self, name: str) -> str:
        if self.package_name is None:
            return name

        return f'{self.package_name}.{name}'

    @classmethod
    def from_files(cls, files: 'Iterable[Path]',
                   script_extension: str = SCRIPT_EXTENSION) -> list['ScriptPlugin']:
        """Build descriptors for discovered script files.

        Args:
            files: Script file paths.
            script_extension: Suffix stripped from file names.

        Returns:
            One descriptor per file, in the given order.
        """
        return [
            cls(source_file=path, script_extension=script_extension)
            for path in files
        ]
