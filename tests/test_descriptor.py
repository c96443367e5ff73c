"""Tests for script plugin descriptors."""

from typing import TYPE_CHECKING

import pydantic
import pytest

from precompiled_plugins.core import ScriptPlugin
from tests.examples.scripts import PACKAGED_SCRIPT, PLAIN_SCRIPT

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pytest_mock import MockerFixture


def test_plugin_without_package(write_script: 'Callable[..., Path]') -> None:
    """Identifiers of a script without a package declaration."""
    plugin = ScriptPlugin(source_file=write_script('my-plugin.init.gradle.kts', PLAIN_SCRIPT))

    assert plugin.file_name_without_script_extension == 'my-plugin.init'
    assert plugin.package_name is None
    assert plugin.id == 'my-plugin.init'
    assert plugin.implementation_class == 'MyPluginInit'
    assert plugin.compiled_script_type_name == 'My_plugin_init_gradle'


def test_plugin_with_package(write_script: 'Callable[..., Path]') -> None:
    """Identifiers of a script declaring a package."""
    plugin = ScriptPlugin(source_file=write_script('org/acme/my-plugin.init.gradle.kts', PACKAGED_SCRIPT))

    assert plugin.package_name == 'org.acme'
    assert plugin.id == 'org.acme.my-plugin.init'
    assert plugin.implementation_class == 'MyPluginInit'
    assert plugin.compiled_script_type_name == 'org.acme.My_plugin_init_gradle'


def test_package_does_not_follow_directory(write_script: 'Callable[..., Path]') -> None:
    """Only the declaration counts, not the file location."""
    plugin = ScriptPlugin(source_file=write_script('org/acme/conventions.gradle.kts', PLAIN_SCRIPT))

    assert plugin.id == 'conventions'


def test_empty_package_declaration(write_script: 'Callable[..., Path]') -> None:
    """A keyword without a name still prefixes the identifier."""
    plugin = ScriptPlugin(source_file=write_script('odd.gradle.kts', 'package\n{}'))

    assert plugin.package_name == ''
    assert plugin.id == '.odd'


def test_custom_script_extension(write_script: 'Callable[..., Path]') -> None:
    """Strip a configured script extension."""
    plugin = ScriptPlugin(
        source_file=write_script('my-plugin.build.kts'),
        script_extension='.build.kts',
    )

    assert plugin.id == 'my-plugin'
    assert plugin.implementation_class == 'MyPlugin'


def test_package_is_read_lazily_once(mocker: 'MockerFixture', tmp_path: 'Path') -> None:
    """The file is read on first access only and the result is cached."""
    scan = mocker.patch(
        'precompiled_plugins.core.descriptor.package_name_of_file',
        return_value='org.acme',
    )

    plugin = ScriptPlugin(source_file=tmp_path / 'my-plugin.gradle.kts')

    assert scan.call_count == 0
    assert plugin.implementation_class == 'MyPlugin'
    assert scan.call_count == 0

    assert plugin.id == 'org.acme.my-plugin'
    assert plugin.compiled_script_type_name == 'org.acme.My_plugin_gradle'
    assert plugin.package_name == 'org.acme'

    scan.assert_called_once_with(tmp_path / 'my-plugin.gradle.kts')


def test_descriptors_are_referentially_transparent(write_script: 'Callable[..., Path]') -> None:
    """Descriptors of the same file have the same values."""
    path = write_script('my-plugin.gradle.kts', PACKAGED_SCRIPT)

    first = ScriptPlugin(source_file=path)
    second = ScriptPlugin(source_file=path)

    assert first.model_dump() == second.model_dump()


def test_descriptor_is_immutable(tmp_path: 'Path') -> None:
    """Fields cannot be reassigned."""
    plugin = ScriptPlugin(source_file=tmp_path / 'my-plugin.gradle.kts')

    with pytest.raises(pydantic.ValidationError):
        plugin.source_file = tmp_path / 'other.gradle.kts'  # type: ignore[misc]


def test_missing_file_fails_on_access(tmp_path: 'Path') -> None:
    """Reading errors surface when the package is needed."""
    plugin = ScriptPlugin(source_file=tmp_path / 'missing.gradle.kts')

    assert plugin.implementation_class == 'Missing'
    with pytest.raises(FileNotFoundError):
        _ = plugin.id


def test_from_files(write_script: 'Callable[..., Path]') -> None:
    """Build one descriptor per file, keeping the order."""
    files = [
        write_script('b.gradle.kts'),
        write_script('a.settings.gradle.kts'),
    ]

    plugins = ScriptPlugin.from_files(files)

    assert [plugin.source_file for plugin in plugins] == files
    assert [plugin.implementation_class for plugin in plugins] == ['B', 'ASettings']


def test_dump_includes_derived_values(write_script: 'Callable[..., Path]') -> None:
    """Serialized descriptors contain all derived names."""
    path = write_script('my-plugin.gradle.kts', PACKAGED_SCRIPT)

    assert ScriptPlugin(source_file=path).model_dump(mode='json') == {
        'source_file': path.as_posix(),
        'script_extension': '.gradle.kts',
        'file_name_without_script_extension': 'my-plugin',
        'package_name': 'org.acme',
        'id': 'org.acme.my-plugin',
        'implementation_class': 'MyPlugin',
        'compiled_script_type_name': 'org.acme.My_plugin_gradle',
    }
