"""Tests configurations and fixtures."""

from os import environ
from typing import TYPE_CHECKING

import pytest

from precompiled_plugins.host import Project, RecordingCompiler
from precompiled_plugins.settings import ENV_PREFIX, PluginSettings

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

#: Script source root used by default settings.
SOURCE_ROOT = 'src/main/kotlin'


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove plugin settings inherited from the outer environment."""
    for name in list(environ):
        if name.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(name)


@pytest.fixture
def project_dir(tmp_path: 'Path') -> 'Path':
    """Provide an isolated project directory with an empty source root."""
    directory = tmp_path / 'project'
    (directory / SOURCE_ROOT).mkdir(parents=True)

    return directory


@pytest.fixture
def write_script(project_dir: 'Path') -> 'Callable[..., Path]':
    """Provide a factory writing script files under the source root.

    Returns:
        Callable accepting a path relative to the source root and the
        script contents, returning the written file path.
    """
    def write(relative_path: str, content: str = '') -> 'Path':
        path = project_dir / SOURCE_ROOT / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')

        return path

    return write


@pytest.fixture
def settings() -> PluginSettings:
    """Provide default plugin settings."""
    return PluginSettings()


@pytest.fixture
def compiler() -> RecordingCompiler:
    """Provide a compiler recording invocations."""
    return RecordingCompiler()


@pytest.fixture
def project(project_dir: 'Path', compiler: RecordingCompiler) -> Project:
    """Provide a project with the default compile and publishing tasks."""
    return Project.create(project_dir, compiler=compiler)
