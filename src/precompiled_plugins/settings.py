"""Runtime configuration for precompiled script plugins.

All conventions (where scripts live, where wrappers go, which tasks
are wired together) are resolved from an optional YAML file, then from
environment variables prefixed with `PRECOMPILED_PLUGINS_`, and fall
back to the conventional defaults.
"""

from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import SettingsConfigDict
from yaml import safe_load

from precompiled_plugins.core.wrappers import PROJECT_TYPE, WRAPPER_EXTENSION
from precompiled_plugins.errors import ErrorContext, SettingsError
from precompiled_plugins.models import SettingsModel
from precompiled_plugins.names import SCRIPT_EXTENSION

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Self

ENV_PREFIX = 'PRECOMPILED_PLUGINS_'
CONFIG_FILENAME = 'precompiled-plugins.yaml'


class PluginSettings(SettingsModel):
    """Conventions used to discover, generate and declare script plugins.

    Relative directories are resolved against the project directory
    (`source_root`) or the build directory (generated and published
    outputs).
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        frozen=True,
        extra='ignore',
    )

    source_root: PurePosixPath = Field(
        default=PurePosixPath('src/main/kotlin'),
        description='Directory scanned for script files, relative to the project.',
    )
    script_pattern: str = Field(
        default=f'**/*{SCRIPT_EXTENSION}',
        description='Glob pattern matching script files under the source root.',
    )
    script_extension: str = Field(
        default=SCRIPT_EXTENSION,
        description='Suffix stripped from script file names.',
    )

    generated_sources_dir: PurePosixPath = Field(
        default=PurePosixPath('generated-sources/kotlin-dsl-plugins/kotlin'),
        description='Wrapper output directory, relative to the build directory.',
    )
    wrapper_extension: str = Field(
        default=WRAPPER_EXTENSION,
        description='Extension of generated wrapper sources.',
    )
    project_type: str = Field(
        default=PROJECT_TYPE,
        description='Host project type passed to compiled scripts.',
    )

    descriptors_dir: PurePosixPath = Field(
        default=PurePosixPath('pluginDescriptors/META-INF/gradle-plugins'),
        description='Published plugin descriptors directory, relative to the build directory.',
    )

    capability: str = Field(
        default='java-gradle-plugin',
        description='Capability whose activation enables script plugins.',
    )
    compile_task: str = Field(default='compileKotlin')
    descriptors_task: str = Field(default='pluginDescriptors')
    generate_task: str = Field(default='generateScriptPluginWrappers')
    declare_task: str = Field(default='inferGradlePluginDeclarations')

    implicit_imports: tuple[str, ...] | None = Field(
        default=None,
        description='Imports available in every script; defaults to the host list.',
    )
    compiler_command: tuple[str, ...] = Field(
        default=('kotlinc',),
        description='Command line prefix used to invoke the script compiler.',
    )

    @classmethod
    def load(cls, path: 'Path | None' = None) -> 'Self':
        """Resolve settings from a YAML file and the environment.

        Values from the file take precedence over environment variables.
        A missing or empty file is ignored.

        Args:
            path: Optional YAML configuration file.

        Returns:
            Resolved settings.

        Raises:
            yaml.YAMLError: If the file is not valid YAML.
            SettingsError: If the file does not contain a mapping.
            pydantic.ValidationError: If a value is invalid.
        """
        content = {}
        if path is not None and path.is_file():
            content = safe_load(path.read_text(encoding='utf-8'))
            if content is None:
                content = {}

            if not isinstance(content, dict) or not all(isinstance(key, str) for key in content):
                raise SettingsError(
                    'Configuration must be a mapping of setting names to values',
                    context=ErrorContext(filename=path.as_posix()),
                )

        return cls(**content)
