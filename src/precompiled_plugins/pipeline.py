"""Precompiled script plugins for build projects.

Turns every `*.gradle.kts` script found in the project sources into a
plugin addressable by identifier:

- a generation task writes one wrapper source per script and runs
  before the compile task;
- a declaration task registers every `(id, implementation class)` pair
  and runs before the descriptor-publishing task;
- once the project is evaluated, the compile task receives the script
  templates and the implicit imports of the scripts.

The pipeline is enabled by the plugin development capability of the
project. Finding no scripts is not an error: nothing gets generated or
declared.
"""

import logging
from functools import cached_property
from typing import TYPE_CHECKING
from warnings import warn

from precompiled_plugins.core import ScriptPlugin, write_wrapper
from precompiled_plugins.errors import ErrorContext, ErrorFormatter, PluginWarning
from precompiled_plugins.host import ImplicitImports
from precompiled_plugins.names import is_class_name
from precompiled_plugins.settings import PluginSettings

if TYPE_CHECKING:
    from pathlib import Path

    from precompiled_plugins.host import Project, Task

logger = logging.getLogger(__name__)

#: Script templates in the order the toolchain matches them: settings
#: scripts, then init scripts, then plain project scripts.
SCRIPT_TEMPLATES = (
    'org.gradle.kotlin.dsl.precompile.PrecompiledSettingsScript',
    'org.gradle.kotlin.dsl.precompile.PrecompiledInitScript',
    'org.gradle.kotlin.dsl.precompile.PrecompiledProjectScript',
)

SCRIPT_TEMPLATES_ARG = '-script-templates'
RESOLVER_ENVIRONMENT_ARG = '-Xscript-resolver-environment'
IMPLICIT_IMPORTS_PROPERTY = 'kotlinDslImplicitImports'


class ScriptPlugins:
    """Script plugins discovered in a single project.

    The descriptor list is built on first access and kept for the rest
    of the build pass.
    """

    def __init__(self, files: list['Path'], settings: PluginSettings) -> None:
        """Initialize the collection.

        Args:
            files: Discovered script files.
            settings: Plugin conventions.
        """
        self.files = files
        self.settings = settings

    @cached_property
    def plugins(self) -> list[ScriptPlugin]:
        """Descriptors of all discovered scripts."""
        plugins = ScriptPlugin.from_files(self.files, self.settings.script_extension)
        wrappers: dict[str, ScriptPlugin] = {}

        for plugin in plugins:
            if not is_class_name(plugin.implementation_class):
                warn(ErrorFormatter.format(
                    f'Script name does not form a valid class name: {plugin.implementation_class!r}',
                    ErrorContext(filename=plugin.source_file.as_posix()),
                ), category=PluginWarning, stacklevel=2)

            if other := wrappers.get(plugin.implementation_class):
                warn(ErrorFormatter.format(
                    f'Wrapper {plugin.implementation_class!r} is also generated '
                    f'for {other.source_file.as_posix()!r} and will be overwritten',
                    ErrorContext(filename=plugin.source_file.as_posix()),
                ), category=PluginWarning, stacklevel=2)

            wrappers.setdefault(plugin.implementation_class, plugin)

        return plugins

    def declare(self, project: 'Project') -> None:
        """Register every plugin with the project descriptor store.

        Raises:
            PluginDeclarationError: If a plugin identifier is declared twice.
        """
        for plugin in self.plugins:
            project.plugin_declarations.register(plugin.id, plugin.implementation_class)

        logger.info('Declared %d script plugin(s)', len(self.plugins))

    def generate(self, output_dir: 'Path') -> list['Path']:
        """Write one wrapper source per plugin.

        Raises:
            OSError: If the output directory cannot be written.
        """
        output_dir.mkdir(parents=True, exist_ok=True)

        written = [
            write_wrapper(
                plugin,
                output_dir,
                project_type=self.settings.project_type,
                extension=self.settings.wrapper_extension,
            )
            for plugin in self.plugins
        ]
        logger.info('Generated %d script plugin wrapper(s) in %s', len(written), output_dir)

        return written


class PrecompiledScriptPlugins:
    """Build plugin compiling scripts into addressable plugins.

    Host services are explicit dependencies: the settings and the
    implicit imports are passed in rather than looked up.
    """

    def __init__(self, settings: PluginSettings | None = None,
                 implicit_imports: ImplicitImports | None = None) -> None:
        """Initialize the plugin.

        Args:
            settings: Plugin conventions; resolved from the environment
                when omitted.
            implicit_imports: Implicit imports service; built from the
                settings when omitted.
        """
        self.settings = settings or PluginSettings()
        self.implicit_imports = implicit_imports or ImplicitImports(self.settings.implicit_imports)

    @property
    def script_templates(self) -> str:
        """Comma-separated script template type names."""
        return ','.join(SCRIPT_TEMPLATES)

    def resolver_environment(self) -> str:
        """Resolver environment carrying the implicit imports."""
        imports = ':'.join(self.implicit_imports.statements)

        return f'{IMPLICIT_IMPORTS_PROPERTY}="{imports}"'

    def compiler_args(self) -> list[str]:
        """Extra arguments appended to the compile task."""
        return [
            SCRIPT_TEMPLATES_ARG, self.script_templates,
            f'{RESOLVER_ENVIRONMENT_ARG}={self.resolver_environment()}',
        ]

    def apply(self, project: 'Project') -> None:
        """Apply the plugin to a project.

        Collection runs when the plugin development capability is
        applied; finalization runs after the project is evaluated.
        """
        project.with_capability(self.settings.capability, self.collect)
        project.after_evaluate(self.finalize)

    def collect(self, project: 'Project') -> ScriptPlugins:
        """Configuration phase: discover scripts and wire the tasks.

        Args:
            project: Project with the plugin development capability.

        Returns:
            Script plugins of the project, not yet computed.

        Raises:
            TaskGraphError: If the compile or publishing task is missing.
        """
        settings = self.settings

        source_root = project.project_dir / settings.source_root
        if not source_root.is_dir():
            warn(
                f'Script source root {source_root.as_posix()!r} does not exist',
                category=PluginWarning,
                stacklevel=2,
            )

        files = project.file_tree(settings.source_root, settings.script_pattern)
        logger.debug('Found %d script(s) under %s', len(files), source_root)

        scripts = ScriptPlugins(files, settings)

        declare = project.tasks.create(
            settings.declare_task,
            description='Declares script plugins with the plugin descriptor store.',
        )
        declare.do_last(lambda _: scripts.declare(project))
        project.tasks.insert_before(settings.descriptors_task, declare)

        generated_sources_dir = project.build_dir / settings.generated_sources_dir
        project.compile_task(settings.compile_task).source_dirs.append(generated_sources_dir)

        generate = project.tasks.create(
            settings.generate_task,
            description='Generates plugin wrappers for precompiled scripts.',
        )
        generate.declare_inputs(files)
        generate.declare_outputs(generated_sources_dir)
        generate.do_last(lambda _: scripts.generate(generated_sources_dir))
        project.tasks.insert_before(settings.compile_task, generate)

        return scripts

    def finalize(self, project: 'Project') -> 'Task':
        """Finalize phase: pass script compilation arguments to the compiler.

        Args:
            project: Evaluated project.

        Returns:
            The updated compile task.
        """
        task = project.compile_task(self.settings.compile_task)
        task.free_compiler_args.extend(self.compiler_args())

        return task
