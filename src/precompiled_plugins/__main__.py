"""CLI utilities for precompiled script plugins.

Runs the script plugin pipeline against a project directory using the
in-process build host: list derived plugin identifiers, generate
wrappers and descriptors, or run the whole build.
"""

import logging
from json import dumps
from pathlib import Path
from shlex import join

from click import ClickException, Context, argument, echo, group, option, pass_context
from click import Path as PathParam

from precompiled_plugins.core import ScriptPlugin, package_name_of_file
from precompiled_plugins.errors import PluginsError
from precompiled_plugins.host import CommandCompiler, Project, RecordingCompiler
from precompiled_plugins.pipeline import PrecompiledScriptPlugins
from precompiled_plugins.settings import CONFIG_FILENAME, PluginSettings

ProjectDirectory = PathParam(
    exists=True,
    file_okay=False,
    dir_okay=True,
    path_type=Path,
)

ScriptFile = PathParam(
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)

ConfigFile = PathParam(
    dir_okay=False,
    readable=True,
    path_type=Path,
)


def _make_project(project_dir: Path, settings: PluginSettings,
                  compiler: CommandCompiler) -> Project:
    """Create, configure and evaluate a project with script plugins.

    Args:
        project_dir: Project root directory.
        settings: Plugin conventions.
        compiler: Compiler used by the compile task.

    Returns:
        Evaluated project ready to run tasks.
    """
    project = Project.create(
        project_dir,
        compiler=compiler,
        source_dirs=(settings.source_root,),
        compile_task=settings.compile_task,
        descriptors_task=settings.descriptors_task,
        descriptors_dir=settings.descriptors_dir,
    )

    PrecompiledScriptPlugins(settings).apply(project)
    project.apply_capability(settings.capability)
    project.evaluate()

    return project


def _run(project: Project, *tasks: str) -> None:
    """Run project tasks reporting library errors as CLI errors."""
    try:
        project.tasks.run(*tasks)

    except PluginsError as error:
        raise ClickException(str(error)) from error


@group(help='Command-line utilities for precompiled script plugins.')
@option('-v', '--verbose', is_flag=True, help='Log pipeline progress.')
@option(
    '-c', '--config',
    type=ConfigFile,
    default=CONFIG_FILENAME,
    help=(
        'YAML file overriding plugin conventions, ignored when missing. '
        'A relative path is resolved against the current directory, '
        'not against PROJECT_DIR.'
    ),
)
@pass_context
def cli(ctx: Context, verbose: bool, config: Path) -> None:  # noqa: FBT001
    """Root CLI group for precompiled script plugin tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    try:
        ctx.obj = PluginSettings.load(config)

    except PluginsError as error:
        raise ClickException(str(error)) from error


@cli.command(name='ids', help='List plugins derived from project scripts.')
@option('--json', 'as_json', is_flag=True, help='Print plugins as JSON.')
@argument('project_dir', type=ProjectDirectory, default='.')
@pass_context
def list_ids(ctx: Context, project_dir: Path, as_json: bool) -> None:  # noqa: FBT001
    """Print identifiers and class names of discovered script plugins."""
    settings: PluginSettings = ctx.obj

    project = Project(project_dir)
    plugins = ScriptPlugin.from_files(
        project.file_tree(settings.source_root, settings.script_pattern),
        settings.script_extension,
    )

    if as_json:
        echo(dumps([plugin.model_dump(mode='json') for plugin in plugins], indent=4))
        return

    for plugin in plugins:
        echo(f'{plugin.id}\t{plugin.implementation_class}\t{plugin.compiled_script_type_name}')


@cli.command(name='package', help='Print the package declared by a script.')
@argument('script', type=ScriptFile)
def print_package(script: Path) -> None:
    """Print the declared package, failing when there is none."""
    package = package_name_of_file(script)
    if package is None:
        raise SystemExit(1)

    echo(package)


@cli.command(name='generate', help='Generate plugin wrappers and descriptors.')
@argument('project_dir', type=ProjectDirectory, default='.')
@pass_context
def generate(ctx: Context, project_dir: Path) -> None:
    """Run the wrapper generation and descriptor publishing tasks."""
    settings: PluginSettings = ctx.obj

    project = _make_project(project_dir, settings, RecordingCompiler(settings.compiler_command))
    _run(project, settings.generate_task, settings.descriptors_task)

    for task_name in (settings.generate_task, settings.descriptors_task):
        for directory in project.tasks.get(task_name).outputs:
            for path in sorted(directory.glob('*')):
                echo(path.as_posix())


@cli.command(name='build', help='Generate wrappers and compile all sources.')
@option('--dry-run', is_flag=True, help='Print the compiler command instead of running it.')
@argument('project_dir', type=ProjectDirectory, default='.')
@pass_context
def build(ctx: Context, project_dir: Path, dry_run: bool) -> None:  # noqa: FBT001
    """Run the compile and descriptor publishing tasks."""
    settings: PluginSettings = ctx.obj

    compiler = CommandCompiler(settings.compiler_command)
    if dry_run:
        compiler = RecordingCompiler(settings.compiler_command)

    project = _make_project(project_dir, settings, compiler)
    _run(project, settings.compile_task, settings.descriptors_task)

    if isinstance(compiler, RecordingCompiler):
        for sources, extra_args in compiler.invocations:
            echo(join(compiler.command_line(sources, extra_args)))


if __name__ == '__main__':
    cli()
