"""In-process build project.

The project ties together the pieces a build host offers to plugins:
a task graph with a compile task and a descriptor-publishing task, a
plugin descriptor store, capability activation callbacks, and an
explicit evaluation phase after which late configuration is applied.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .descriptors import PluginDeclarations
from .tasks import CompileTask, TaskGraph

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .compiler import Compiler

logger = logging.getLogger(__name__)

#: Callable configuring a project.
type ProjectAction = Callable[['Project'], None]

DEFAULT_BUILD_DIR = 'build'
DEFAULT_SOURCE_DIRS = ('src/main/kotlin',)
DEFAULT_DESCRIPTORS_DIR = 'pluginDescriptors/META-INF/gradle-plugins'


class Project:
    """Build project hosting script plugins.

    Configuration happens in two phases. Actions registered through
    `with_capability` run while the project is configured; actions
    registered through `after_evaluate` run once `evaluate` is called,
    after all configuration contributions are known.
    """

    def __init__(self, project_dir: Path, build_dir: Path | None = None) -> None:
        """Initialize an empty project.

        Args:
            project_dir: Project root directory.
            build_dir: Build output directory; `build` under the
                project directory when omitted.
        """
        self.project_dir = project_dir
        self.build_dir = build_dir or project_dir / DEFAULT_BUILD_DIR

        self.tasks = TaskGraph()
        self.plugin_declarations = PluginDeclarations()

        self.capabilities: set[str] = set()
        self.evaluated = False

        self._capability_actions: dict[str, list[ProjectAction]] = {}
        self._after_evaluate: list[ProjectAction] = []

    @classmethod
    def create(cls, project_dir: Path, *, compiler: 'Compiler',  # noqa: PLR0913
               build_dir: Path | None = None,
               source_dirs: 'Iterable[str | Path]' = DEFAULT_SOURCE_DIRS,
               compile_task: str = 'compileKotlin',
               descriptors_task: str = 'pluginDescriptors',
               descriptors_dir: str | Path = DEFAULT_DESCRIPTORS_DIR) -> 'Project':
        """Create a project with the default compile and publishing tasks.

        Args:
            project_dir: Project root directory.
            compiler: Compiler used by the compile task.
            build_dir: Build output directory.
            source_dirs: Compile source directories, relative to the project.
            compile_task: Name of the compile task.
            descriptors_task: Name of the descriptor-publishing task.
            descriptors_dir: Published descriptors directory, relative
                to the build directory.

        Returns:
            Configured project.
        """
        project = cls(project_dir, build_dir)

        compile_ = project.tasks.register(CompileTask(
            compile_task,
            compiler=compiler,
            description='Compiles script and wrapper sources.',
        ))
        compile_.source_dirs.extend(project.project_dir / path for path in source_dirs)

        publish = project.tasks.create(
            descriptors_task,
            description='Publishes plugin descriptor files.',
        )
        output_dir = project.build_dir / descriptors_dir
        publish.declare_outputs(output_dir)
        publish.do_last(lambda _: project.plugin_declarations.publish(output_dir))

        return project

    def compile_task(self, name: str = 'compileKotlin') -> CompileTask:
        """Return a compile task by name.

        Raises:
            TypeError: If the task is not a compile task.
            TaskGraphError: If the task is unknown.
        """
        task = self.tasks.get(name)
        if not isinstance(task, CompileTask):
            raise TypeError(f'Task {name!r} is not a compile task')

        return task

    def file_tree(self, root: str | Path, pattern: str) -> list[Path]:
        """List files matching a glob pattern under a directory.

        Args:
            root: Directory relative to the project directory.
            pattern: Glob pattern, `**` matches nested directories.

        Returns:
            Sorted matching files; empty when the directory is missing.
        """
        directory = self.project_dir / root
        if not directory.is_dir():
            return []

        return sorted(path for path in directory.glob(pattern) if path.is_file())

    def with_capability(self, name: str, action: ProjectAction) -> None:
        """Run an action once a capability is applied.

        The action runs immediately when the capability is already
        applied.
        """
        if name in self.capabilities:
            action(self)
            return

        self._capability_actions.setdefault(name, []).append(action)

    def apply_capability(self, name: str) -> None:
        """Apply a capability and run actions waiting for it."""
        if name in self.capabilities:
            return

        logger.debug('Applying capability %r', name)
        self.capabilities.add(name)

        for action in self._capability_actions.pop(name, []):
            action(self)

    def after_evaluate(self, action: ProjectAction) -> None:
        """Run an action when the project configuration is complete.

        The action runs immediately when the project is already evaluated.
        """
        if self.evaluated:
            action(self)
            return

        self._after_evaluate.append(action)

    def evaluate(self) -> None:
        """Finish configuration and run after-evaluate actions.

        Calling this method again has no effect.
        """
        if self.evaluated:
            return

        self.evaluated = True

        actions, self._after_evaluate = self._after_evaluate, []
        for action in actions:
            action(self)
