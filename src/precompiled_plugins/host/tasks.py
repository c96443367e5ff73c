"""In-process task graph.

A minimal build task model: named tasks with actions, declared inputs
and outputs, and explicit precedence between tasks. Execution follows
the dependency order; a failing action aborts the run and is reported
as a task failure with the original error attached.
"""

import logging
from typing import TYPE_CHECKING

from precompiled_plugins.errors import TaskExecutionError, TaskGraphError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from .compiler import Compiler

logger = logging.getLogger(__name__)

#: Callable executed by a task, receives the task itself.
type TaskAction = Callable[['Task'], None]

#: Source file suffixes consumed by the compile task.
COMPILE_SUFFIXES = ('.kt', '.kts')


class Task:
    """Named unit of build work.

    Inputs and outputs are declarations only: they describe the task
    for incremental build tooling and are not enforced here.
    """

    def __init__(self, name: str, *, description: str | None = None) -> None:
        """Initialize a task.

        Args:
            name: Unique task name.
            description: Optional human-readable description.
        """
        self.name = name
        self.description = description

        self.actions: list[TaskAction] = []
        self.inputs: list[Path] = []
        self.outputs: list[Path] = []
        self.dependencies: list[str] = []

    def __repr__(self) -> str:
        """String representation."""
        return f'<{type(self).__name__} {self.name!r}>'

    def do_last(self, action: TaskAction) -> None:
        """Append an action to the task."""
        self.actions.append(action)

    def depends_on(self, *names: str) -> None:
        """Declare tasks that must run before this one."""
        for name in names:
            if name not in self.dependencies:
                self.dependencies.append(name)

    def declare_inputs(self, files: 'Iterable[Path]') -> None:
        """Declare files read by the task."""
        self.inputs.extend(files)

    def declare_outputs(self, directory: 'Path') -> None:
        """Declare a directory written by the task."""
        self.outputs.append(directory)

    def execute(self) -> None:
        """Run all task actions in order."""
        for action in self.actions:
            action(self)


class CompileTask(Task):
    """Task compiling all sources found in its source directories.

    Extra compiler arguments are collected in `free_compiler_args` and
    passed to the compiler as is.
    """

    def __init__(self, name: str, *, compiler: 'Compiler',
                 description: str | None = None) -> None:
        """Initialize a compile task.

        Args:
            name: Unique task name.
            compiler: Compiler used by the task action.
            description: Optional human-readable description.
        """
        super().__init__(name, description=description)

        self.compiler = compiler
        self.source_dirs: list[Path] = []
        self.free_compiler_args: list[str] = []

        self.do_last(CompileTask.compile)

    def sources(self) -> list['Path']:
        """Collect source files from all source directories.

        Returns:
            Sorted list of source files; missing directories are skipped.
        """
        return sorted(
            path
            for directory in self.source_dirs
            if directory.is_dir()
            for path in directory.rglob('*')
            if path.is_file() and path.name.endswith(COMPILE_SUFFIXES)
        )

    def compile(self) -> None:
        """Invoke the compiler with collected sources and arguments."""
        self.compiler.compile(self.sources(), list(self.free_compiler_args))


class TaskGraph:
    """Registry of tasks and their precedence."""

    def __init__(self) -> None:
        """Initialize an empty task graph."""
        self.tasks: dict[str, Task] = {}

    def __contains__(self, name: object) -> bool:
        """Check whether a task is registered."""
        return name in self.tasks

    def register[T: Task](self, task: T) -> T:
        """Register a task.

        Args:
            task: Task to register.

        Returns:
            The registered task.

        Raises:
            TaskGraphError: If a task with the same name exists.
        """
        if task.name in self.tasks:
            raise TaskGraphError(f'Task {task.name!r} is already registered')

        self.tasks[task.name] = task

        return task

    def create(self, name: str, *, description: str | None = None) -> Task:
        """Create and register a plain task."""
        return self.register(Task(name, description=description))

    def get(self, name: str) -> Task:
        """Return a registered task.

        Raises:
            TaskGraphError: If the task is unknown.
        """
        try:
            return self.tasks[name]

        except KeyError:
            raise TaskGraphError(f'Task {name!r} not found') from None

    def insert_before(self, name: str, task: Task) -> None:
        """Make a registered task run before another one.

        Args:
            name: Name of the task that must wait.
            task: Task that must run first.

        Raises:
            TaskGraphError: If any of the tasks is unknown.
        """
        self.get(task.name)
        self.get(name).depends_on(task.name)

    def execution_order(self, *names: str) -> list[Task]:
        """Resolve requested tasks with all their dependencies.

        Args:
            names: Requested task names; all tasks when empty.

        Returns:
            Tasks in an order where each task follows its dependencies.

        Raises:
            TaskGraphError: If a task is unknown or a cycle is found.
        """
        order: list[Task] = []
        visiting: list[str] = []
        done: set[str] = set()

        def visit(name: str) -> None:
            if name in done:
                return
            if name in visiting:
                cycle = ' -> '.join((*visiting[visiting.index(name):], name))
                raise TaskGraphError(f'Circular dependency between tasks: {cycle}')

            task = self.get(name)
            visiting.append(name)
            for dependency in task.dependencies:
                visit(dependency)
            visiting.pop()

            done.add(name)
            order.append(task)

        for name in names or tuple(self.tasks):
            visit(name)

        return order

    def run(self, *names: str) -> list[Task]:
        """Execute requested tasks and their dependencies.

        Args:
            names: Requested task names; all tasks when empty.

        Returns:
            Executed tasks in execution order.

        Raises:
            TaskGraphError: If the graph is inconsistent.
            TaskExecutionError: If a task action fails. The original
                exception is chained as the cause.
        """
        order = self.execution_order(*names)

        for task in order:
            logger.info('> Task :%s', task.name)
            try:
                task.execute()

            except Exception as base:
                raise TaskExecutionError(
                    f'Execution failed for task {task.name!r}: {base}',
                    task=task.name,
                ) from base

        return order
