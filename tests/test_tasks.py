"""Tests for the in-process task graph."""

from pathlib import Path

import pytest

from precompiled_plugins.errors import TaskExecutionError, TaskGraphError
from precompiled_plugins.host import CompileTask, RecordingCompiler, Task, TaskGraph


@pytest.fixture
def graph() -> TaskGraph:
    """Provide a graph of three independent tasks."""
    graph = TaskGraph()
    for name in ('compile', 'generate', 'publish'):
        graph.create(name)

    return graph


def test_insert_before(graph: TaskGraph) -> None:
    """An inserted task runs before the target task."""
    graph.insert_before('compile', graph.get('generate'))

    order = [task.name for task in graph.execution_order('compile')]

    assert order == ['generate', 'compile']


def test_execution_order_of_all_tasks(graph: TaskGraph) -> None:
    """Without names every task is scheduled once."""
    graph.insert_before('compile', graph.get('generate'))
    graph.insert_before('publish', graph.get('compile'))

    order = [task.name for task in graph.execution_order()]

    assert order == ['generate', 'compile', 'publish']


def test_transitive_dependencies(graph: TaskGraph) -> None:
    """Dependencies of dependencies run first."""
    graph.get('publish').depends_on('compile')
    graph.get('compile').depends_on('generate')

    order = [task.name for task in graph.execution_order('publish')]

    assert order == ['generate', 'compile', 'publish']


def test_depends_on_ignores_duplicates(graph: TaskGraph) -> None:
    """Declaring the same dependency twice keeps one edge."""
    task = graph.get('compile')
    task.depends_on('generate', 'generate')
    task.depends_on('generate')

    assert task.dependencies == ['generate']


def test_unknown_task(graph: TaskGraph) -> None:
    """Unknown task names are rejected."""
    with pytest.raises(TaskGraphError, match=r"^Task 'missing' not found"):
        graph.get('missing')

    with pytest.raises(TaskGraphError, match=r"^Task 'missing' not found"):
        graph.insert_before('missing', graph.get('compile'))

    with pytest.raises(TaskGraphError, match=r"^Task 'other' not found"):
        graph.insert_before('compile', Task('other'))


def test_duplicate_task(graph: TaskGraph) -> None:
    """Task names are unique."""
    with pytest.raises(TaskGraphError, match=r'already registered$'):
        graph.create('compile')


def test_cycle_detection(graph: TaskGraph) -> None:
    """Circular dependencies are reported."""
    graph.get('compile').depends_on('generate')
    graph.get('generate').depends_on('compile')

    with pytest.raises(TaskGraphError, match=r'compile -> generate -> compile$'):
        graph.execution_order('compile')


def test_run_executes_actions_in_order(graph: TaskGraph) -> None:
    """Actions run in dependency order, each receiving its task."""
    calls = []
    for task in graph.tasks.values():
        task.do_last(lambda current: calls.append(current.name))
    graph.insert_before('compile', graph.get('generate'))

    executed = graph.run('compile')

    assert calls == ['generate', 'compile']
    assert [task.name for task in executed] == calls


def test_run_reports_failures(graph: TaskGraph) -> None:
    """A failing action aborts the run with the original cause."""
    calls = []
    error = OSError('disk full')

    def fail(_: Task) -> None:
        raise error

    graph.get('generate').do_last(fail)
    graph.get('compile').do_last(lambda _: calls.append('compile'))
    graph.insert_before('compile', graph.get('generate'))

    with pytest.raises(TaskExecutionError, match=r"^Execution failed for task 'generate'") as info:
        graph.run('compile')

    assert info.value.task == 'generate'
    assert info.value.__cause__ is error
    assert calls == []


def test_declared_inputs_and_outputs() -> None:
    """Inputs and outputs are recorded as declared."""
    task = Task('generate')
    task.declare_inputs([Path('a.gradle.kts'), Path('b.gradle.kts')])
    task.declare_outputs(Path('build/generated'))

    assert task.inputs == [Path('a.gradle.kts'), Path('b.gradle.kts')]
    assert task.outputs == [Path('build/generated')]


def test_compile_task(tmp_path: Path) -> None:
    """Compile sources of every existing source directory."""
    sources = tmp_path / 'src'
    generated = tmp_path / 'generated'
    (sources / 'nested').mkdir(parents=True)
    generated.mkdir()

    (sources / 'nested' / 'b.gradle.kts').touch()
    (sources / 'notes.txt').touch()
    (generated / 'A.kt').touch()

    compiler = RecordingCompiler()
    task = CompileTask('compile', compiler=compiler)
    task.source_dirs.extend([sources, generated, tmp_path / 'missing'])
    task.free_compiler_args.append('-verbose')

    task.execute()

    assert compiler.invocations == [(
        (generated / 'A.kt', sources / 'nested' / 'b.gradle.kts'),
        ('-verbose',),
    )]
