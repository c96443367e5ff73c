"""Build host model.

The build host (its task graph, its compiler and its plugin descriptor
store) is an external collaborator. This package defines the interfaces
consumed by script plugins together with a small in-process host used
by the command-line tools and the test suite.
"""

from .compiler import CommandCompiler, Compiler, RecordingCompiler
from .descriptors import PluginDeclaration, PluginDeclarations
from .imports import ImplicitImports
from .project import Project
from .tasks import CompileTask, Task, TaskGraph

__all__ = (
    'CommandCompiler',
    'CompileTask',
    'Compiler',
    'ImplicitImports',
    'PluginDeclaration',
    'PluginDeclarations',
    'Project',
    'RecordingCompiler',
    'Task',
    'TaskGraph',
)
