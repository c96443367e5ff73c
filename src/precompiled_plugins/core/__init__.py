"""Script plugin derivation and wrapper generation.

This package implements the core of precompiled script plugins:

- a shallow tokenizer and package declaration scanner;
- immutable script plugin descriptors with lazily derived names;
- rendering and writing of plugin wrapper sources.

Nothing here knows about the build host; wiring into a task graph
lives in `precompiled_plugins.pipeline`.
"""

from .descriptor import ScriptPlugin
from .scanner import package_name_of, package_name_of_file
from .wrappers import render_wrapper, write_wrapper

__all__ = (
    'ScriptPlugin',
    'package_name_of',
    'package_name_of_file',
    'render_wrapper',
    'write_wrapper',
)
