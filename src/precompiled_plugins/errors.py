"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report plugin declaration conflicts, task graph misconfiguration and
task execution failures in a structured and extensible way.
"""

from os import linesep
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from typing import Self

FORMAT_FILENAME = '<unknown file>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source file associated with the error.
    filename: str | None

    #: Name of the build task where the error occurred.
    task: str | None

    #: Plugin identifier involved in the error.
    plugin_id: str | None


class ErrorFormatter:
    """Utility class for formatting plugin-related errors.

    This formatter is responsible for producing human-readable
    error messages with optional source and task location.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        location = cls.get_location_string(context, indent=FORMAT_INDENT)
        if not location:
            return message

        return f'{message}{linesep}{location}'

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source and task location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename, task
            and plugin identifier when available.
        """
        indent = cls._ensure_indent(indent)
        lines = []

        if (filename := context.get('filename')) is not None:
            lines.append(f'{indent}in "{filename or FORMAT_FILENAME}"')

        if task := context.get('task'):
            lines.append(f'{indent}on task {task!r}')

        if plugin_id := context.get('plugin_id'):
            lines.append(f'{indent}for plugin {plugin_id!r}')

        return linesep.join(lines)

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input.

        Args:
            indent: Indentation as string or number of spaces.

        Returns:
            A string consisting of spaces or the provided string.
        """
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class PluginWarning(UserWarning):
    """Warning emitted for non-fatal script plugin issues.

    This warning is used when a discovered script or a configured
    location looks suspicious but does not prevent the build from
    continuing (for example, a missing script root).
    """


class PluginsError(Exception, ErrorFormatter):
    """Base exception for all precompiled-plugins errors.

    All custom exceptions raised by the library should inherit from
    this class to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location values.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class PluginDeclarationError(PluginsError):
    """Error raised when a plugin declaration is rejected.

    The descriptor store raises this error for duplicate plugin
    identifiers and for declarations that fail validation.
    """

    @classmethod
    def duplicate(cls, plugin_id: str, implementation_class: str,
                  existing_class: str) -> 'Self':
        """Create an error for a plugin identifier declared twice.

        Args:
            plugin_id: Conflicting plugin identifier.
            implementation_class: Class of the rejected declaration.
            existing_class: Class of the already registered declaration.

        Returns:
            PluginDeclarationError describing the conflict.
        """
        return cls(
            f'Plugin {plugin_id!r} ({implementation_class}) is already '
            f'declared by {existing_class}',
            context=ErrorContext(plugin_id=plugin_id),
        )


class TaskGraphError(PluginsError):
    """Error raised for an inconsistent task graph.

    This exception indicates unknown task references, duplicated
    task names or dependency cycles.
    """


class TaskExecutionError(PluginsError):
    """Error raised when a task action fails.

    The original exception is always chained as the cause, so callers
    can inspect the underlying failure unchanged.
    """

    def __init__(self, message: str, *, task: str) -> None:
        """Initialize a task failure.

        Args:
            message: Human-readable error description.
            task: Name of the failed task.
        """
        self.task = task

        super().__init__(message, context=ErrorContext(task=task))


class SettingsError(PluginsError):
    """Error raised for a configuration file with unexpected contents.

    Invalid values are reported by settings validation; this error
    covers files whose top level is not a mapping of settings.
    """
