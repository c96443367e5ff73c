"""Script compiler invocation.

The compiler itself is an external tool. It is consumed through the
`Compiler` protocol: compile these sources with these extra arguments.
"""

import logging
import subprocess  # noqa: S404
from shlex import join
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


class Compiler(Protocol):
    """Toolchain able to compile script and wrapper sources."""

    def compile(self, sources: 'Sequence[Path]', extra_args: 'Sequence[str]') -> None:
        """Compile sources.

        Args:
            sources: Source files to compile.
            extra_args: Additional compiler arguments.
        """
        ...  # pragma: no cover


class CommandCompiler:
    """Compiler running an external command line.

    The command is invoked as `<command> <extra args> <sources>`; a
    non-zero exit status raises `subprocess.CalledProcessError`.
    """

    def __init__(self, command: 'Sequence[str]') -> None:
        """Initialize the compiler.

        Args:
            command: Command line prefix, for example `('kotlinc',)`.
        """
        self.command = tuple(command)

    def command_line(self, sources: 'Sequence[Path]', extra_args: 'Sequence[str]') -> list[str]:
        """Build the full command line for a compilation."""
        return [*self.command, *extra_args, *(str(path) for path in sources)]

    def compile(self, sources: 'Sequence[Path]', extra_args: 'Sequence[str]') -> None:
        """Run the compiler command.

        Raises:
            subprocess.CalledProcessError: If the compiler fails.
            OSError: If the command cannot be started.
        """
        args = self.command_line(sources, extra_args)
        logger.debug('Running compiler: %s', join(args))

        subprocess.run(args, check=True)  # noqa: S603


class RecordingCompiler(CommandCompiler):
    """Compiler recording invocations instead of running them."""

    def __init__(self, command: 'Sequence[str]' = ('kotlinc',)) -> None:
        """Initialize the recorder.

        Args:
            command: Command line prefix used to render invocations.
        """
        super().__init__(command)

        self.invocations: list[tuple[tuple[Path, ...], tuple[str, ...]]] = []

    def compile(self, sources: 'Sequence[Path]', extra_args: 'Sequence[str]') -> None:
        """Record a compilation."""
        self.invocations.append((tuple(sources), tuple(extra_args)))
