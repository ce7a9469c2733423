"""Shell command execution for exclude commands and hooks.

The reconciliation core never spawns processes itself. It is handed a
:class:`CommandRunner`, whose only capability is to run a command line and return
its standard output lines and exit status. :class:`ShellCommandRunner` is the real
implementation; tests substitute a fake.
"""

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CommandResult:
    """Captured result of a command.

    Attributes:
        lines: Standard output split into lines, each keeping its line ending so the
            output can be reproduced verbatim.
        returncode: The command's exit status.
    """

    lines: Tuple[str, ...]
    returncode: int

    @property
    def output(self) -> str:
        return "".join(self.lines)


class CommandRunner(ABC):
    """Capability interface for running shell command lines."""

    @abstractmethod
    def run(self, command: str) -> CommandResult:
        """Run a command line to completion.

        Args:
            command: The command line, interpreted by the shell.

        Returns:
            The captured standard output and exit status.
        """
        pass


class ShellCommandRunner(CommandRunner):
    """Run commands through the system shell, one at a time.

    Standard input is connected to the null device so a command can never consume
    input meant for interactive confirmation. Standard error is inherited.
    Output is decoded as UTF-8 with ``surrogateescape`` so arbitrary bytes (e.g.,
    undecodable file names) survive the round trip back to stdout.

    Example:
        >>> ShellCommandRunner().run("echo hello")  # doctest: +SKIP
        CommandResult(lines=('hello\\n',), returncode=0)
    """

    def run(self, command: str) -> CommandResult:
        completed = subprocess.run(
            command,
            shell=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            encoding="utf-8",
            errors="surrogateescape",
        )
        return CommandResult(tuple(completed.stdout.splitlines(keepends=True)), completed.returncode)
