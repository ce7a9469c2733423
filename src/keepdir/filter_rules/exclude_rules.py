"""Exclude rules matching directories by exact path."""

import os
import sys
from typing import FrozenSet, Iterable, Optional, Set

from keepdir.command_runner import CommandRunner
from keepdir.types import PathType

from .base_rules import BaseFilterRules


def normalize_path(path: PathType, base: Optional[PathType] = None) -> str:
    """Normalize a path for exclusion matching.

    Relative paths are taken relative to ``base`` (the current working directory by
    default); absolute paths are used as-is. The result is lexically normalized but
    symlinks are not resolved.

    Args:
        path: The path to normalize.
        base: Directory that relative paths are relative to.

    Returns:
        The absolute, normalized path as a string.

    Example:
        >>> normalize_path("a/./b/../c", "/root")
        '/root/a/c'
        >>> normalize_path("/x/y/", "/root")
        '/x/y'
    """
    path = os.fspath(path)
    if not os.path.isabs(path):
        path = os.path.join(os.fspath(base) if base is not None else os.getcwd(), path)
    return os.path.normpath(path)


class ExcludeRules(BaseFilterRules):
    """Set of directory paths to skip, typically produced by an external command.

    Each path is resolved relative to the current working directory when it is
    added, not relative to the directory being visited. A directory matches only
    if its normalized path is exactly in the set; there is no prefix or pattern
    matching. Matching a directory skips it and everything below it, because the
    walk never descends into it.

    Attributes:
        paths (FrozenSet[str]): The normalized paths.

    Example:
        >>> rules = ExcludeRules(base="/work")
        >>> rules.add_rule("a/b")
        >>> rules.matches("b", "a/b")
        True
        >>> rules.matches("b", "/work/a/b")
        True
        >>> rules.matches("c", "a/b/c")
        False
    """

    def __init__(self, paths: Iterable[PathType] = (), base: Optional[PathType] = None) -> None:
        """Initialize exclude rules.

        Args:
            paths: Initial paths to exclude.
            base: Directory that relative paths are resolved against, both for the
                excluded paths and for the paths being checked. Defaults to the
                current working directory at the time of each call.
        """
        self._base = base
        self._paths: Set[str] = set()
        for path in paths:
            self.add_rule(os.fspath(path))

    @property
    def paths(self) -> FrozenSet[str]:
        return frozenset(self._paths)

    def add_rule(self, rule: str) -> None:
        """Add a single path to the exclude set. Empty strings are ignored."""
        if rule:
            self._paths.add(normalize_path(rule, self._base))

    def load_command_output(self, command: str, runner: CommandRunner) -> None:
        """Run a command and add each line of its standard output as a path.

        The command is run exactly once. A non-zero exit status produces a warning
        on stderr, but any paths it printed are still used.

        Args:
            command: Shell command line whose output lists paths, one per line.
            runner: Capability used to run the command.
        """
        result = runner.run(command)
        if result.returncode != 0:
            print(f"Warning: exclude command {command!r} exited with status {result.returncode}", file=sys.stderr)
        for line in result.lines:
            self.add_rule(line.rstrip("\r\n"))

    def has_rules(self) -> bool:
        return bool(self._paths)

    def matches(self, name: str, path: str) -> bool:
        if not self._paths:
            return False
        return normalize_path(path, self._base) in self._paths
