"""Immutable run configuration.

Command-line options that depend on their order (``--prune``/``--no-prune``,
repeated ``--replace``, hooks) are resolved while parsing. The result is folded
into a frozen :class:`KeepdirConfig` before the walk starts, and nothing about
it changes during the walk.
"""

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from keepdir.command_runner import CommandRunner
from keepdir.exceptions import ReplaceTokenError
from keepdir.filter_rules.exclude_rules import ExcludeRules
from keepdir.filter_rules.path_filter import PathFilter
from keepdir.filter_rules.prune_rules import PruneRules
from keepdir.tree_walker.permission_action import PermissionAction
from keepdir.types import DEFAULT_KEEPFILE_NAME, DEFAULT_PRUNE_NAMES, Mode, PathType

PERMISSION_ACTIONS = {
    "ignore": PermissionAction.IGNORE,
    "warn": PermissionAction.WARN,
    "fail": PermissionAction.RAISE,
}


def validate_keepfile_name(name: str) -> str:
    """Check that a keepfile name is a plain basename.

    Raises:
        ValueError: If the name is empty, a dot entry, or contains a path separator.

    Example:
        >>> validate_keepfile_name(".gitkeep")
        '.gitkeep'
    """
    if not name or name in (".", "..") or os.sep in name or (os.altsep and os.altsep in name):
        raise ValueError(f"invalid keepfile name: {name!r}")
    return name


@dataclass(frozen=True)
class KeepdirConfig:
    """Settings for one reconciliation run.

    Attributes:
        keepfile_name: Name of the marker file.
        mode: UPDATE to reconcile, PURGE to delete every keepfile.
        dry_run: Report and run hooks, but leave the filesystem untouched.
        quiet: Don't write the per-action report line.
        interactive: Ask for confirmation before each action.
        prune_names: Directory basenames never descended into, in order.
        exclude_commands: Shell commands whose output lists paths to exclude.
        replace_token: Token replaced by the keepfile path in hook templates.
        create_hooks: Commands run after each create, in order.
        delete_hooks: Commands run after each delete, in order.
        permission_action: How to handle filesystem errors.
    """

    keepfile_name: str = DEFAULT_KEEPFILE_NAME
    mode: Mode = Mode.UPDATE
    dry_run: bool = False
    quiet: bool = False
    interactive: bool = False
    prune_names: Tuple[str, ...] = DEFAULT_PRUNE_NAMES
    exclude_commands: Tuple[str, ...] = ()
    replace_token: Optional[str] = None
    create_hooks: Tuple[str, ...] = ()
    delete_hooks: Tuple[str, ...] = ()
    permission_action: PermissionAction = PermissionAction.WARN

    def __post_init__(self) -> None:
        validate_keepfile_name(self.keepfile_name)
        if self.replace_token is not None and not self.replace_token:
            raise ReplaceTokenError(self.replace_token)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "KeepdirConfig":
        """Fold parsed command-line arguments into a configuration.

        Args:
            args: Namespace produced by the keepdir argument parser.

        Returns:
            The frozen configuration.
        """
        return cls(
            keepfile_name=args.keepfile,
            mode=Mode(args.mode),
            dry_run=args.dry_run,
            quiet=args.quiet,
            interactive=args.interactive,
            prune_names=tuple(args.prune),
            exclude_commands=tuple(args.exclude or ()),
            replace_token=args.replace,
            create_hooks=tuple(args.create_hook or ()),
            delete_hooks=tuple(args.delete_hook or ()),
            permission_action=PERMISSION_ACTIONS[args.permission_action],
        )

    def build_path_filter(self, runner: CommandRunner, base: Optional[PathType] = None) -> PathFilter:
        """Build the path filter, running each exclude command once.

        Args:
            runner: Capability used to run the exclude commands.
            base: Directory that excluded paths are relative to. Defaults to the
                current working directory.

        Returns:
            A PathFilter with this configuration's prune and exclude rules.
        """
        exclude_rules = ExcludeRules(base=base)
        for command in self.exclude_commands:
            exclude_rules.load_command_output(command, runner)
        return PathFilter(PruneRules(self.prune_names), exclude_rules)
