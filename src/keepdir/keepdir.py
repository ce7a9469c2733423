"""Keepfile reconciliation of a directory tree.

This module wires the reconciliation pipeline together. Directories flow one
at a time, in a single pass, through:

    TreeWalker -> EmptinessClassifier -> ActionPlanner -> ActionExecutor

Each directory's action is executed before the walk lists the next directory,
so the filesystem is always consistent with the actions reported so far.
"""

from pathlib import Path
from typing import Iterator, Optional

from keepdir.classifier import EmptinessClassifier
from keepdir.command_runner import CommandRunner, ShellCommandRunner
from keepdir.config import KeepdirConfig
from keepdir.exceptions import ConfirmationAborted
from keepdir.executor import ActionExecutor
from keepdir.io.line_source import LineSource
from keepdir.planner import ActionPlanner, ActionRecord
from keepdir.tree_walker.tree_walker import TreeWalker
from keepdir.types import OutputWriter, PathType


class Keepdir:
    """Reconcile keepfiles below a start directory.

    Exclude commands are run once, when the object is created. The walk itself
    happens in :meth:`run` (or lazily through :meth:`plan`), and can only be done
    once per object.

    Attributes:
        directory (Path): The start directory.
        config (KeepdirConfig): The run configuration.
        aborted (bool): True if interactive confirmation ended the run early.
        end_of_input (bool): True if it ended because the confirmation input ran out.

    Example:
        >>> import sys
        >>> keepdir = Keepdir("project", writer=sys.stdout)  # doctest: +SKIP
        >>> keepdir.run()  # doctest: +SKIP
        create /home/user/project/a/b/c/.keep
        create /home/user/project/a/d/.keep
        >>> keepdir.created_count  # doctest: +SKIP
        2

    Raises:
        ValueError: If the start directory is not a directory.
    """

    def __init__(
        self,
        directory: PathType,
        config: Optional[KeepdirConfig] = None,
        *,
        writer: OutputWriter,
        runner: Optional[CommandRunner] = None,
        line_source: Optional[LineSource] = None,
    ) -> None:
        """Initialize a reconciliation run.

        Args:
            directory: Start directory. Its own keepfile state is never changed.
            config: Run configuration. Defaults to KeepdirConfig().
            writer: Destination for reports, prompts and hook output.
            runner: Capability for running exclude commands and hooks. Defaults to
                ShellCommandRunner.
            line_source: Source of confirmation answers; required for interactive
                configurations.

        Raises:
            ValueError: If the directory is invalid, or interactive mode is
                configured without a line source.
        """
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise ValueError(f"'{directory}' is not a valid directory")

        self.config = config if config is not None else KeepdirConfig()
        self._runner = runner if runner is not None else ShellCommandRunner()

        self._walker = TreeWalker(
            self.directory,
            self.config.build_path_filter(self._runner),
            keepfile_name=self.config.keepfile_name,
            permission_action=self.config.permission_action,
        )
        self._classifier = EmptinessClassifier()
        self._planner = ActionPlanner(self.config.mode, self.config.keepfile_name)
        self._executor = ActionExecutor(
            writer,
            self._runner,
            create_hooks=self.config.create_hooks,
            delete_hooks=self.config.delete_hooks,
            replace_token=self.config.replace_token,
            dry_run=self.config.dry_run,
            quiet=self.config.quiet,
            interactive=self.config.interactive,
            line_source=line_source,
            permission_action=self.config.permission_action,
        )

        self.aborted = False
        self.end_of_input = False
        self._visited_count = 0
        self._started = False

    def plan(self) -> Iterator[ActionRecord]:
        """Walk the tree and yield the planned action for each directory needing one.

        Actions are yielded in traversal order, and each directory's action is yielded
        before anything beneath it is listed.

        Raises:
            RuntimeError: If the walk has already been started.
        """
        if self._started:
            raise RuntimeError("Keepdir runs can only be performed once")
        self._started = True

        for node in self._walker:
            self._visited_count += 1
            action = self._planner.plan(node, self._classifier.classify(node))
            if action is not None:
                yield action

    def run(self) -> None:
        """Walk the tree and execute every planned action.

        The run stops early, without error, if interactive confirmation is declined
        or the confirmation input ends; ``aborted`` is set in that case.

        Raises:
            KeepfileActionError: If a keepfile can't be changed and the permission
                action is RAISE.
            OSError: If a directory can't be listed and the permission action is
                RAISE.
        """
        try:
            for action in self.plan():
                self._executor.execute(action)
        except ConfirmationAborted as e:
            self.aborted = True
            self.end_of_input = e.end_of_input

    @property
    def visited_count(self) -> int:
        """Number of directories visited so far, not counting the start directory."""
        return self._visited_count

    @property
    def pruned_count(self) -> int:
        """Number of subdirectories skipped by prune or exclude rules so far."""
        return self._walker.pruned_count

    @property
    def created_count(self) -> int:
        return self._executor.created_count

    @property
    def deleted_count(self) -> int:
        return self._executor.deleted_count
