"""Execution of planned keepfile actions.

This module applies create/delete actions to the filesystem (or only reports
them in dry-run mode), asks for confirmation in interactive mode, and runs the
configured hook commands after each accepted action.
"""

import os
import shlex
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from keepdir.command_runner import CommandRunner
from keepdir.exceptions import ConfirmationAborted, KeepfileActionError
from keepdir.io.line_source import LineSource
from keepdir.planner import ActionRecord
from keepdir.tree_walker.permission_action import PermissionAction
from keepdir.types import ActionKind, OutputWriter, PathType

ACCEPT_ANSWERS = ("y", "Y")


def resolve_keepfile_path(path: PathType) -> Path:
    """Return the absolute, symlink-free form of a keepfile path.

    Only the containing directory is resolved; the keepfile name is kept as-is so
    that a keepfile which is itself a symlink is reported (and removed) as the link.

    Example:
        >>> resolve_keepfile_path("/usr/../usr/.keep").as_posix()  # doctest: +SKIP
        '/usr/.keep'
    """
    path = Path(path)
    return Path(os.path.realpath(path.parent)) / path.name


def build_hook_command(template: str, path: PathType, replace_token: Optional[str] = None) -> str:
    """Build a hook command line for a keepfile path.

    With a replace token, only its first occurrence in the template is replaced by
    the path, verbatim. Without one, the path is appended as a separate,
    shell-quoted argument.

    Args:
        template: The hook command template.
        path: The resolved keepfile path.
        replace_token: Token to substitute, or None.

    Returns:
        The command line to run.

    Example:
        >>> build_hook_command("echo %%+%", "/t/a/.keep", "%")
        'echo /t/a/.keep%+%'
        >>> build_hook_command("echo +", "/t/a/.keep")
        'echo + /t/a/.keep'
        >>> build_hook_command("echo", "/t/my dir/.keep")
        "echo '/t/my dir/.keep'"
    """
    if replace_token:
        return template.replace(replace_token, os.fspath(path), 1)
    return f"{template} {shlex.quote(os.fspath(path))}"


class ActionExecutor:
    """Apply planned actions one at a time, in the order they are given.

    For each action the executor:

    1. In interactive mode, writes the prompt ``"<kind> <path>? "`` (no newline)
       and reads one answer. Only ``y`` or ``Y`` (surrounding whitespace ignored)
       accepts. Any other answer, or end of input, raises ConfirmationAborted and
       no further action is attempted.
    2. Writes ``"<kind> <path>"`` unless quiet.
    3. Creates or removes the keepfile unless in dry-run mode.
    4. Runs the hooks for the action kind in the order they were configured,
       including in dry-run mode, copying their standard output through verbatim.
       Quiet mode doesn't affect hook output.

    All reported and substituted paths are absolute and symlink-free.

    Attributes:
        writer (OutputWriter): Destination for reports, prompts and hook output.
        runner (CommandRunner): Capability used to run hooks.
        hooks (Dict[ActionKind, Tuple[str, ...]]): Hook templates per action kind.
        replace_token (Optional[str]): Token replaced by the path in hook templates.
        dry_run (bool): If True, leave the filesystem untouched.
        quiet (bool): If True, don't write report lines.
        interactive (bool): If True, ask before each action.
        line_source (Optional[LineSource]): Source of confirmation answers.
        permission_action (PermissionAction): How to handle failed create/delete.
        created_count (int): Number of create actions carried out.
        deleted_count (int): Number of delete actions carried out.
    """

    def __init__(
        self,
        writer: OutputWriter,
        runner: CommandRunner,
        *,
        create_hooks: Sequence[str] = (),
        delete_hooks: Sequence[str] = (),
        replace_token: Optional[str] = None,
        dry_run: bool = False,
        quiet: bool = False,
        interactive: bool = False,
        line_source: Optional[LineSource] = None,
        permission_action: PermissionAction = PermissionAction.WARN,
    ) -> None:
        """Initialize the executor.

        Raises:
            ValueError: If interactive is set without a line source, or the replace
                token is empty.
        """
        if interactive and line_source is None:
            raise ValueError("interactive mode requires a line source")
        if replace_token is not None and not replace_token:
            raise ValueError("replace token must not be empty")

        self.writer = writer
        self.runner = runner
        self.hooks: Dict[ActionKind, Tuple[str, ...]] = {
            ActionKind.CREATE: tuple(create_hooks),
            ActionKind.DELETE: tuple(delete_hooks),
        }
        self.replace_token = replace_token
        self.dry_run = dry_run
        self.quiet = quiet
        self.interactive = interactive
        self.line_source = line_source
        self.permission_action = permission_action
        self.created_count = 0
        self.deleted_count = 0

    def execute(self, action: ActionRecord) -> bool:
        """Carry out a single action.

        Args:
            action: The planned action.

        Returns:
            True if the action was carried out (or, in dry-run mode, would have
            been), False if applying it failed and the failure was ignored.

        Raises:
            ConfirmationAborted: If interactive confirmation ends the run.
            KeepfileActionError: If applying the action fails and permission_action
                is RAISE.
        """
        path = resolve_keepfile_path(action.path)

        if self.interactive:
            self._confirm(action.kind, path)

        if not self.quiet:
            self.writer.write(f"{action.kind.value} {path}\n")

        if not self.dry_run:
            try:
                self._apply(action.kind, path)
            except KeepfileActionError as e:
                if self.permission_action == PermissionAction.RAISE:
                    raise
                if self.permission_action == PermissionAction.WARN:
                    print(f"Warning: {e}", file=sys.stderr)
                return False

        if action.kind == ActionKind.CREATE:
            self.created_count += 1
        else:
            self.deleted_count += 1

        self._run_hooks(action.kind, path)
        return True

    def _confirm(self, kind: ActionKind, path: Path) -> None:
        assert self.line_source is not None
        self.writer.write(f"{kind.value} {path}? ")
        answer = self.line_source.read_line()
        if answer is None:
            raise ConfirmationAborted(end_of_input=True)
        if answer.strip() not in ACCEPT_ANSWERS:
            raise ConfirmationAborted(end_of_input=False)

    def _apply(self, kind: ActionKind, path: Path) -> None:
        try:
            if kind == ActionKind.CREATE:
                path.touch(exist_ok=True)
            else:
                path.unlink()
        except OSError as e:
            raise KeepfileActionError(kind.value, path, e.strerror or str(e)) from e

    def _run_hooks(self, kind: ActionKind, path: Path) -> None:
        for template in self.hooks[kind]:
            command = build_hook_command(template, path, self.replace_token)
            result = self.runner.run(command)
            for line in result.lines:
                self.writer.write(line)
            if result.returncode != 0:
                print(f"Warning: hook {command!r} exited with status {result.returncode}", file=sys.stderr)
