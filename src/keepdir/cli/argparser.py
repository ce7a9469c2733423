"""Command-line argument parsing for keepdir.

This module defines the command-line interface for keepdir, handling argument
parsing and the validation of order-dependent options.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from keepdir import __version__
from keepdir.config import validate_keepfile_name
from keepdir.exceptions import ReplaceTokenError
from keepdir.types import DEFAULT_KEEPFILE_NAME, DEFAULT_PRUNE_NAMES, Mode


class PruneAction(argparse.Action):
    """Action to update the prune list as arguments are processed.

    ``--prune NAME`` appends a basename and ``--no-prune`` empties the list. Since
    both options are applied at the point they appear on the command line,
    ``--no-prune`` discards earlier ``--prune`` names but not later ones.

    The list in the namespace is replaced rather than mutated, so the parser's
    default is never modified.
    """

    def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        if option_string == "--no-prune":
            setattr(namespace, self.dest, [])
            return

        name = str(values)
        if not name:
            raise argparse.ArgumentError(self, "prune name must not be empty")
        names = list(getattr(namespace, self.dest, None) or ())
        if name not in names:
            names.append(name)
        setattr(namespace, self.dest, names)


class ReplaceAction(argparse.Action):
    """Action to set the hook replace token.

    The token may be repeated with the same value, which has no effect. An empty
    token, or a token different from one given earlier, is a usage error.
    """

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        token = str(values)
        previous = getattr(namespace, self.dest, None)
        try:
            if not token:
                raise ReplaceTokenError(token)
            if previous is not None and previous != token:
                raise ReplaceTokenError(token, previous)
        except ReplaceTokenError as e:
            raise argparse.ArgumentError(self, str(e))
        setattr(namespace, self.dest, token)


def keepfile_name(value: str) -> str:
    """Argument type for --keepfile."""
    try:
        return validate_keepfile_name(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with keepdir's options.
    """
    description = """
    keepdir: Keep empty directories representable in tools that only track files.

    keepdir walks a directory tree and makes sure that every directory with no
    other entries holds a single empty keepfile (".keep" by default), and that no
    other directory does. The start directory itself is never changed.

    Each create or delete is reported as "create PATH" or "delete PATH", using the
    absolute, symlink-free path of the keepfile. Hook commands can be run after
    each change; the keepfile path is appended to the command, or substituted for
    the first occurrence of the --replace token.
    """

    epilog = f"""
    Examples:
      # Create and delete keepfiles below the current directory
      keepdir

      # Show what would change without touching anything
      keepdir --dry-run /path/to/project

      # Remove every keepfile
      keepdir --purge /path/to/project

      # Stage changes in git as they are made
      keepdir --create-hook="git add" --delete-hook="git rm --cached -q"

      # Substitute the path explicitly
      keepdir --replace=% --create-hook="echo created % >> keep.log"

      # Also descend into .git, but not into node_modules
      keepdir --no-prune --prune=node_modules

      # Skip directories listed by a command, one path per line
      keepdir --exclude="git ls-files --others --directory --ignored --exclude-standard"

      # Confirm each change
      keepdir --interactive

    Defaults: keepfile name "{DEFAULT_KEEPFILE_NAME}", pruned names {", ".join(DEFAULT_PRUNE_NAMES)}.
    """

    parser = argparse.ArgumentParser(
        prog="keepdir",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"keepdir {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("."),
        help="The directory to start from (default: the current directory).",
    )

    mode = parser.add_argument_group("mode")
    mode.add_argument(
        "--update",
        dest="mode",
        action="store_const",
        const=Mode.UPDATE.value,
        default=Mode.UPDATE.value,
        help="Create keepfiles in empty directories and delete them elsewhere (default).",
    )
    mode.add_argument(
        "--purge",
        dest="mode",
        action="store_const",
        const=Mode.PURGE.value,
        help="Delete every keepfile, whether or not its directory is empty.",
    )

    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Report changes and run hooks, but don't create or delete anything.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Don't report changes. Hook output is still shown.",
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help=(
            "Ask before each change. Only 'y' or 'Y' accepts; any other answer, or end of input, "
            "stops the run."
        ),
    )
    parser.add_argument(
        "--keepfile",
        type=keepfile_name,
        metavar="NAME",
        default=DEFAULT_KEEPFILE_NAME,
        help=f"Name of the keepfile (default: {DEFAULT_KEEPFILE_NAME}).",
    )

    filters = parser.add_argument_group("filtering")
    filters.add_argument(
        "--prune",
        dest="prune",
        metavar="NAME",
        action=PruneAction,
        default=list(DEFAULT_PRUNE_NAMES),
        help="Don't descend into directories with this basename (can be specified multiple times).",
    )
    filters.add_argument(
        "--no-prune",
        dest="prune",
        nargs=0,
        action=PruneAction,
        help="Clear the prune list at this point; later --prune options still apply.",
    )
    filters.add_argument(
        "--exclude",
        metavar="COMMAND",
        action="append",
        help=(
            "Run COMMAND in a shell before the walk and skip the directories it prints, one path per "
            "line. Relative paths are relative to the current directory (can be specified multiple times)."
        ),
    )

    hooks = parser.add_argument_group("hooks")
    hooks.add_argument(
        "--create-hook",
        metavar="COMMAND",
        action="append",
        help="Shell command to run after each create, in the order given (can be specified multiple times).",
    )
    hooks.add_argument(
        "--delete-hook",
        metavar="COMMAND",
        action="append",
        help="Shell command to run after each delete, in the order given (can be specified multiple times).",
    )
    hooks.add_argument(
        "--replace",
        metavar="TOKEN",
        action=ReplaceAction,
        help=(
            "Replace the first occurrence of TOKEN in hook commands with the keepfile path, instead of "
            "appending the path."
        ),
    )

    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="warn",
        help="How to handle filesystem errors (default: warn).",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout"],
        help="Print a summary of the run. Valid destinations: stderr, stdout",
    )

    return parser
