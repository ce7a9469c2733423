"""Command-line interface for keepdir.

This module provides the command-line entry point. It parses arguments into a
KeepdirConfig, runs the reconciliation with real shell commands, stdin and
stdout, and maps outcomes to exit codes.

Signal Handling Notes:
    - SIGPIPE: Handled when output pipe is closed (e.g., when piping to `head`)
    - SIGINT: Handled for clean exit on Ctrl+C, including while waiting for an
      interactive answer
    In both cases the run stops between keepfile changes.

Exit Codes:
    0: Successful completion, including a run ended by interactive confirmation
    1: Runtime error during execution (e.g., start directory does not exist)
    2: Command-line syntax error (including invalid --replace usage)
    126: Filesystem error with -P fail
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE)

Example:
    # Reconcile keepfiles below the current directory
    $ keepdir

    # Preview a purge of another directory
    $ keepdir --purge --dry-run /path/to/dir

    # Display version information
    $ keepdir --version
"""

import sys
from collections.abc import Mapping

from keepdir.cli.argparser import create_parser
from keepdir.cli.safe_writer import SafeWriter
from keepdir.cli.signal_handler import setup_signal_handling, signal_handler
from keepdir.command_runner import ShellCommandRunner
from keepdir.config import KeepdirConfig
from keepdir.io.line_source import StreamLineSource
from keepdir.keepdir import Keepdir


def format_counts(counts: Mapping[str, int]) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing the run's counters.

    Returns:
        A formatted string showing all counts with appropriate labels.

    Example:
        >>> print(format_counts({"directories": 4, "pruned": 1, "created": 3, "deleted": 0}))
        Directories: 4
        Pruned: 1
        Created: 3
        Deleted: 0
    """
    return "\n".join(
        [
            f"Directories: {counts['directories']}",
            f"Pruned: {counts['pruned']}",
            f"Created: {counts['created']}",
            f"Deleted: {counts['deleted']}",
        ]
    )


def main() -> None:
    """Main entry point for the keepdir command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Filesystem error with -P fail
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE)
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse calls sys.exit(2) for argument errors, sys.exit(0) for --help/--version
        args = parser.parse_args()
        config = KeepdirConfig.from_args(args)

        with SafeWriter(sys.stdout.fileno()) as safe_writer:
            try:
                keepdir = Keepdir(
                    args.directory,
                    config,
                    writer=safe_writer,
                    runner=ShellCommandRunner(),
                    line_source=StreamLineSource(sys.stdin) if config.interactive else None,
                )
                keepdir.run()

                if args.summary:
                    count_output_str = format_counts(
                        {
                            "directories": keepdir.visited_count,
                            "pruned": keepdir.pruned_count,
                            "created": keepdir.created_count,
                            "deleted": keepdir.deleted_count,
                        }
                    )
                    if args.summary == "stdout":
                        # An aborted interactive run may leave an unfinished prompt line
                        prefix = "\n" if keepdir.end_of_input else ""
                        safe_writer.write(prefix + count_output_str + "\n")
                    else:
                        print(count_output_str, file=sys.stderr)

            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

    except KeyboardInterrupt:
        signal_handler.sigint_received.set()
    except OSError as e:
        # Only reaches here with -P fail, or for errors outside the walk
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
