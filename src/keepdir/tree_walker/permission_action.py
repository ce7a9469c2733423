"""Permission action enum for handling filesystem errors during reconciliation."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory can't be listed or a keepfile can't be changed.

    Values:
        IGNORE: Skip the affected directory or keepfile silently
        WARN: Skip it and print a warning to stderr (default behavior)
        RAISE: Raise the error, stopping the run; completed work is kept
    """

    IGNORE = "ignore"
    WARN = "warn"
    RAISE = "raise"
