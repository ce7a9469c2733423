from enum import Enum
from os import PathLike
from typing import Any, Protocol, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

DEFAULT_KEEPFILE_NAME = ".keep"
DEFAULT_PRUNE_NAMES = (".git",)


class FilterResult(Enum):
    """Outcome of consulting the path filter for a subdirectory.

    Attributes:
        PROCEED: Descend into the directory and manage its keepfile.
        PRUNE: Basename is in the prune set; skip the whole subtree.
        EXCLUDE: Path is in the exclude set; skip the whole subtree.
    """

    PROCEED = "proceed"
    PRUNE = "prune"
    EXCLUDE = "exclude"


class Classification(Enum):
    """Whether a directory counts as empty for keepfile purposes."""

    EMPTY = "empty"
    NON_EMPTY = "non-empty"


class ActionKind(str, Enum):
    """Kind of keepfile action. The value is the word used in reports and prompts."""

    CREATE = "create"
    DELETE = "delete"


class Mode(str, Enum):
    """Reconciliation mode.

    Attributes:
        UPDATE: Create keepfiles in empty directories and delete them elsewhere.
        PURGE: Delete every keepfile found, regardless of emptiness.
    """

    UPDATE = "update"
    PURGE = "purge"


class OutputWriter(Protocol):
    """Anything keepdir can write report lines and prompts to."""

    def write(self, data: str) -> Any: ...
