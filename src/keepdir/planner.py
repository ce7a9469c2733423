"""Planning of keepfile actions.

The planner compares what a directory should have (derived from its
classification) with what it has (whether a keepfile exists) and produces at
most one action. There is no "update" action: a keepfile is either present or
absent.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from keepdir.tree_walker.directory_node import DirectoryNode
from keepdir.types import DEFAULT_KEEPFILE_NAME, ActionKind, Classification, Mode


@dataclass(frozen=True)
class ActionRecord:
    """A planned change to one keepfile.

    Attributes:
        kind: Whether the keepfile is to be created or deleted.
        path: Path of the keepfile, relative to the start directory's parent if the
            walk was started from a relative path.
    """

    kind: ActionKind
    path: Path


class ActionPlanner:
    """Produce the reconciliation action for each visited directory.

    In update mode the full rule is:
    - EMPTY without a keepfile: CREATE
    - NON_EMPTY with a keepfile: DELETE
    - EMPTY with a keepfile, or NON_EMPTY without one: no action

    In purge mode every existing keepfile is deleted and none is created,
    regardless of classification.

    Attributes:
        mode (Mode): UPDATE or PURGE.
        keepfile_name (str): Name of the keepfile.

    Example:
        >>> planner = ActionPlanner()
        >>> planner.decide(Classification.EMPTY, keepfile_exists=False)
        <ActionKind.CREATE: 'create'>
        >>> planner.decide(Classification.EMPTY, keepfile_exists=True) is None
        True
        >>> ActionPlanner(Mode.PURGE).decide(Classification.EMPTY, keepfile_exists=True)
        <ActionKind.DELETE: 'delete'>
    """

    def __init__(self, mode: Mode = Mode.UPDATE, keepfile_name: str = DEFAULT_KEEPFILE_NAME):
        self.mode = mode
        self.keepfile_name = keepfile_name

    def decide(self, classification: Classification, keepfile_exists: bool) -> Optional[ActionKind]:
        """Return the action kind for a classification and keepfile state, or None."""
        if self.mode == Mode.PURGE:
            return ActionKind.DELETE if keepfile_exists else None
        if classification == Classification.EMPTY and not keepfile_exists:
            return ActionKind.CREATE
        if classification == Classification.NON_EMPTY and keepfile_exists:
            return ActionKind.DELETE
        return None

    def plan(self, node: DirectoryNode, classification: Classification) -> Optional[ActionRecord]:
        """Plan the action for a visited directory.

        Args:
            node: The directory as listed by the walker.
            classification: The directory's emptiness classification.

        Returns:
            The planned action, or None if the directory is already reconciled.
        """
        kind = self.decide(classification, node.has_keepfile)
        if kind is None:
            return None
        return ActionRecord(kind, node.keepfile_path(self.keepfile_name))
