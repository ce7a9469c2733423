"""Emptiness classification of a single directory."""

from keepdir.tree_walker.directory_node import DirectoryNode
from keepdir.types import Classification


class EmptinessClassifier:
    """Decide whether a directory counts as empty.

    A directory is empty when it has no direct entries other than its own keepfile.
    Only the directory's immediate listing is considered; whether descendants hold
    keepfiles is irrelevant. Subdirectories the walk prunes or excludes still
    exist on disk, so they make their parent non-empty.

    Example:
        >>> from pathlib import Path
        >>> classifier = EmptinessClassifier()
        >>> classifier.classify(DirectoryNode(Path("a/d"), 2, (), (), True))
        <Classification.EMPTY: 'empty'>
        >>> classifier.classify(DirectoryNode(Path("a/b"), 2, (), (".git", "c"), False))
        <Classification.NON_EMPTY: 'non-empty'>
    """

    def classify(self, node: DirectoryNode) -> Classification:
        if node.entry_count == 0:
            return Classification.EMPTY
        return Classification.NON_EMPTY
