"""Snapshot of a single directory's immediate contents."""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class DirectoryNode:
    """One visited directory and its direct entries.

    Nodes are produced on demand by listing the directory and are never cached
    across a run. Entries are partitioned into subdirectories and everything
    else; the keepfile itself is recorded separately and does not appear in
    either partition.

    Attributes:
        path (Path): The directory's path, in the form produced by the walk (the
            start directory joined with the names leading here).
        depth (int): Distance from the start directory, which has depth 0.
        files (Tuple[str, ...]): Names of non-directory entries other than the
            keepfile. Symbolic links are listed here, even if they point at a
            directory.
        subdirectories (Tuple[str, ...]): Names of subdirectories in lexicographic
            order, including ones that the walk will prune or exclude.
        has_keepfile (bool): Whether a non-directory entry named like the keepfile
            exists.

    Example:
        >>> node = DirectoryNode(Path("a/d"), 2, (), (), False)
        >>> node.name
        'd'
        >>> node.entry_count
        0
    """

    path: Path
    depth: int
    files: Tuple[str, ...]
    subdirectories: Tuple[str, ...]
    has_keepfile: bool

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def entry_count(self) -> int:
        """Number of direct entries, not counting the keepfile."""
        return len(self.files) + len(self.subdirectories)

    def keepfile_path(self, keepfile_name: str) -> Path:
        return self.path / keepfile_name
