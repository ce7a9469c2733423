"""Lazy, deterministic depth-first directory traversal.

This module provides the TreeWalker class, which walks a directory tree with an
explicit work stack instead of recursion. Traversal order is part of its
contract: a directory is yielded before anything beneath it, and siblings are
visited in lexicographic order of their basenames, each sibling's whole subtree
before the next sibling.
"""

import os
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from keepdir.filter_rules.path_filter import PathFilter
from keepdir.tree_walker.directory_node import DirectoryNode
from keepdir.tree_walker.permission_action import PermissionAction
from keepdir.types import DEFAULT_KEEPFILE_NAME, FilterResult, PathType


class TreeWalker:
    """Depth-first walk of a directory tree, applying a path filter at each step.

    The walker lists each directory only when it is about to be yielded, and pushes
    its admitted subdirectories only after the consumer has finished with it. It
    never reads or writes keepfiles itself; it merely reports whether one exists.

    The start directory is listed but not yielded, because it is never a candidate
    for keepfile actions. Symbolic links are not followed.

    Permission Handling:
        Errors while listing a directory below the start directory (permission
        denied, directory vanished mid-walk) are handled per ``permission_action``:
        - IGNORE: Skip the directory and its subtree silently
        - WARN (default): Skip it and print a warning to stderr
        - RAISE: Re-raise the error
        Errors listing the start directory itself always propagate.

    Attributes:
        root_path (Path): The start directory, as given.
        path_filter (PathFilter): Prune/exclude filter consulted before descending.
        keepfile_name (str): Name of the keepfile to recognize.
        permission_action (PermissionAction): How to handle listing errors.
        pruned_count (int): Number of subdirectories skipped by the filter so far.

    Example:
        >>> walker = TreeWalker("project")  # doctest: +SKIP
        >>> [str(node.path) for node in walker]  # doctest: +SKIP
        ['project/a', 'project/a/b', 'project/a/b/c', 'project/a/d']
    """

    def __init__(
        self,
        root_path: PathType,
        path_filter: Optional[PathFilter] = None,
        keepfile_name: str = DEFAULT_KEEPFILE_NAME,
        permission_action: PermissionAction = PermissionAction.WARN,
    ) -> None:
        """Initialize a TreeWalker.

        Args:
            root_path: The start directory. Can be any path-like object.
            path_filter: Filter deciding which subdirectories to enter. Defaults to a
                filter with no rules.
            keepfile_name: Name of the keepfile. Defaults to ".keep".
            permission_action: How to handle errors listing directories. Defaults
                to WARN.
        """
        self.root_path = Path(root_path)
        self.path_filter = path_filter if path_filter is not None else PathFilter()
        self.keepfile_name = keepfile_name
        self.permission_action = permission_action
        self.pruned_count = 0

    def __iter__(self) -> Iterator[DirectoryNode]:
        return self.walk()

    def walk(self) -> Iterator[DirectoryNode]:
        """Yield every admitted directory below the start directory, depth first.

        Yields:
            DirectoryNode for each visited directory, in traversal order.

        Raises:
            FileNotFoundError: If the start directory doesn't exist.
            NotADirectoryError: If the start directory isn't a directory.
            OSError: If listing a directory fails and permission_action is RAISE.
        """
        if not self.root_path.exists():
            raise FileNotFoundError(f"Start directory does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Start directory is not a directory: {self.root_path}")

        root = self._list_directory(self.root_path, 0)
        stack: List[Tuple[Path, int]] = []
        self._push_children(stack, root)

        while stack:
            path, depth = stack.pop()
            try:
                node = self._list_directory(path, depth)
            except OSError as e:
                self._handle_error(e)
                continue
            yield node
            self._push_children(stack, node)

    def _push_children(self, stack: List[Tuple[Path, int]], node: DirectoryNode) -> None:
        """Push the admitted subdirectories of a node so the smallest name pops first."""
        admitted = []
        for name in node.subdirectories:
            child_path = node.path / name
            if self.path_filter.check(name, str(child_path)) is not FilterResult.PROCEED:
                self.pruned_count += 1
                continue
            admitted.append((child_path, node.depth + 1))
        stack.extend(reversed(admitted))

    def _list_directory(self, path: Path, depth: int) -> DirectoryNode:
        files = []
        subdirectories = []
        has_keepfile = False
        with os.scandir(path) as entries:
            for entry in entries:
                is_dir = entry.is_dir(follow_symlinks=False)
                if is_dir:
                    subdirectories.append(entry.name)
                elif entry.name == self.keepfile_name:
                    has_keepfile = True
                else:
                    files.append(entry.name)
        return DirectoryNode(
            path=path,
            depth=depth,
            files=tuple(sorted(files)),
            subdirectories=tuple(sorted(subdirectories)),
            has_keepfile=has_keepfile,
        )

    def _handle_error(self, error: OSError) -> None:
        if self.permission_action == PermissionAction.RAISE:
            raise error
        if self.permission_action == PermissionAction.WARN:
            print(f"Warning: {error}", file=sys.stderr)
