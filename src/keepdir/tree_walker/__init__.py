"""Depth-first directory traversal with prune/exclude filtering.

This package provides the lazy walker that produces one directory node per
visited directory, in lexicographic depth-first order.
"""

from .directory_node import DirectoryNode
from .permission_action import PermissionAction
from .tree_walker import TreeWalker

__all__ = ["DirectoryNode", "PermissionAction", "TreeWalker"]
