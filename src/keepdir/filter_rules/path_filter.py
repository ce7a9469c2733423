"""Combined prune/exclude filter consulted by the tree walker."""

from typing import Optional

from keepdir.types import FilterResult

from .exclude_rules import ExcludeRules
from .prune_rules import PruneRules


class PathFilter:
    """Decide whether the walker should descend into a subdirectory.

    Prune rules are consulted before exclude rules. Both results have the same
    effect on the walk: the subtree is skipped and no keepfile action is planned
    for the directory or anything beneath it. The filter is a pure function of its
    configured rules and the candidate directory.

    Attributes:
        prune_rules (PruneRules): Basenames to prune.
        exclude_rules (ExcludeRules): Paths to exclude.

    Example:
        >>> path_filter = PathFilter(PruneRules([".git"]), ExcludeRules(["x/y"], base="/w"))
        >>> path_filter.check(".git", "x/.git")
        <FilterResult.PRUNE: 'prune'>
        >>> path_filter.check("y", "x/y")
        <FilterResult.EXCLUDE: 'exclude'>
        >>> path_filter.check("z", "x/z")
        <FilterResult.PROCEED: 'proceed'>
    """

    def __init__(self, prune_rules: Optional[PruneRules] = None, exclude_rules: Optional[ExcludeRules] = None):
        self.prune_rules = prune_rules if prune_rules is not None else PruneRules()
        self.exclude_rules = exclude_rules if exclude_rules is not None else ExcludeRules()

    def check(self, name: str, path: str) -> FilterResult:
        """Classify a subdirectory.

        Args:
            name: The directory's basename.
            path: The directory's path as produced by the walk.

        Returns:
            FilterResult.PRUNE if the basename is pruned, FilterResult.EXCLUDE if the
            path is excluded, FilterResult.PROCEED otherwise.
        """
        if self.prune_rules.matches(name, path):
            return FilterResult.PRUNE
        if self.exclude_rules.matches(name, path):
            return FilterResult.EXCLUDE
        return FilterResult.PROCEED
