"""Prune and exclude rules deciding which subtrees keepdir manages."""

from .base_rules import BaseFilterRules
from .exclude_rules import ExcludeRules
from .path_filter import PathFilter
from .prune_rules import PruneRules

__all__ = [
    "BaseFilterRules",
    "ExcludeRules",
    "PathFilter",
    "PruneRules",
]
