"""Prune rules matching directories by basename."""

from typing import Iterable, List, Tuple

from .base_rules import BaseFilterRules


class PruneRules(BaseFilterRules):
    """Ordered set of directory basenames that are never descended into.

    Names are matched exactly against a directory's basename, at any depth.
    Adding a name that is already present keeps its original position, so the
    set stays ordered by first addition. Clearing only affects names added
    before the call; names added afterwards apply as usual.

    Attributes:
        names (Tuple[str, ...]): The configured basenames in insertion order.

    Example:
        >>> rules = PruneRules([".git"])
        >>> rules.matches(".git", "a/b/.git")
        True
        >>> rules.clear()
        >>> rules.add_rule("b")
        >>> rules.names
        ('b',)
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        """Initialize prune rules.

        Args:
            names: Initial basenames. Defaults to none.
        """
        self._names: List[str] = []
        for name in names:
            self.add_rule(name)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._names)

    def add_rule(self, rule: str) -> None:
        """Append a basename to the prune set.

        Args:
            rule: The directory basename to prune.

        Raises:
            ValueError: If the name is empty.
        """
        if not rule:
            raise ValueError("prune name must not be empty")
        if rule not in self._names:
            self._names.append(rule)

    def clear(self) -> None:
        self._names.clear()

    def has_rules(self) -> bool:
        return bool(self._names)

    def matches(self, name: str, path: str) -> bool:
        return name in self._names
