from abc import ABC, abstractmethod


class BaseFilterRules(ABC):
    """
    Abstract base class defining the interface for directory filter rules.

    Filter rules decide whether a directory met during the walk should be skipped
    together with everything beneath it. Concrete rule types look at different
    properties of the directory: its basename (prune rules) or its normalized path
    (exclude rules). Adding individual rules and clearing them are optional
    capabilities that depend on the rule type.

    Example:
        >>> from keepdir.filter_rules.prune_rules import PruneRules
        >>> rules = PruneRules()
        >>> rules.add_rule("node_modules")
        >>> rules.matches("node_modules", "src/node_modules")
        True
        >>> rules.matches("src", "src")
        False
    """

    @abstractmethod
    def matches(self, name: str, path: str) -> bool:
        """
        Determine if a directory is covered by these rules.

        Args:
            name (str): The directory's basename.
            path (str): The directory's path in the form produced by the walk, i.e.
                the start directory joined with the names leading to it.

        Returns:
            bool: True if the directory (and its subtree) should be skipped.
        """
        pass

    def has_rules(self) -> bool:
        """
        Check whether any rule is configured.

        Returns:
            bool: True if at least one rule is configured.
        """
        return True

    def add_rule(self, rule: str) -> None:
        """
        Add a single rule directly.

        Rule types that are populated another way use this default, which raises
        NotImplementedError.

        Args:
            rule (str): The rule to add. The format depends on the implementation.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")

    def clear(self) -> None:
        """
        Remove every configured rule.

        Raises:
            NotImplementedError: If this rule type can't be cleared.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support clearing rules.")
