from typing import Optional

from keepdir.types import PathType


class ReplaceTokenError(ValueError):
    """
    Exception raised when the hook replace token is configured inconsistently.

    The token may be given more than once only if every occurrence uses the same
    value, and it may never be empty.

    Example:
        >>> error = ReplaceTokenError("+", "%")
        >>> str(error)
        "conflicting replace tokens: '%' and '+'"
        >>> str(ReplaceTokenError(""))
        'replace token must not be empty'
    """

    def __init__(self, token: str, previous: Optional[str] = None) -> None:
        """
        Initialize the exception for an empty or conflicting token.

        Args:
            token (str): The token that was rejected.
            previous (str, optional): The token configured earlier, if the rejection is
                due to a conflict. Defaults to None, meaning the token was empty.
        """
        self.token = token
        self.previous = previous
        if previous is None:
            message = "replace token must not be empty"
        else:
            message = f"conflicting replace tokens: {previous!r} and {token!r}"
        super().__init__(message)


class ConfirmationAborted(Exception):
    """
    Raised by the executor when an interactive confirmation ends the run.

    This happens either at end of the confirmation input or when an answer other
    than ``y``/``Y`` is given. It is not an error: the run stops and keepdir exits
    successfully.

    Attributes:
        end_of_input (bool): True if the confirmation stream was exhausted.
    """

    def __init__(self, end_of_input: bool) -> None:
        self.end_of_input = end_of_input
        super().__init__("end of confirmation input" if end_of_input else "action declined")


class KeepfileActionError(OSError):
    """
    Exception raised when creating or deleting a keepfile fails.

    Attributes:
        path (str): Path of the keepfile that could not be changed.

    Example:
        >>> error = KeepfileActionError("create", "/tmp/x/.keep", "Permission denied")
        >>> str(error)
        'cannot create /tmp/x/.keep: Permission denied'
    """

    def __init__(self, kind: str, path: PathType, reason: str) -> None:
        self.kind = kind
        self.path = str(path)
        super().__init__(f"cannot {kind} {self.path}: {reason}")
