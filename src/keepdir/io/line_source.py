"""Line sources for interactive confirmation.

Confirmation answers are read through a :class:`LineSource` rather than directly
from ``sys.stdin``. End of input is signalled explicitly by returning ``None``,
which lets the executor tell an empty answer apart from a closed stream.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional, TextIO


class LineSource(ABC):
    """Source of confirmation lines."""

    @abstractmethod
    def read_line(self) -> Optional[str]:
        """Read the next line.

        Returns:
            The next line without its line ending, or None at end of input.
        """
        pass


class StreamLineSource(LineSource):
    """Read lines from a text stream such as ``sys.stdin``.

    Lines are read one at a time, on demand, so nothing beyond the current answer
    is consumed from the stream.

    Example:
        >>> import io
        >>> source = StreamLineSource(io.StringIO("y\\nn"))
        >>> source.read_line(), source.read_line(), source.read_line()
        ('y', 'n', None)
    """

    def __init__(self, stream: TextIO):
        self.stream = stream

    def read_line(self) -> Optional[str]:
        line = self.stream.readline()
        if not line:
            return None
        return line.rstrip("\r\n")


class IterableLineSource(LineSource):
    """Serve lines from an in-memory sequence.

    Example:
        >>> source = IterableLineSource(["y"])
        >>> source.read_line(), source.read_line()
        ('y', None)
    """

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)

    def read_line(self) -> Optional[str]:
        return next(self._lines, None)
