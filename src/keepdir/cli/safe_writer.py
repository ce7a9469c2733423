"""Safe output writing utilities for the keepdir CLI.

This module provides an unbuffered writing interface that handles signals and
interruptions gracefully.
"""

import errno
import os
import types
from typing import Optional, Type

from keepdir.cli.signal_handler import signal_handler


class SafeWriter:
    """Unbuffered, signal-aware writer for a file descriptor.

    Every write goes straight to the descriptor with ``os.write``. Report lines,
    interactive prompts (which have no trailing newline) and the output of hook
    commands therefore appear immediately and in the order they were produced.
    Text is encoded as UTF-8 with ``surrogateescape``, so undecodable bytes that
    came from file names or hook output are written back unchanged.

    Attributes:
        fd: The file descriptor being written to.
    """

    def __init__(self, fd: int):
        """Initialize the safe writer.

        Args:
            fd: File descriptor for writing output, usually ``sys.stdout.fileno()``.

        Raises:
            TypeError: If fd is not an integer.
        """
        if not isinstance(fd, int) or isinstance(fd, bool):
            raise TypeError(f"Expected int, got {type(fd).__name__}")
        self.fd = fd
        self._closed = False

    def write(self, data: str) -> int:
        """Safely write data with signal checking.

        Args:
            data: String data to write.

        Returns:
            Number of characters written.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is broken.
            OSError: If another I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.sigpipe_received.is_set() or signal_handler.sigint_received.is_set():
            raise BrokenPipeError()

        encoded = data.encode("utf-8", errors="surrogateescape")
        try:
            while encoded:
                written = os.write(self.fd, encoded)
                encoded = encoded[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise
        return len(data)

    def close(self) -> None:
        """Mark the writer as closed. The descriptor itself is left open."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "SafeWriter":
        """Enter the context manager.

        Returns:
            self: The SafeWriter instance for use in the with block.
        """
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.close()
