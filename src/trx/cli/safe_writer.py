"""Broken-pipe aware output writing for the trx CLI."""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from trx.cli.signal_handler import signal_handler


class SafeWriter:
    """Writes rendered output to a file or file descriptor, honoring interruptions.

    Writes are refused with BrokenPipeError once SIGPIPE or SIGINT has been
    received, and EPIPE from the operating system is reported the same way, so
    the caller has a single condition to stop on.

    Attributes:
        file: The file path or descriptor given at construction.
        fd: The file descriptor being written to.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     target = Path(tmpdir) / "tree.txt"
        ...     with SafeWriter(target) as writer:
        ...         writer.write("project\\n")
        ...     target.read_text()
        'project\\n'
    """

    def __init__(self, file: Union[int, str, "os.PathLike[str]"]):
        """Open the output.

        Args:
            file: A file descriptor (int) or a path to create or truncate.

        Raises:
            TypeError: If file is neither a descriptor nor a path.
        """
        self.file = file
        self._closed = False
        self._file_obj = None

        if isinstance(file, int):
            self.fd = file
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("w", encoding="utf-8")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write a string as UTF-8.

        Raises:
            BrokenPipeError: If the output was closed or the process interrupted.
            OSError: For any other I/O error.
            ValueError: If the writer is already closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")
        if signal_handler.interrupted():
            raise BrokenPipeError()

        payload = data.encode("utf-8")
        try:
            while payload:
                written = os.write(self.fd, payload)
                payload = payload[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def close(self) -> None:
        """Close the output if this writer opened it; EPIPE on close is ignored."""
        if self._closed:
            return
        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise
        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes precedence
            if exc_type is None:
                raise
