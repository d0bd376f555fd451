"""Streams local files as ordered fixed-size chunks without loading them into memory."""

import os
import stat
from enum import Enum
from typing import BinaryIO, Callable, Iterator, Optional

from common.constants import FILE_CHUNK_SIZE_BYTES
from common.exceptions import MidStreamFailureError, NotFoundError
from common.protocol import FileChunk


class TransferState(str, Enum):
    """Lifecycle of a single file transfer."""
    IDLE = "idle"
    OPENING = "opening"
    NOT_FOUND = "not_found"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({
    TransferState.NOT_FOUND,
    TransferState.COMPLETED,
    TransferState.FAILED,
    TransferState.CANCELLED,
})


class FileTransfer:
    """
    One single-use transfer of a file.

    Owns the open file handle and its read cursor. The handle is released
    whenever the transfer reaches a terminal state, and also by close(),
    leaving the context manager, or discarding the chunk generator early.

    Usage:
        with FileTransfer(path).open() as transfer:
            for chunk in transfer.chunks():
                send(chunk)
    """

    def __init__(self, filename: str, chunk_size: int = FILE_CHUNK_SIZE_BYTES):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.filename = filename
        self.chunk_size = chunk_size
        self.state = TransferState.IDLE
        self.bytes_sent = 0
        self.chunks_sent = 0
        self._file: Optional[BinaryIO] = None
        self._size_at_open: Optional[int] = None

    def open(self) -> 'FileTransfer':
        """
        Open the file for binary reading.

        Returns:
            This transfer, now streaming

        Raises:
            NotFoundError: If the file cannot be opened for any reason
            RuntimeError: If the transfer was already opened
        """
        if self.state is not TransferState.IDLE:
            raise RuntimeError(f"Transfer of {self.filename} already started ({self.state.value})")

        self.state = TransferState.OPENING
        try:
            self._file = open(self.filename, 'rb')
            file_stat = os.fstat(self._file.fileno())
        except (OSError, ValueError):
            self.close()
            self.state = TransferState.NOT_FOUND
            raise NotFoundError(f"File {self.filename} not found") from None

        # procfs and sysfs report a nominal st_size, so only a change of it counts
        if stat.S_ISREG(file_stat.st_mode):
            self._size_at_open = file_stat.st_size

        self.state = TransferState.STREAMING
        return self

    def chunks(self, is_cancelled: Optional[Callable[[], bool]] = None) -> Iterator[FileChunk]:
        """
        Read the file chunk by chunk.

        Args:
            is_cancelled: Polled before every read; once it returns True no
                further chunk is read or emitted

        Yields:
            FileChunk per non-empty read, in file order

        Raises:
            MidStreamFailureError: If a read fails or the file changed size
            RuntimeError: If the transfer is not streaming
        """
        if self.state is not TransferState.STREAMING:
            raise RuntimeError(f"Transfer of {self.filename} is not streaming ({self.state.value})")

        try:
            while True:
                # close() from outside while suspended ends the stream quietly
                if self.state is not TransferState.STREAMING:
                    return
                if is_cancelled is not None and is_cancelled():
                    self.state = TransferState.CANCELLED
                    return

                try:
                    content = self._file.read(self.chunk_size)
                except (OSError, ValueError) as e:
                    self.state = TransferState.FAILED
                    raise MidStreamFailureError(f"Error reading file {self.filename}: {e}") from e

                if not content:
                    break

                self.bytes_sent += len(content)
                self.chunks_sent += 1
                yield FileChunk(content=content, size=len(content))

            self._check_size_unchanged()

            self.state = TransferState.COMPLETED
        finally:
            self.close()

    def _check_size_unchanged(self) -> None:
        """Fail the transfer if the file was truncated or extended while it was read."""
        if self._size_at_open is None:
            return
        try:
            size_now = os.fstat(self._file.fileno()).st_size
        except OSError as e:
            self.state = TransferState.FAILED
            raise MidStreamFailureError(f"Error reading file {self.filename}: {e}") from e
        if size_now != self._size_at_open:
            self.state = TransferState.FAILED
            raise MidStreamFailureError(
                f"File {self.filename} changed size during transfer: "
                f"{self._size_at_open} bytes at open, {size_now} at end, read {self.bytes_sent}"
            )

    def close(self) -> None:
        """Release the file handle. A transfer still streaming becomes cancelled."""
        if self.state is TransferState.STREAMING:
            self.state = TransferState.CANCELLED
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def closed(self) -> bool:
        """True once the file handle has been released (or never acquired)."""
        return self._file is None

    def __enter__(self) -> 'FileTransfer':
        if self.state is TransferState.IDLE:
            self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileStreamer:
    """
    Opens files from the local filesystem as independent transfers.

    Each transfer has its own handle and cursor, so the same file may be
    streamed by several callers at once.
    """

    def __init__(self, chunk_size: int = FILE_CHUNK_SIZE_BYTES):
        self.chunk_size = chunk_size

    def open(self, filename: str) -> FileTransfer:
        """
        Start a transfer of the given file.

        Raises:
            NotFoundError: If the file cannot be opened
        """
        return FileTransfer(filename, chunk_size=self.chunk_size).open()

    def stream(self, filename: str) -> Iterator[FileChunk]:
        """
        Open the file and yield its chunks.

        The file is opened eagerly, so NotFoundError is raised by this call
        itself rather than on the first iteration.
        """
        return self.open(filename).chunks()
