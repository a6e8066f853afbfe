"""File-descriptor I/O that switches to a worker thread once the kernel runs."""

from __future__ import annotations

import enum
import io as _stdio
import os
import threading
from concurrent.futures import ThreadPoolExecutor


class Running(enum.IntEnum):
    """Lifecycle state of the emulated kernel."""

    NEVER = 0
    NOT_YET = 1
    YES = 2


class UmkaIo:
    """Reads and writes host file descriptors.

    While the kernel is not running, calls go straight to the host.  Once
    ``running`` reaches :attr:`Running.YES`, reads are handed to a single
    worker thread, one request at a time, and the caller waits for the result.
    Asynchronous writes are not supported.
    """

    def __init__(self, running: Running | int = Running.NEVER) -> None:
        self.running = Running(running)
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O context is closed")

    def _async(self) -> bool:
        return self.running >= Running.YES

    def _worker(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="umka-io"
                )
            return self._executor

    def read(self, fd: int, count: int) -> bytes:
        """Read up to ``count`` bytes from ``fd``."""
        self._check_open()
        if not self._async():
            return os.read(fd, count)
        return self._worker().submit(os.read, fd, count).result()

    def write(self, fd: int, data: bytes) -> int:
        """Write ``data`` to ``fd`` and return the number of bytes written."""
        self._check_open()
        if not self._async():
            return os.write(fd, data)
        raise _stdio.UnsupportedOperation("asynchronous write is not supported")

    def close(self) -> None:
        """Stop the worker thread, if any, and refuse further requests."""
        with self._lock:
            executor, self._executor = self._executor, None
            self._closed = True
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> UmkaIo:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()