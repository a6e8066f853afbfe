"""Raw disk images: the file is the disk, sector by sector."""

from __future__ import annotations

import os

from umkatools.base import VirtualDisk, sector_size_for
from umkatools.io import UmkaIo

RAW_SUFFIX = ".raw"


class RawDisk(VirtualDisk):
    """A raw image file opened read-only."""

    def __init__(self, fd: int, sect_size: int, sect_cnt: int,
                 io: UmkaIo | None = None) -> None:
        super().__init__(sect_size, sect_cnt, io)
        self._fd: int | None = fd

    @classmethod
    def open(cls, fname, io: UmkaIo | None = None) -> RawDisk:
        """Open ``fname``; its size decides the sector count."""
        fd = os.open(fname, os.O_RDONLY | getattr(os, "O_BINARY", 0))
        try:
            size = os.lseek(fd, 0, os.SEEK_END)
            os.lseek(fd, 0, os.SEEK_SET)
        except OSError:
            os.close(fd)
            raise
        sect_size = sector_size_for(fname)
        return cls(fd, sect_size, size // sect_size, io)

    def _require_fd(self) -> int:
        if self._fd is None:
            raise ValueError("disk is closed")
        return self._fd

    def read(self, start_sector: int, count: int) -> bytes:
        """Read ``count`` sectors; fewer bytes come back past the end."""
        fd = self._require_fd()
        os.lseek(fd, start_sector * self.sect_size, os.SEEK_SET)
        return self.io.read(fd, count * self.sect_size)

    def write(self, data: bytes, start_sector: int) -> int:
        """Write ``data`` at ``start_sector``."""
        fd = self._require_fd()
        os.lseek(fd, start_sector * self.sect_size, os.SEEK_SET)
        return self.io.write(fd, data)

    def close(self) -> None:
        """Close the image file."""
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None