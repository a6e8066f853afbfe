"""Common interface of virtual disks."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

from umkatools.io import UmkaIo

DEFAULT_SECTOR_SIZE = 512
LARGE_SECTOR_SIZE = 4096


def sector_size_for(fname) -> int:
    """Sector size implied by an image file name: 4096 if it says so, else 512."""
    name = os.fspath(fname)
    if "s4096" in name or "s4k" in name:
        return LARGE_SECTOR_SIZE
    return DEFAULT_SECTOR_SIZE


@dataclass(frozen=True)
class MediaInfo:
    """What the kernel learns about the medium."""

    flags: int
    sector_size: int
    capacity: int


class VirtualDisk(ABC):
    """A disk image addressed in sectors."""

    def __init__(
        self,
        sect_size: int,
        sect_cnt: int,
        io: UmkaIo | None = None,
        *,
        cache_size: int = 0,
        fixed_cache_size: bool = False,
    ) -> None:
        self.sect_size = sect_size
        self.sect_cnt = sect_cnt
        self.io = io if io is not None else UmkaIo()
        self.cache_size = cache_size
        self.fixed_cache_size = fixed_cache_size

    def query_media(self) -> MediaInfo:
        """Describe the medium: no flags, sector size and sector count."""
        return MediaInfo(flags=0, sector_size=self.sect_size, capacity=self.sect_cnt)

    def adjust_cache_size(self, suggested_size: int) -> int:
        """Return the configured cache size if fixed, otherwise the suggestion."""
        return self.cache_size if self.fixed_cache_size else suggested_size

    @abstractmethod
    def read(self, start_sector: int, count: int) -> bytes:
        """Read ``count`` sectors starting at ``start_sector``."""

    @abstractmethod
    def write(self, data: bytes, start_sector: int) -> int:
        """Write ``data`` starting at ``start_sector``."""

    def close(self) -> None:
        """Release resources held by the disk."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()