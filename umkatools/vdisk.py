"""Open a disk image by the format its file name announces."""

from __future__ import annotations

import os

from umkatools.base import VirtualDisk
from umkatools.io import UmkaIo
from umkatools.qcow2 import QCOW2_SUFFIX, Qcow2Disk
from umkatools.raw import RAW_SUFFIX, RawDisk


class UnknownDiskFormat(ValueError):
    """The file name has neither a raw nor a qcow2 suffix."""


def _has_suffix(name: str, suffix: str) -> bool:
    return len(name) > len(suffix) and name.endswith(suffix)


def open_vdisk(fname, adjust_cache_size=False, cache_size: int = 0,
               io: UmkaIo | None = None) -> VirtualDisk:
    """Open a ``.raw`` or ``.qcow2`` image and set its cache policy."""
    name = os.fsdecode(fname)
    if _has_suffix(name, RAW_SUFFIX):
        disk: VirtualDisk = RawDisk.open(name, io)
    elif _has_suffix(name, QCOW2_SUFFIX):
        disk = Qcow2Disk.open(name, io)
    else:
        raise UnknownDiskFormat(f"file has unknown format: {name}")
    disk.fixed_cache_size = bool(adjust_cache_size)
    disk.cache_size = cache_size
    return disk