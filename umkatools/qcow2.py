"""Read-only access to qcow2 (version 3) disk images."""

from __future__ import annotations

import io as _stdio
import os
import struct
import zlib
from collections.abc import Sequence
from dataclasses import dataclass

from umkatools.base import VirtualDisk, sector_size_for
from umkatools.io import UmkaIo

QCOW2_SUFFIX = ".qcow2"
QCOW2_MAGIC = b"QFI\xfb"
QCOW2_VERSION = 3

HEADER = struct.Struct(">4sIQIIQIIQQIIQQQQII")

L1_ENTRY_OFFSET_MASK = 0x00FFFFFFFFFFFF00
L2_ENTRY_STD_ZEROED = 0x1
L2_ENTRY_STD_OFFSET = 0x00FFFFFFFFFFFF00
L2_ENTRY_FORMAT = 0x4000000000000000

_MIN_CLUSTER_BITS = 9
_MAX_CLUSTER_BITS = 21
_MIN_REFCOUNT_ORDER = 4
_MAX_REFCOUNT_ORDER = 6
_COMPRESSED_SECTOR = 512


class Qcow2Error(ValueError):
    """The image is not a qcow2 image this reader can handle."""


@dataclass(frozen=True)
class Qcow2Header:
    """The fixed part of a qcow2 header, as stored big-endian on disk."""

    magic: bytes
    version: int
    back_file_offset: int
    back_file_size: int
    cluster_bits: int
    size: int
    crypt_method: int
    l1_size: int
    l1_table_offset: int
    refcount_table_offset: int
    refcount_table_clusters: int
    nb_snapshots: int
    snapshots_offset: int
    incompatible_features: int
    compatible_features: int
    autoclear_features: int
    refcount_order: int
    header_length: int

    @classmethod
    def parse(cls, data: bytes) -> Qcow2Header:
        """Decode and validate a header; raise :class:`Qcow2Error` if unusable."""
        if len(data) < HEADER.size:
            raise Qcow2Error(
                f"image header is truncated: {len(data)} < {HEADER.size} bytes")
        header = cls(*HEADER.unpack_from(data))
        header._validate()
        return header

    def _validate(self) -> None:
        if self.magic != QCOW2_MAGIC:
            raise Qcow2Error(f"bad image signature: {self.magic!r}")
        if self.version != QCOW2_VERSION:
            raise Qcow2Error(f"bad image format version: {self.version}")
        if not _MIN_CLUSTER_BITS <= self.cluster_bits <= _MAX_CLUSTER_BITS:
            raise Qcow2Error(f"bad cluster_bits value: {self.cluster_bits}")
        if self.crypt_method:
            raise Qcow2Error(f"bad crypt_method: {self.crypt_method}")
        if self.incompatible_features:
            raise Qcow2Error(
                "unsupported incompatible_feature(s): "
                f"0x{self.incompatible_features:x}")
        if not _MIN_REFCOUNT_ORDER <= self.refcount_order <= _MAX_REFCOUNT_ORDER:
            raise Qcow2Error(f"bad refcount_order value: {self.refcount_order}")


class Qcow2Disk(VirtualDisk):
    """A qcow2 image opened read-only; compressed clusters are inflated."""

    def __init__(self, fd: int, header: Qcow2Header, l1: Sequence[int],
                 sect_size: int, io: UmkaIo | None = None) -> None:
        super().__init__(sect_size, header.size // sect_size, io)
        self._fd: int | None = fd
        self.header = header
        self.cluster_bits = header.cluster_bits
        self.cluster_size = 1 << header.cluster_bits
        self.l1 = tuple(l1)
        self.l2_entry_cmp_x = 62 - (self.cluster_bits - 8)
        self.l2_entry_cmp_offset_mask = (1 << self.l2_entry_cmp_x) - 1
        self.l2_entry_cmp_sect_cnt_mask = (
            ((1 << 62) - 1) ^ self.l2_entry_cmp_offset_mask)
        self._zero_cluster = bytes(self.cluster_size)
        self._cached_index: int | None = None
        self._cached_cluster = b""

    @classmethod
    def open(cls, fname, io: UmkaIo | None = None) -> Qcow2Disk:
        """Open ``fname``, check its header and load the L1 table."""
        io = io if io is not None else UmkaIo()
        fd = os.open(fname, os.O_RDONLY | getattr(os, "O_BINARY", 0))
        try:
            header = Qcow2Header.parse(_read_at(io, fd, 0, HEADER.size))
            raw = _read_exact(io, fd, header.l1_table_offset,
                              header.l1_size * 8, "L1 table")
            l1 = struct.unpack(f">{header.l1_size}Q", raw)
        except BaseException:
            os.close(fd)
            raise
        return cls(fd, header, l1, sector_size_for(fname), io)

    def _require_fd(self) -> int:
        if self._fd is None:
            raise ValueError("disk is closed")
        return self._fd

    def _load_cluster(self, index: int) -> bytes:
        fd = self._require_fd()
        l1_index, l2_index = divmod(index, self.cluster_size // 8)
        if l1_index >= len(self.l1):
            return self._zero_cluster
        l2_table = self.l1[l1_index] & L1_ENTRY_OFFSET_MASK
        if not l2_table:
            return self._zero_cluster
        (entry,) = struct.unpack(
            ">Q", _read_exact(self.io, fd, l2_table + l2_index * 8, 8, "L2 entry"))
        if not entry & L2_ENTRY_FORMAT:
            offset = entry & L2_ENTRY_STD_OFFSET
            if entry & L2_ENTRY_STD_ZEROED or not offset:
                return self._zero_cluster
            data = _read_at(self.io, fd, offset, self.cluster_size)
            return data.ljust(self.cluster_size, b"\0")
        cmp_offset = entry & self.l2_entry_cmp_offset_mask
        extra = (entry & self.l2_entry_cmp_sect_cnt_mask) >> self.l2_entry_cmp_x
        cmp_size = (_COMPRESSED_SECTOR - (cmp_offset & (_COMPRESSED_SECTOR - 1))
                    + extra * _COMPRESSED_SECTOR)
        compressed = _read_at(self.io, fd, cmp_offset, cmp_size)
        try:
            data = zlib.decompressobj(-zlib.MAX_WBITS).decompress(
                compressed, self.cluster_size)
        except zlib.error as exc:
            raise Qcow2Error(f"can't inflate cluster 0x{index:x}: {exc}") from exc
        return data.ljust(self.cluster_size, b"\0")

    def _cluster(self, index: int) -> bytes:
        if index != self._cached_index:
            self._cached_cluster = self._load_cluster(index)
            self._cached_index = index
        return self._cached_cluster

    def _read_bytes(self, offset: int, length: int) -> bytes:
        out = bytearray()
        while len(out) < length:
            index, within = divmod(offset + len(out), self.cluster_size)
            out += self._cluster(index)[within:within + length - len(out)]
        return bytes(out)

    def read(self, start_sector: int, count: int) -> bytes:
        """Read ``count`` guest sectors; unallocated areas read as zeros."""
        self._require_fd()
        if start_sector < 0 or count < 0:
            raise ValueError("sector number and count must not be negative")
        return self._read_bytes(start_sector * self.sect_size,
                                count * self.sect_size)

    def write(self, data: bytes, start_sector: int) -> int:
        """qcow2 images are read-only here."""
        raise _stdio.UnsupportedOperation("writing to qcow2 images is unsupported")

    def close(self) -> None:
        """Close the image file."""
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None
        self._cached_index = None
        self._cached_cluster = b""


def _read_at(io: UmkaIo, fd: int, offset: int, count: int) -> bytes:
    os.lseek(fd, offset, os.SEEK_SET)
    return io.read(fd, count)


def _read_exact(io: UmkaIo, fd: int, offset: int, count: int, what: str) -> bytes:
    data = _read_at(io, fd, offset, count)
    if len(data) != count:
        raise Qcow2Error(f"can't read {what} from image file")
    return data