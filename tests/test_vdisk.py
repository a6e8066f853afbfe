import struct

import pytest

from umkatools.base import MediaInfo
from umkatools.qcow2 import Qcow2Disk
from umkatools.raw import RawDisk
from umkatools.vdisk import UnknownDiskFormat, open_vdisk


def make_qcow2(path):
    head = struct.pack(">4sIQIIQIIQQIIQQQQII", b"QFI\xfb", 3, 0, 0, 9, 1024,
                       0, 1, 512, 0, 0, 0, 0, 0, 0, 0, 4, 104)
    path.write_bytes(head.ljust(512, b"\0") + bytes(8))
    return path


def test_raw_image(tmp_path):
    path = tmp_path / "disk.raw"
    content = bytes(range(256)) * 6
    path.write_bytes(content)
    with open_vdisk(path) as disk:
        assert isinstance(disk, RawDisk)
        assert disk.query_media() == MediaInfo(0, 512, 3)
        assert disk.read(0, 3) == content


def test_cache_size_fixed(tmp_path):
    path = tmp_path / "disk.raw"
    path.write_bytes(bytes(512))
    with open_vdisk(path, True, 4096) as disk:
        assert disk.adjust_cache_size(100) == 4096


def test_cache_size_suggested(tmp_path):
    path = tmp_path / "disk.raw"
    path.write_bytes(bytes(512))
    with open_vdisk(path, False, 4096) as disk:
        assert disk.adjust_cache_size(100) == 100


def test_qcow2_image(tmp_path):
    path = make_qcow2(tmp_path / "disk.qcow2")
    with open_vdisk(str(path)) as disk:
        assert isinstance(disk, Qcow2Disk)
        assert disk.read(0, 2) == bytes(1024)


@pytest.mark.parametrize("name", ["disk.img", ".raw", ".qcow2", "raw"])
def test_unknown_format(name):
    with pytest.raises(UnknownDiskFormat):
        open_vdisk(name)