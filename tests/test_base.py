from pathlib import Path

import pytest

from umkatools.base import MediaInfo, VirtualDisk, sector_size_for


class MemoryDisk(VirtualDisk):
    def __init__(self, data, sect_size=512, **kwargs):
        super().__init__(sect_size, len(data) // sect_size, **kwargs)
        self.data = bytearray(data)
        self.closed = False

    def read(self, start_sector, count):
        start = start_sector * self.sect_size
        return bytes(self.data[start:start + count * self.sect_size])

    def write(self, data, start_sector):
        start = start_sector * self.sect_size
        self.data[start:start + len(data)] = data
        return len(data)

    def close(self):
        self.closed = True


@pytest.mark.parametrize(
    "name, expected",
    [
        ("disk.raw", 512),
        ("disk_s4k.raw", 4096),
        ("fat_s4096.qcow2", 4096),
        ("s4.raw", 512),
    ],
)
def test_sector_size_for(name, expected):
    assert sector_size_for(name) == expected


def test_sector_size_for_path():
    assert sector_size_for(Path("img_s4k.raw")) == 4096


def test_query_media():
    disk = MemoryDisk(bytes(512 * 3))
    assert disk.query_media() == MediaInfo(flags=0, sector_size=512, capacity=3)


def test_adjust_cache_size_fixed():
    disk = MemoryDisk(bytes(512), cache_size=77, fixed_cache_size=True)
    assert VirtualDisk.adjust_cache_size(disk, 1000) == 77
    assert VirtualDisk.query_media(disk) == MediaInfo(
        flags=0, sector_size=512, capacity=1
    )


def test_adjust_cache_size_suggested():
    disk = MemoryDisk(bytes(512), cache_size=77)
    assert VirtualDisk.adjust_cache_size(disk, 1000) == 1000
    assert VirtualDisk.query_media(disk) == MediaInfo(
        flags=0, sector_size=512, capacity=1
    )


def test_context_manager_closes():
    with MemoryDisk(bytes(512 * 2)) as disk:
        assert VirtualDisk.query_media(disk) == MediaInfo(
            flags=0, sector_size=512, capacity=2
        )
        assert disk.read(0, 1) == bytes(512)
    assert disk.closed


def test_abstract_base_cannot_be_built():
    with pytest.raises(TypeError):
        VirtualDisk(512, 1)