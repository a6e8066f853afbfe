"""The devices.dat file: PCI devices with their interrupt lines."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass

_ENTRY = struct.Struct("<BBHHHII")
ENTRY_SIZE = _ENTRY.size
TERMINATOR = b"\xff\xff\xff\xff"


@dataclass(frozen=True)
class DevicesDatEntry:
    """One PCI function and the IRQ routed to it."""

    bus: int
    dev: int
    fun: int
    vendor_id: int
    device_id: int
    irq: int

    def __post_init__(self) -> None:
        limits = {
            "bus": 0xFF,
            "dev": 0x1F,
            "fun": 0x7,
            "vendor_id": 0xFFFF,
            "device_id": 0xFFFF,
            "irq": 0xFFFFFFFF,
        }
        for name, limit in limits.items():
            value = getattr(self, name)
            if not 0 <= value <= limit:
                raise ValueError(f"{name} out of range: {value}")

    def pack(self) -> bytes:
        """Encode as the 16-byte record: fun in bits 0-2 and dev in bits 3-7."""
        devfn = self.fun | (self.dev << 3)
        return _ENTRY.pack(devfn, self.bus, 0, self.vendor_id, self.device_id,
                           self.irq, 0)

    @classmethod
    def unpack(cls, data: bytes) -> DevicesDatEntry:
        """Decode one 16-byte record."""
        if len(data) != ENTRY_SIZE:
            raise ValueError(f"record must be {ENTRY_SIZE} bytes, got {len(data)}")
        devfn, bus, _, vendor_id, device_id, irq, _ = _ENTRY.unpack(data)
        return cls(bus=bus, dev=devfn >> 3, fun=devfn & 0x7,
                   vendor_id=vendor_id, device_id=device_id, irq=irq)


def write_devices_dat(path, entries: Iterable[DevicesDatEntry]) -> int:
    """Write entries that have an IRQ, then the terminator; return how many."""
    written = 0
    with open(path, "wb") as f:
        for entry in entries:
            if entry.irq:
                f.write(entry.pack())
                written += 1
        f.write(TERMINATOR)
    return written