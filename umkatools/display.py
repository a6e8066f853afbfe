"""Conversion of a linear frame buffer to 32-bit RGB888 pixels."""

from __future__ import annotations

import struct


def _check_length(data: bytes, needed: int) -> None:
    if len(data) < needed:
        raise ValueError(f"frame buffer too short: {len(data)} < {needed} bytes")


def _expand565(p: int) -> int:
    return ((p & 0xF800) << 8) + ((p & 0x7E0) << 5) + ((p & 0x1F) << 3)


def bpp16_to_rgb888(data: bytes, width: int, height: int, pitch: int) -> bytes:
    """Expand RGB565 pixels; output rows are ``pitch // 2`` pixels apart."""
    count = width * height
    _check_length(data, count * 2)
    src = struct.unpack_from(f"<{count}H", data)
    stride = pitch // 2
    size = max(stride * height, stride * (height - 1) + width) if height else 0
    out = [0] * size
    for y in range(height):
        base = y * stride
        out[base:base + width] = map(_expand565, src[y * width:(y + 1) * width])
    return struct.pack(f"<{size}I", *out)


def bpp24_to_rgb888(data: bytes, width: int, height: int) -> bytes:
    """Pad each 3-byte pixel with a zero fourth byte."""
    count = width * height
    _check_length(data, count * 3)
    src = bytes(data[:count * 3])
    out = bytearray(count * 4)
    for channel in range(3):
        out[channel::4] = src[channel::3]
    return bytes(out)


def bpp32_to_rgb888(data: bytes, width: int, height: int) -> bytes:
    """Copy 32-bit pixels unchanged."""
    size = width * height * 4
    _check_length(data, size)
    return bytes(data[:size])


def to_rgb888(data: bytes, width: int, height: int, bpp: int, pitch: int) -> bytes:
    """Convert a frame buffer of the given bit depth to RGB888."""
    if bpp == 16:
        return bpp16_to_rgb888(data, width, height, pitch)
    if bpp == 24:
        return bpp24_to_rgb888(data, width, height)
    if bpp == 32:
        return bpp32_to_rgb888(data, width, height)
    raise ValueError(f"unsupported bit depth: {bpp}")