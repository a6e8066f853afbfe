"""Write files whose bytes spell out their own offsets."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator, Sequence

BUF_LEN = 0x10
_MASK64 = (1 << 64) - 1
_USAGE = "mkfilepattern filename offset length\n"


def _width(value: int) -> int:
    if value < 0x100:
        return 1
    if value < 0x10000:
        return 2
    if value < 0x100000000:
        return 4
    return 8


def _chunks(offset: int, length: int) -> Iterator[bytes]:
    if offset < 0:
        raise ValueError("offset must not be negative")
    end = offset + length
    pos = offset
    while pos < end:
        count = min(BUF_LEN, end - pos)
        buf = bytearray()
        while len(buf) < count:
            value = pos + len(buf)
            buf += (value & _MASK64).to_bytes(_width(value), "little")
        yield bytes(buf[:count])
        pos += count


def pattern_bytes(offset: int, length: int) -> bytes:
    """The ``length`` pattern bytes that belong at ``offset`` of a file.

    Every position holds its own offset, little-endian, as wide as the value
    needs (1, 2, 4 or 8 bytes).  The pattern restarts every 16 bytes, so a
    value that would cross such a boundary is cut short.
    """
    return b"".join(_chunks(offset, length))


def write_pattern(path, offset: int, length: int) -> int:
    """Write the pattern into ``path`` at ``offset``; other bytes are kept."""
    if offset < 0:
        raise ValueError("offset must not be negative")
    flags = os.O_CREAT | os.O_WRONLY | getattr(os, "O_BINARY", 0)
    fd = os.open(path, flags, 0o644)
    written = 0
    try:
        os.lseek(fd, offset, os.SEEK_SET)
        for chunk in _chunks(offset, length):
            written += os.write(fd, chunk)
    finally:
        os.close(fd)
    return written


def _parse_int(text: str) -> int:
    """Parse an integer the way C does with base 0: hex, octal or decimal."""
    s = text.strip()
    sign = 1
    if s[:1] in "+-" and s:
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s[:2].lower() == "0x":
        value = int(s[2:], 16)
    elif len(s) > 1 and s.startswith("0"):
        value = int(s[1:], 8)
    else:
        value = int(s, 10)
    return sign * value


def main(argv: Sequence[str] | None = None) -> int:
    """mkfilepattern filename offset length."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        sys.stderr.write(_USAGE)
        return 1
    try:
        offset = _parse_int(args[1])
        length = _parse_int(args[2])
    except ValueError:
        sys.stderr.write(_USAGE)
        return 1
    try:
        write_pattern(args[0], offset, length)
    except ValueError as exc:
        sys.stderr.write(f"mkfilepattern: {exc}\n")
        return 1
    except OSError as exc:
        sys.stderr.write(f"Can't open {args[0]}: {exc.strerror}\n")
        return 1
    return 0