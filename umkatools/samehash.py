"""Search for fixed-width names that share one XFS directory hash."""

from __future__ import annotations

import signal
import sys
from collections.abc import Iterator, Sequence

NUM_LEN = 10
_MASK32 = 0xFFFFFFFF
_USAGE = "gensamehash <hash> <hash_cnt> <start_num>\n"


def _rol32(x: int, y: int) -> int:
    x &= _MASK32
    return ((x << y) | (x >> (32 - y))) & _MASK32


def _signed_chars(name) -> list[int]:
    data = name.encode("latin-1") if isinstance(name, str) else bytes(name)
    return [b - 256 if b >= 128 else b for b in data]


def xfs_da_hashname(name) -> int:
    """The XFS directory-entry name hash of ``name`` (str or bytes)."""
    chars = _signed_chars(name)
    full = len(chars) - len(chars) % 4
    h = 0
    for a, b, c, d in zip(*[iter(chars[:full])] * 4):
        h = ((a << 21) ^ (b << 14) ^ (c << 7) ^ d ^ _rol32(h, 28)) & _MASK32
    rest = chars[full:]
    if len(rest) == 3:
        a, b, c = rest
        return ((a << 14) ^ (b << 7) ^ c ^ _rol32(h, 21)) & _MASK32
    if len(rest) == 2:
        a, b = rest
        return ((a << 7) ^ b ^ _rol32(h, 14)) & _MASK32
    if len(rest) == 1:
        return (rest[0] ^ _rol32(h, 7)) & _MASK32
    return h


def increment(name: str) -> str:
    """Next name counting in digits 0-9, then A-Z, then a-z."""
    stem = name.rstrip("z")
    carried = len(name) - len(stem)
    if not stem:
        return "0" * len(name)
    last = stem[-1]
    following = {"9": "A", "Z": "a"}.get(last, chr(ord(last) + 1))
    return stem[:-1] + following + "0" * carried


class _Search:
    def __init__(self, hash_value: int, start_num: int) -> None:
        if start_num < 0:
            raise ValueError("start number must not be negative")
        self.hash_value = hash_value & _MASK32
        self.current = f"{start_num:0{NUM_LEN}d}"

    def __iter__(self) -> Iterator[str]:
        while True:
            head, tail = self.current[:NUM_LEN], self.current[NUM_LEN:]
            if xfs_da_hashname(head) == self.hash_value:
                yield self.current
            self.current = increment(head) + tail


def find_same_hash(hash_value: int, start_num: int) -> Iterator[str]:
    """Endlessly yield names, from ``start_num`` on, whose hash is ``hash_value``."""
    return iter(_Search(hash_value, start_num))


def main(argv: Sequence[str] | None = None) -> int:
    """gensamehash <hash> <hash_cnt> <start_num>: append matches to a file."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        sys.stderr.write(_USAGE)
        return 1
    try:
        hash_value = int(args[0], 16) & _MASK32
        hash_cnt = int(args[1], 0)
        search = _Search(hash_value, int(args[2]))
    except ValueError:
        sys.stderr.write(_USAGE)
        return 1

    import os

    pid = os.getpid()
    sys.stderr.write(f"pid: {pid}\n")
    out_name = f"hash_0x{hash_value:08x}.{pid}"

    usr1 = getattr(signal, "SIGUSR1", None)
    previous = None
    if usr1 is not None:
        previous = signal.signal(
            usr1, lambda *_: sys.stderr.write(f"# cur name is {search.current}\n"))
    try:
        for name in search:
            with open(out_name, "a", encoding="ascii") as f:
                f.write(f"{hash_cnt & _MASK32:07d} {name}\n")
            hash_cnt += 1
    except KeyboardInterrupt:
        return 0
    finally:
        if usr1 is not None:
            signal.signal(usr1, previous)
    return 0