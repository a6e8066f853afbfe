"""Fill a directory with a reproducible random tree of folders and files."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from itertools import takewhile

PRINTABLES = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
# The name alphabet also holds a terminator; drawing it ends the name early.
_ALPHABET = PRINTABLES + "\0"
HEADER = b"<FILE>"
FOOTER = b"</FILE>"
_MASK32 = 0xFFFFFFFF
_USAGE = (
    "randdir <directory> <random_things_count> <name_max> <path_max> <file_size_max>\n"
    "    directory           - the folder to create random stuff in\n"
    "    random_things_count - count of things (folders and files) to generate\n"
    "    name_max            - max length of a file or folder name\n"
    "    path_max            - max length of a path relative to the root folder\n"
    "    file_size_max       - max size of a generated file\n"
)


def uint_hash(x: int) -> int:
    """A 32-bit integer mixing hash."""
    x &= _MASK32
    x = (((x >> 16) ^ x) * 0x45D9F3B) & _MASK32
    x = (((x >> 16) ^ x) * 0x45D9F3B) & _MASK32
    return (x >> 16) ^ x


def file_contents(path: str, max_size: int, seed: int) -> bytes:
    """Contents of a generated file: header, seeded data, footer."""
    overhead = len(HEADER) + len(FOOTER)
    if max_size < overhead:
        raise ValueError(f"file size limit must be at least {overhead}")
    raw_path = path.encode()
    if not raw_path:
        raise ValueError("path must not be empty")
    seed &= _MASK32
    data_size = min(seed % max_size, max_size - overhead)
    start = len(HEADER)
    low = seed & 0xFF
    data = bytes(
        (uint_hash(i) ^ raw_path[i % len(raw_path)] ^ low) & 0xFF
        for i in range(start, start + data_size)
    )
    return HEADER + data + FOOTER


def append_name(path: str, path_max: int, name_max: int, seed: int) -> str:
    """Append a seeded name to ``path``; unchanged if it would be too long."""
    if name_max <= 0:
        raise ValueError("name_max must be positive")
    seed &= _MASK32
    name_len = seed % name_max or 1
    if len(path) + 1 + name_len >= path_max:
        return path
    chars = (
        _ALPHABET[((seed ^ (139 * i)) & _MASK32) % len(_ALPHABET)]
        for i in range(name_len)
    )
    return path + "/" + "".join(takewhile(lambda c: c != "\0", chars))


def parent_path(path: str) -> str:
    """Drop the last ``/``-separated component, if there is one."""
    head, sep, _ = path.rpartition("/")
    return head if sep else path


def _exists(root: str, path: str) -> bool:
    return os.access(os.path.join(root, path), os.W_OK)


def _append_unique(root: str, path: str, path_max: int, name_max: int,
                   seed: int) -> str:
    while True:
        path = append_name(path, path_max, name_max, seed)
        if not _exists(root, path):
            return path
        seed = uint_hash(seed)
        path = parent_path(path)


def _create_file(root: str, path: str, contents: bytes) -> None:
    flags = os.O_CREAT | os.O_WRONLY | getattr(os, "O_BINARY", 0)
    fd = os.open(os.path.join(root, path), flags, 0o644)
    try:
        os.write(fd, contents)
    finally:
        os.close(fd)


def generate(root, count: int, name_max: int, path_max: int,
             file_size_max: int) -> list[str]:
    """Create ``count`` folders and files under ``root``; return their paths.

    Paths are relative to ``root`` and start with ``./``.  About 15% of the
    steps create a folder and enter it, 15% leave the current folder before
    creating a file, and the rest create a file in place.
    """
    if name_max <= 0:
        raise ValueError("name_max must be positive")
    if path_max < 4:
        raise ValueError("path_max is too small for any name")
    overhead = len(HEADER) + len(FOOTER)
    if file_size_max < overhead:
        raise ValueError(f"file_size_max must be at least {overhead}")
    root = os.fspath(root)
    if not os.path.isdir(root):
        raise NotADirectoryError(f"not a directory: {root}")

    created = []
    path = "."
    for i in range(count):
        h = uint_hash(i)
        if 85 <= h % 100 <= 99:
            path = _append_unique(root, path, path_max, name_max, h)
            os.mkdir(os.path.join(root, path), 0o755)
            created.append(path)
            continue
        if h % 100 <= 14:
            path = parent_path(path)
        path = _append_unique(root, path, path_max, name_max, h)
        _create_file(root, path, file_contents(path, file_size_max, h))
        created.append(path)
        path = parent_path(path)
    return created


def main(argv: Sequence[str] | None = None) -> int:
    """randdir <directory> <count> <name_max> <path_max> <file_size_max>."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 5:
        sys.stderr.write(_USAGE)
        return 1
    try:
        count, name_max, path_max, file_size_max = (int(a) for a in args[1:])
    except ValueError:
        sys.stderr.write(_USAGE)
        return 1
    root = args[0]
    if not os.path.isdir(root):
        sys.stderr.write(f"Can't open root folder ({root}): not a directory\n")
        return 1
    try:
        generate(root, count, name_max, path_max, file_size_max)
    except ValueError as exc:
        sys.stderr.write(f"randdir: {exc}\n")
        return 1
    except OSError as exc:
        sys.stderr.write(f"Can't create {exc.filename}: {exc.strerror}\n")
        return 1
    return 0