"""Create directories whose names are built from same-hash segments."""

from __future__ import annotations

import errno
import os
import sys
from collections.abc import Iterator, Sequence
from itertools import islice, product
from pathlib import Path

from umkatools.samehash_names import NAMES_CNT, same_hash_names

PREFIX = "d_"
SEPARATOR = "_"
_USAGE = "mksamehash <directory> <count> [-q]\n"


def segment_count(count: int) -> int:
    """How many name segments are needed to form ``count`` distinct names."""
    if count < 0:
        raise ValueError("count must not be negative")
    segments = 1
    capacity = NAMES_CNT
    while capacity < count:
        capacity *= NAMES_CNT
        segments += 1
    return segments


def dir_names(count: int) -> Iterator[str]:
    """The first ``count`` names, ``d_`` then segments joined by ``_``."""
    segments = segment_count(count)
    combos = product(same_hash_names(), repeat=segments)
    for combo in islice(combos, count):
        yield PREFIX + SEPARATOR.join(combo)


def make_same_hash_dirs(path, count: int) -> list[str]:
    """Create ``count`` directories from :func:`dir_names` inside ``path``."""
    root = Path(path)
    if not root.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR),
                                 str(path))
    created = []
    for name in dir_names(count):
        (root / name).mkdir(mode=0o755)
        created.append(name)
    return created


def main(argv: Sequence[str] | None = None) -> int:
    """mksamehash <directory> <count> [-q]."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        sys.stderr.write(_USAGE)
        return 1
    try:
        count = int(args[1])
        if count < 0:
            raise ValueError(count)
    except ValueError:
        sys.stderr.write(_USAGE)
        return 1
    root = args[0]
    if not os.path.isdir(root):
        sys.stderr.write(f"Can't open {root}: {os.strerror(errno.ENOTDIR)}\n")
        return 1
    try:
        make_same_hash_dirs(root, count)
    except OSError as exc:
        sys.stderr.write(f"Can't mkdir {exc.filename}: {exc.strerror}\n")
        return 1
    return 0