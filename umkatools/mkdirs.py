"""Fill directories with many subdirectories for file-system testing."""

from __future__ import annotations

import errno
import os
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path

_RANGE_USAGE = ("mkdirrange <directory> <num_begin> <num_end> <pat_min> <pat_max>\n"
                "pat_min + pat_max <= 244\n")
_DOUBLE_USAGE = "mkdoubledirs <directory> <prefix> <count>\n"


def range_dir_names(begin: int, end: int, pat_min: int,
                    pat_max: int) -> Iterator[str]:
    """Names ``dNNNNNNNNNN_`` followed by ``pat_min + n % pat_max`` x's."""
    if pat_max <= 0:
        raise ValueError("pat_max must be positive")
    for current in range(begin, end):
        yield f"d{current:010d}_" + "x" * (pat_min + current % pat_max)


def _directory(path) -> Path:
    root = Path(path)
    if not root.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR),
                                 str(path))
    return root


def make_dir_range(path, begin: int, end: int, pat_min: int,
                   pat_max: int) -> list[str]:
    """Create the directories of :func:`range_dir_names` inside ``path``."""
    root = _directory(path)
    created = []
    for name in range_dir_names(begin, end, pat_min, pat_max):
        (root / name).mkdir(mode=0o755)
        created.append(name)
    return created


def make_double_dirs(path, prefix: str, count: int) -> list[str]:
    """Create ``prefixNNNNNNNNNN/prefixNNNNNNNNNN`` for ``count`` numbers."""
    root = _directory(path)
    created = []
    for cur in range(count):
        name = f"{prefix}{cur:010d}"
        outer = root / name
        outer.mkdir(mode=0o755)
        (outer / name).mkdir(mode=0o755)
        created.append(name)
    return created


def _report(exc: OSError) -> int:
    sys.stderr.write(f"Can't mkdir {exc.filename}: {exc.strerror}\n")
    return 1


def main_dirrange(argv: Sequence[str] | None = None) -> int:
    """mkdirrange <directory> <num_begin> <num_end> <pat_min> <pat_max>."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 5:
        sys.stderr.write(_RANGE_USAGE)
        return 1
    try:
        begin, end = int(args[1]), int(args[2])
        pat_min, pat_max = int(args[3], 0), int(args[4], 0)
        make_dir_range(args[0], begin, end, pat_min, pat_max)
    except ValueError:
        sys.stderr.write(_RANGE_USAGE)
        return 1
    except OSError as exc:
        return _report(exc)
    return 0


def main_doubledirs(argv: Sequence[str] | None = None) -> int:
    """mkdoubledirs <directory> <prefix> <count>."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        sys.stderr.write(_DOUBLE_USAGE)
        return 1
    try:
        count = int(args[2])
        make_double_dirs(args[0], args[1], count)
    except ValueError:
        sys.stderr.write(_DOUBLE_USAGE)
        return 1
    except OSError as exc:
        return _report(exc)
    return 0