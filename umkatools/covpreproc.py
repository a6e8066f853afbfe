"""Annotate an assembler listing with branch coverage counters."""

from __future__ import annotations

import struct
import sys
from array import array
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

COVERAGE_TABLE_SIZE = 512 * 1024
COVERAGE_BEGIN = 0x34
TEXT_COLUMN = 64

_MASK64 = (1 << 64) - 1
_HEX_DIGITS = frozenset("0123456789ABCDEF")
_RECORD = struct.Struct("<QQ")
_COND_JUMPS = (
    "jo", "jno", "js", "jns", "je", "jne", "jz", "jnz", "jb", "jnb", "jc",
    "jnc", "jae", "jnae", "jbe", "jna", "ja", "jnbe", "jl", "jnge", "jge",
    "jnl", "jle", "jng", "jg", "jnle", "jp", "jpe", "jnp", "jpo", "loop",
    "jcxz", "jecxz",
)
_USAGE = "usage: covpreproc <listing file> <coverage files ...>\n"


class CoverageTable:
    """Per-address counts of branches taken to and from each byte."""

    def __init__(self, begin: int = COVERAGE_BEGIN,
                 size: int = COVERAGE_TABLE_SIZE) -> None:
        self.begin = begin
        self.size = size
        self.to_cnt = array("Q", bytes(8 * size))
        self.from_cnt = array("Q", bytes(8 * size))

    def add_file(self, fname) -> None:
        """Add the (to, from) pairs of a coverage dump to the table."""
        data = Path(fname).read_bytes()
        usable = min(len(data) // _RECORD.size, self.size) * _RECORD.size
        for index, (to, frm) in enumerate(_RECORD.iter_unpack(data[:usable])):
            if to:
                self.to_cnt[index] = (self.to_cnt[index] + to) & _MASK64
            if frm:
                self.from_cnt[index] = (self.from_cnt[index] + frm) & _MASK64

    def totals(self, pos: int, length: int) -> tuple[int, int]:
        """Sum the to and from counts over ``length`` bytes at ``pos``."""
        lo = max(pos, self.begin) - self.begin
        hi = min(pos + length, self.begin + self.size) - self.begin
        if hi <= lo:
            return 0, 0
        return sum(self.to_cnt[lo:hi]), sum(self.from_cnt[lo:hi])


def _is_address_line(line: str) -> bool:
    prefix = line[:9]
    digits = len(prefix) - len(prefix.lstrip("0123456789ABCDEF"))
    return digits == 8


def count_line_bytes(line: str) -> int:
    """Count the hex bytes in the byte columns of a listing line."""
    count = 0
    for column in range(10, 59, 3):
        if column >= len(line) or line[column] == " ":
            break
        count += 1
    return count


def count_block_bytes(lines: Iterable[str]) -> int:
    """Count the bytes of the instruction starting at the first line."""
    it = iter(lines)
    first = next(it, None)
    if first is None or not _is_address_line(first):
        return 0
    count = count_line_bytes(first)
    for line in it:
        if line[:1] == " " and len(line) > 10 and line[10] != " ":
            count += count_line_bytes(line)
        else:
            break
    return count


def is_cond_jump(text: str) -> bool:
    """Whether the instruction text is a conditional branch."""
    return text.lstrip(" \t").startswith(_COND_JUMPS)


def annotate_listing(lines: Sequence[str], table: CoverageTable) -> Iterator[str]:
    """Yield listing lines prefixed with coverage columns."""
    lines = list(lines)
    cur = 0
    for index, line in enumerate(lines):
        text = line[TEXT_COLUMN:]
        if not _is_address_line(line):
            yield " " * 32 + " : " + text
            continue
        is_cond = is_cond_jump(text)
        inst_len = count_block_bytes(lines[j] for j in range(index, len(lines)))
        pos = int(line[:8], 16)
        total_to, total_from = table.totals(pos, inst_len)
        cur = (cur + total_to) & _MASK64
        parts = []
        if is_cond:
            taken = total_from & _MASK64
            not_taken = (cur - taken) & _MASK64
            parts.append(" " if taken and not_taken else "-")
        else:
            parts.append(" ")
        parts.append(" " if cur else "-")
        if is_cond:
            parts.append(f"{taken:10}/{not_taken}".ljust(19))
        else:
            parts.append(" " * 19)
        parts.append(f" {cur:10}")
        cur = (cur - total_from) & _MASK64
        yield "".join(parts) + " : " + text


def main(argv: Sequence[str] | None = None) -> int:
    """Print the annotated listing: covpreproc <listing> <coverage files...>."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        sys.stderr.write(_USAGE)
        return 1
    table = CoverageTable()
    try:
        for fname in args[1:]:
            table.add_file(fname)
        with open(args[0], encoding="latin-1", newline="") as f:
            lines = f.readlines()
    except OSError as exc:
        sys.stderr.write(f"covpreproc: {exc}\n")
        return 1
    sys.stdout.writelines(annotate_listing(lines, table))
    return 0