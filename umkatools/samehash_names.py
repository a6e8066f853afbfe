"""Twelve-digit names that share one XFS directory-entry hash.

Every name holds only the digits ``0``-``9`` and hashes to the same value as
``000000000000``.  Digit characters differ only in their low four bits, and the
hash XORs those bits into fixed places.  So a name keeps the hash exactly when
the bit pattern of its first seven digits is cancelled by the rest:

* digits 3 and 4 are ``0`` or ``1``;
* digit 5 is ``0``, ``1``, ``8`` or ``9``, its high bit equal to digit 0's low bit;
* digit 6 is ``0``, ``1``, ``8`` or ``9``, its high bit equal to digit 1's low bit;
* digits 7 to 11 are then fixed by the earlier ones, and each must stay a
  decimal digit.
"""

from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache
from itertools import islice, product

NAME_LEN = 12
NAMES_CNT = 1000


def _all_names() -> Iterator[str]:
    """Every same-hash name, in ascending order."""
    for a0, a1, a2 in product(range(10), repeat=3):
        for a3, a4, b5, b6 in product((0, 1), repeat=4):
            a5 = b5 | (a0 & 1) << 3
            a6 = b6 | (a1 & 1) << 3
            a7 = (a2 & 1) << 3
            a8 = a3 << 3
            a9 = a0 >> 1 | a4 << 3
            a10 = a1 >> 1 | b5 << 3
            a11 = a2 >> 1 | b6 << 3
            if max(a9, a10, a11) > 9:
                continue
            digits = (a0, a1, a2, a3, a4, a5, a6, a7, a8, a9, a10, a11)
            yield "".join(map(str, digits))


@lru_cache(maxsize=None)
def same_hash_names() -> tuple[str, ...]:
    """The first 1000 same-hash names, in ascending order."""
    return tuple(islice(_all_names(), NAMES_CNT))