from itertools import product

from umkatools.samehash import xfs_da_hashname
from umkatools.samehash_names import NAME_LEN, NAMES_CNT, same_hash_names


def test_count_and_shape():
    names = same_hash_names()
    assert len(names) == NAMES_CNT
    assert all(len(n) == NAME_LEN and n.isdigit() for n in names)


def test_names_are_unique_and_sorted():
    names = same_hash_names()
    assert len(set(names)) == len(names)
    assert list(names) == sorted(names)


def test_all_share_one_hash():
    base = xfs_da_hashname("000000000000")
    assert {xfs_da_hashname(n) for n in same_hash_names()} == {base}


def test_first_entries():
    assert same_hash_names()[:4] == (
        "000000000000", "000000100008", "000001000080", "000001100088",
    )


def test_last_entry():
    assert same_hash_names()[-1] == "118119808884"


def test_known_entries_present():
    names = set(same_hash_names())
    for name in ("002000000001", "004000000002", "004001000082",
                 "010000800000", "099110888844", "100008000000"):
        assert name in names


def test_different_hash_excluded():
    names = set(same_hash_names())
    candidate = "000000000001"
    assert xfs_da_hashname(candidate) != xfs_da_hashname("000000000000")
    assert candidate not in names


def test_complete_within_a_slice():
    base = xfs_da_hashname("000000000000")
    found = set()
    for d5, d6, d10, d11 in product("0123456789", repeat=4):
        name = "00000" + d5 + d6 + "000" + d10 + d11
        if xfs_da_hashname(name) == base:
            found.add(name)
    expected = {n for n in same_hash_names()
                if n[:5] == "00000" and n[7:10] == "000"}
    assert found == expected
    assert len(found) == 4


def test_result_is_cached():
    first = same_hash_names()
    second = same_hash_names()
    assert second is first
    assert second[0] == "000000000000"
    assert len(second) == NAMES_CNT