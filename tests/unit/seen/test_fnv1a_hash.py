from __future__ import annotations

from fixdep.seen import FNV_OFFSET_BASIS, fnv1a_32


def test_empty_input_returns_offset_basis() -> None:
    assert fnv1a_32(b"") == FNV_OFFSET_BASIS == 0x811C9DC5


def test_known_fnv1a_vectors() -> None:
    assert fnv1a_32(b"a") == 0xE40C292C
    assert fnv1a_32(b"foobar") == 0xBF9CF968


def test_hash_stays_within_32_bits() -> None:
    value = fnv1a_32(b"include/linux/kernel.h" * 64)

    assert 0 <= value <= 0xFFFFFFFF
