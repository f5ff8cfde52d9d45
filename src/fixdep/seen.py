"""Insert-on-miss set of path and symbol names keyed by FNV-1a hash."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 0x01000193
DEFAULT_BUCKET_COUNT = 256

_HASH_MASK = 0xFFFFFFFF


def fnv1a_32(data: bytes) -> int:
    """Return the 32-bit FNV-1a hash of raw bytes."""
    value = FNV_OFFSET_BASIS
    for byte in data:
        value = ((value ^ byte) * FNV_PRIME) & _HASH_MASK
    return value


def encode_name(name: str) -> bytes:
    """Encode a name back to the raw bytes it was decoded from."""
    return name.encode("utf-8", errors="surrogateescape")


@dataclass(slots=True, frozen=True)
class SeenEntry:
    """Owned copy of a name plus its byte length and hash."""

    name: str
    length: int
    hash: int


class SeenSet:
    """Fixed bucket array with head-inserted chains.

    Entries are never removed. Membership compares hash, then byte length,
    then content, so colliding hashes never report a false hit.
    """

    def __init__(
        self,
        bucket_count: int = DEFAULT_BUCKET_COUNT,
        hasher: Callable[[bytes], int] = fnv1a_32,
    ) -> None:
        if bucket_count < 1:
            raise ValueError("bucket_count must be a positive integer.")
        self._buckets: list[list[SeenEntry]] = [[] for _ in range(bucket_count)]
        self._hasher = hasher
        self._order: list[SeenEntry] = []

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[str]:
        return (entry.name for entry in self._order)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        raw = encode_name(name)
        return self._find(raw, self._hasher(raw)) is not None

    def test_and_add(self, name: str) -> bool:
        """Return True when already present, otherwise insert and return False."""
        raw = encode_name(name)
        value = self._hasher(raw)
        if self._find(raw, value) is not None:
            return True
        entry = SeenEntry(name=name, length=len(raw), hash=value)
        self._buckets[value % len(self._buckets)].insert(0, entry)
        self._order.append(entry)
        return False

    def _find(self, raw: bytes, value: int) -> SeenEntry | None:
        for entry in self._buckets[value % len(self._buckets)]:
            if entry.hash != value or entry.length != len(raw):
                continue
            if encode_name(entry.name) == raw:
                return entry
        return None
