"""Whole-file reads of compiler dependency listings."""

from __future__ import annotations

import os
from pathlib import Path

from fixdep.errors import FixdepError


class DepfileReadError(FixdepError):
    """Raised when a dependency listing cannot be read in full."""

    def __init__(self, stage: str, path: Path, reason: str) -> None:
        super().__init__(f"{stage} error: {reason}")
        self.stage = stage
        self.path = path
        self.reason = reason


def _describe(exc: OSError) -> str:
    if exc.strerror:
        return f"{exc.strerror}: {exc.filename}" if exc.filename else exc.strerror
    return str(exc)


def decode_listing(raw: bytes) -> str:
    """Decode listing bytes so every input byte survives to the output."""
    return raw.decode("utf-8", errors="surrogateescape")


def read_depfile(path: Path) -> str:
    """Read an entire file, failing on open, stat, or short read."""
    try:
        handle = path.open("rb")
    except OSError as exc:
        raise DepfileReadError(stage="open file", path=path, reason=_describe(exc)) from exc
    with handle:
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as exc:
            raise DepfileReadError(stage="fstat", path=path, reason=_describe(exc)) from exc
        try:
            raw = handle.read(size)
        except OSError as exc:
            raise DepfileReadError(stage="read", path=path, reason=_describe(exc)) from exc
    if len(raw) != size:
        raise DepfileReadError(
            stage="read",
            path=path,
            reason=f"short read ({len(raw)} of {size} bytes): {path}",
        )
    return decode_listing(raw)
