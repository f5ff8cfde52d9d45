"""Split a compiler dependency listing into prerequisite tokens."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

TARGET_SEPARATOR = ":"
# C-locale isspace().
WHITESPACE = frozenset(" \t\n\v\f\r")


@dataclass(slots=True, frozen=True)
class Token:
    """Span of one prerequisite path inside the listing buffer."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def text(self, buffer: str) -> str:
        return buffer[self.start : self.end]


def _continuation_width(buffer: str, index: int) -> int:
    """Return the width of a backslash-newline sequence at index, or 0."""
    if buffer[index] != "\\":
        return 0
    if buffer.startswith("\n", index + 1):
        return 2
    if buffer.startswith("\r\n", index + 1):
        return 3
    return 0


def _is_delimiter(buffer: str, index: int) -> bool:
    char = buffer[index]
    return char in WHITESPACE or char == TARGET_SEPARATOR or _continuation_width(buffer, index) > 0


def iter_prerequisites(buffer: str) -> Iterator[Token]:
    """Yield prerequisite tokens in file order, skipping the leading target."""
    separator = buffer.find(TARGET_SEPARATOR)
    if separator < 0:
        return
    index = separator + 1
    size = len(buffer)
    while index < size:
        width = _continuation_width(buffer, index)
        if width:
            index += width
            continue
        if _is_delimiter(buffer, index):
            index += 1
            continue
        start = index
        while index < size and not _is_delimiter(buffer, index):
            index += 1
        yield Token(start=start, length=index - start)


def split_prerequisites(buffer: str) -> list[str]:
    """Return every prerequisite token as text, duplicates included."""
    return [token.text(buffer) for token in iter_prerequisites(buffer)]
