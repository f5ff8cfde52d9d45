"""Config-symbol scanning for per-option dependency expansion."""

from __future__ import annotations

import re
from collections.abc import Iterator

DEFAULT_SYMBOL_PREFIX = "CONFIG_"
MODULE_SUFFIX = "_MODULE"

_IDENTIFIER_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_")
_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def iter_config_symbols(text: str, prefix: str = DEFAULT_SYMBOL_PREFIX) -> Iterator[str]:
    """Yield option names referenced as <prefix><NAME> in text order.

    Matches inside comments and strings are kept; an extra dependency only
    costs a rebuild. ``CONFIG_FOO_MODULE`` is reported as ``FOO``.
    """
    if not prefix:
        raise ValueError("Config symbol prefix must be a non-empty string.")
    index = text.find(prefix)
    while index >= 0:
        name_start = index + len(prefix)
        if index > 0 and text[index - 1] in _IDENTIFIER_CHARS:
            index = text.find(prefix, name_start)
            continue
        match = _NAME_PATTERN.match(text, name_start)
        if match is None:
            index = text.find(prefix, name_start)
            continue
        name = match.group(0)
        if name.endswith(MODULE_SUFFIX) and len(name) > len(MODULE_SUFFIX):
            name = name[: -len(MODULE_SUFFIX)]
        yield name
        index = text.find(prefix, match.end())


def referenced_config_symbols(text: str, prefix: str = DEFAULT_SYMBOL_PREFIX) -> list[str]:
    """Return each referenced option once, in order of first mention."""
    seen: set[str] = set()
    ordered: list[str] = []
    for name in iter_config_symbols(text, prefix=prefix):
        if name in seen:
            continue
        seen.add(name)
        ordered.append(name)
    return ordered
