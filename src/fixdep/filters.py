"""Suppression rules for prerequisites that must never reach the fragment."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CONFIG_HEADER = "include/generated/autoconf.h"
DEFAULT_IGNORE_SUFFIXES = (".rlib", ".rmeta", ".so")


@dataclass(slots=True, frozen=True)
class ExclusionRules:
    """Literal tail matches for the config header and generated artifacts."""

    config_header: str = DEFAULT_CONFIG_HEADER
    ignore_suffixes: tuple[str, ...] = DEFAULT_IGNORE_SUFFIXES

    def should_ignore(self, token: str) -> bool:
        """Return True when the token must be dropped before deduplication."""
        if self.config_header and token.endswith(self.config_header):
            return True
        return any(suffix and token.endswith(suffix) for suffix in self.ignore_suffixes)
