"""Shared exception base for fatal fixdep failures."""

from __future__ import annotations


class FixdepError(Exception):
    """Base class for fatal fixdep failures."""
