"""Dependency listing to make fragment pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from fixdep.config import FixdepConfig, default_config
from fixdep.depfile import read_depfile
from fixdep.emitter import FragmentEmitter
from fixdep.seen import SeenSet
from fixdep.symbols import iter_config_symbols
from fixdep.tokenizer import iter_prerequisites


@dataclass(slots=True, frozen=True)
class FixdepStats:
    """Deterministic counters for one pipeline run."""

    tokens: int
    emitted: int
    ignored: int
    duplicates: int
    config_symbols: int


class DepfileFixer:
    """Owns the filter, both seen-sets and the emitter for one target."""

    def __init__(
        self,
        target: str,
        out_stream: TextIO,
        config: FixdepConfig | None = None,
        base_dir: Path | None = None,
    ) -> None:
        self._config = config or default_config()
        self._rules = self._config.rules
        self._emitter = FragmentEmitter(target=target, out_stream=out_stream)
        self._base_dir = base_dir or Path.cwd()
        self.file_seen = SeenSet()
        self.config_seen = SeenSet()

    @property
    def emitter(self) -> FragmentEmitter:
        return self._emitter

    def run(self, buffer: str) -> FixdepStats:
        """Stream the full fragment for a decoded dependency listing."""
        tokens = 0
        emitted = 0
        ignored = 0
        duplicates = 0

        self._emitter.write_header()
        for token in iter_prerequisites(buffer):
            tokens += 1
            path = token.text(buffer)
            if self._rules.should_ignore(path):
                ignored += 1
                continue
            if self.file_seen.test_and_add(path):
                duplicates += 1
                continue
            self._emitter.write_prerequisite(path)
            emitted += 1
            if self._config.symbols.expand:
                self._expand_config_symbols(path)
        self._emitter.close()
        self._emitter.finish()

        return FixdepStats(
            tokens=tokens,
            emitted=emitted,
            ignored=ignored,
            duplicates=duplicates,
            config_symbols=len(self.config_seen),
        )

    def use_config(self, symbol: str) -> bool:
        """Emit a wildcard dependency the first time a symbol is seen."""
        if self.config_seen.test_and_add(symbol):
            return False
        self._emitter.write_config_dependency(symbol)
        return True

    def _expand_config_symbols(self, path: str) -> None:
        text = read_depfile(self._base_dir / path)
        for symbol in iter_config_symbols(text, prefix=self._config.symbols.prefix):
            self.use_config(symbol)


def fix_depfile(
    depfile: Path,
    target: str,
    out_stream: TextIO,
    config: FixdepConfig | None = None,
) -> FixdepStats:
    """Read a dependency listing and write its rewritten fragment."""
    buffer = read_depfile(depfile)
    fixer = DepfileFixer(target=target, out_stream=out_stream, config=config)
    return fixer.run(buffer)
