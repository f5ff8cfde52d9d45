from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/fixdep/cli.py",
        "src/fixdep/tokenizer.py",
        "src/fixdep/filters.py",
        "src/fixdep/seen.py",
        "src/fixdep/emitter.py",
        "src/fixdep/symbols.py",
        "src/fixdep/pipeline.py",
        "src/fixdep/logging/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
