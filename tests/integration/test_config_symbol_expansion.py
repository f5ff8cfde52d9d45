from __future__ import annotations

import io
from pathlib import Path

import pytest

from fixdep.config import CliOverrides, apply_cli_overrides, default_config
from fixdep.depfile import DepfileReadError
from fixdep.pipeline import DepfileFixer


def _expanding_fixer(out: io.StringIO, base_dir: Path) -> DepfileFixer:
    config = apply_cli_overrides(default_config(), CliOverrides(expand_config_symbols=True))
    return DepfileFixer(target="t.o", out_stream=out, config=config, base_dir=base_dir)


def test_expansion_is_off_by_default(tmp_path: Path) -> None:
    (tmp_path / "a.h").write_text("#ifdef CONFIG_SMP\n#endif\n", encoding="utf-8")
    out = io.StringIO()

    DepfileFixer(target="t.o", out_stream=out, base_dir=tmp_path).run("t.o: a.h")

    assert "wildcard" not in out.getvalue()


def test_expansion_emits_each_symbol_once_after_its_first_file(tmp_path: Path) -> None:
    (tmp_path / "t.c").write_text(
        "#ifdef CONFIG_SMP\n#endif\n#if CONFIG_NR_CPUS > 1\n#endif\n", encoding="utf-8"
    )
    (tmp_path / "a.h").write_text("/* CONFIG_SMP again, CONFIG_USB_MODULE */\n", encoding="utf-8")
    (tmp_path / "include" / "generated").mkdir(parents=True)
    (tmp_path / "include" / "generated" / "autoconf.h").write_text(
        "#define CONFIG_EVERYTHING 1\n", encoding="utf-8"
    )
    out = io.StringIO()
    fixer = _expanding_fixer(out, tmp_path)

    stats = fixer.run("t.o: t.c include/generated/autoconf.h a.h t.c")

    assert out.getvalue() == (
        "savedcmd_t.o := $(cmd_t.o)\n"
        "\n"
        "deps_t.o := \\\n"
        "  t.c \\\n"
        "    $(wildcard include/config/SMP) \\\n"
        "    $(wildcard include/config/NR_CPUS) \\\n"
        "  a.h \\\n"
        "    $(wildcard include/config/USB) \\\n"
        "\n"
        "t.o: $(deps_t.o)\n"
        "\n"
        "$(deps_t.o):\n"
    )
    assert stats.config_symbols == 3


def test_use_config_reports_first_registration(tmp_path: Path) -> None:
    out = io.StringIO()
    fixer = _expanding_fixer(out, tmp_path)
    fixer.emitter.write_header()

    assert fixer.use_config("SMP") is True
    assert fixer.use_config("SMP") is False
    assert list(fixer.config_seen) == ["SMP"]


def test_unreadable_prerequisite_is_fatal_when_expanding(tmp_path: Path) -> None:
    fixer = _expanding_fixer(io.StringIO(), tmp_path)

    with pytest.raises(DepfileReadError, match="open file"):
        fixer.run("t.o: missing.h")
