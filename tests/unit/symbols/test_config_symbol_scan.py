from __future__ import annotations

import pytest

from fixdep.symbols import iter_config_symbols, referenced_config_symbols


def test_symbols_found_in_code_and_comments() -> None:
    text = "\n".join(
        [
            "#ifdef CONFIG_SMP",
            "/* see CONFIG_NUMA for details */",
            "#if IS_ENABLED(CONFIG_USB_STORAGE)",
        ]
    )

    assert list(iter_config_symbols(text)) == ["SMP", "NUMA", "USB_STORAGE"]


def test_prefix_inside_identifier_is_ignored() -> None:
    assert list(iter_config_symbols("MY_CONFIG_FOO xCONFIG_BAR CONFIG_BAZ")) == ["BAZ"]


def test_module_suffix_is_stripped() -> None:
    assert list(iter_config_symbols("CONFIG_EXT4_FS_MODULE")) == ["EXT4_FS"]


def test_bare_prefix_is_ignored() -> None:
    assert list(iter_config_symbols("CONFIG_ CONFIG_-x")) == []


def test_referenced_symbols_are_deduplicated_in_first_mention_order() -> None:
    text = "CONFIG_B CONFIG_A CONFIG_B CONFIG_A_MODULE CONFIG_C"

    assert referenced_config_symbols(text) == ["B", "A", "C"]


def test_custom_prefix() -> None:
    assert referenced_config_symbols("OPT_X CONFIG_Y", prefix="OPT_") == ["X"]


def test_empty_prefix_is_rejected() -> None:
    with pytest.raises(ValueError, match="prefix"):
        list(iter_config_symbols("CONFIG_X", prefix=""))
