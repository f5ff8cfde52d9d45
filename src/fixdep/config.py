"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from fixdep.filters import DEFAULT_CONFIG_HEADER, DEFAULT_IGNORE_SUFFIXES, ExclusionRules
from fixdep.symbols import DEFAULT_SYMBOL_PREFIX

CONFIG_FILE_NAME = "fixdep.toml"


@dataclass(slots=True, frozen=True)
class SymbolsConfig:
    """Config-symbol expansion settings."""

    expand: bool
    prefix: str


@dataclass(slots=True, frozen=True)
class AuditConfig:
    """Optional JSONL run log."""

    log_path: Path | None


@dataclass(slots=True, frozen=True)
class FixdepConfig:
    """Fully merged fixdep configuration."""

    rules: ExclusionRules
    symbols: SymbolsConfig
    audit: AuditConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for audit events."""
        return {
            "filter": {
                "config_header": self.rules.config_header,
                "ignore_suffixes": list(self.rules.ignore_suffixes),
            },
            "symbols": {
                "expand": self.symbols.expand,
                "prefix": self.symbols.prefix,
            },
            "audit": {
                "log_path": str(self.audit.log_path) if self.audit.log_path is not None else None,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional command-line overrides applied at highest precedence."""

    expand_config_symbols: bool | None = None
    audit_log_path: Path | None = None


def default_config() -> FixdepConfig:
    """Build the configuration matching the stock kernel behaviour."""
    return FixdepConfig(
        rules=ExclusionRules(
            config_header=DEFAULT_CONFIG_HEADER,
            ignore_suffixes=DEFAULT_IGNORE_SUFFIXES,
        ),
        symbols=SymbolsConfig(expand=False, prefix=DEFAULT_SYMBOL_PREFIX),
        audit=AuditConfig(log_path=None),
    )


def load_config_file(config_path: Path) -> dict[str, object]:
    """Load an optional fixdep.toml; a missing file yields an empty payload."""
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item:
            raise ValueError(f"Config field '{section}.{field}' must contain only non-empty strings.")
        output.append(item)
    return tuple(output)


def _non_empty_string(value: object, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value


def merge_config(
    base: FixdepConfig, payload: dict[str, object], overrides: CliOverrides
) -> FixdepConfig:
    """Merge defaults, config file, then command-line overrides."""
    filter_payload = _get_table(payload, "filter")
    symbols_payload = _get_table(payload, "symbols")
    audit_payload = _get_table(payload, "audit")

    config_header = base.rules.config_header
    if "config_header" in filter_payload:
        config_header = _non_empty_string(filter_payload["config_header"], "filter.config_header")
    ignore_suffixes = base.rules.ignore_suffixes
    if "ignore_suffixes" in filter_payload:
        ignore_suffixes = _tuple_of_strings(
            filter_payload["ignore_suffixes"], "filter", "ignore_suffixes"
        )

    expand = base.symbols.expand
    if "expand" in symbols_payload:
        raw_expand = symbols_payload["expand"]
        if not isinstance(raw_expand, bool):
            raise ValueError("Config field 'symbols.expand' must be a boolean.")
        expand = raw_expand
    prefix = base.symbols.prefix
    if "prefix" in symbols_payload:
        prefix = _non_empty_string(symbols_payload["prefix"], "symbols.prefix")

    log_path = base.audit.log_path
    if "log_path" in audit_payload:
        log_path = Path(_non_empty_string(audit_payload["log_path"], "audit.log_path"))

    merged = FixdepConfig(
        rules=ExclusionRules(config_header=config_header, ignore_suffixes=ignore_suffixes),
        symbols=SymbolsConfig(expand=expand, prefix=prefix),
        audit=AuditConfig(log_path=log_path),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: FixdepConfig, overrides: CliOverrides) -> FixdepConfig:
    """Apply command-line overrides at highest precedence."""
    symbols = SymbolsConfig(
        expand=(
            overrides.expand_config_symbols
            if overrides.expand_config_symbols is not None
            else config.symbols.expand
        ),
        prefix=config.symbols.prefix,
    )
    audit = AuditConfig(log_path=overrides.audit_log_path or config.audit.log_path)
    return FixdepConfig(rules=config.rules, symbols=symbols, audit=audit)


def load_effective_config(
    config_path: Path | None = None, overrides: CliOverrides | None = None
) -> FixdepConfig:
    """Load effective config using merge order defaults -> file -> overrides."""
    if config_path is not None and not config_path.exists():
        raise ValueError(f"Config file not found: {config_path}")
    path = config_path if config_path is not None else Path.cwd() / CONFIG_FILE_NAME
    payload = load_config_file(path)
    return merge_config(default_config(), payload, overrides or CliOverrides())
