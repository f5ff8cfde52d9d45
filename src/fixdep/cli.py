"""Command-line entrypoint: fixdep <depfile> <target> <cmdline>."""

from __future__ import annotations

import argparse
import io
import sys
from pathlib import Path
from typing import TextIO

from fixdep.config import CliOverrides, FixdepConfig, load_effective_config
from fixdep.depfile import DepfileReadError
from fixdep.errors import FixdepError
from fixdep.logging import AuditEvent, JsonlAuditLogger, sanitize_cmdline, utc_timestamp
from fixdep.pipeline import FixdepStats, fix_depfile

PROG = "fixdep"


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for a single fixdep invocation."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Rewrite a gcc -MD dependency file into a kbuild fragment on stdout.",
    )
    parser.add_argument("depfile", help="Compiler-generated dependency file.")
    parser.add_argument("target", help="Target whose fragment is generated.")
    parser.add_argument("cmdline", help="Command line recorded for the target.")
    parser.add_argument("--config", default=None, help=f"Path to {PROG}.toml.")
    parser.add_argument(
        "--expand-config-symbols",
        action="store_true",
        default=None,
        help="Add a wildcard include/config dependency per referenced option.",
    )
    parser.add_argument("--audit-log", default=None, help="Append a JSONL record of this run.")
    return parser


def _report(message: str, err_stream: TextIO) -> None:
    err_stream.write(f"{PROG}: {message}\n")
    err_stream.flush()


def _log_run(
    config: FixdepConfig,
    args: argparse.Namespace,
    err_stream: TextIO,
    ok: bool,
    error_code: str | None,
    stats: FixdepStats | None,
) -> bool:
    """Append the run record; return False after reporting an unwritable log."""
    if config.audit.log_path is None:
        return True
    metadata: dict[str, object] = dict(sanitize_cmdline(args.cmdline))
    metadata["config"] = config.to_public_dict()
    if stats is not None:
        metadata["stats"] = {
            "tokens": stats.tokens,
            "emitted": stats.emitted,
            "ignored": stats.ignored,
            "duplicates": stats.duplicates,
            "config_symbols": stats.config_symbols,
        }
    try:
        logger = JsonlAuditLogger(path=config.audit.log_path)
        logger.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                target=args.target,
                depfile=args.depfile,
                ok=ok,
                error_code=error_code,
                metadata=metadata,
            )
        )
    except OSError as exc:
        _report(f"audit log error: {exc}", err_stream)
        return False
    return True


def main(
    argv: list[str] | None = None,
    out_stream: TextIO | None = None,
    err_stream: TextIO | None = None,
) -> int:
    """Entrypoint for the fixdep process."""
    out = out_stream or sys.stdout
    err = err_stream or sys.stderr
    args = build_arg_parser().parse_args(argv)

    overrides = CliOverrides(
        expand_config_symbols=args.expand_config_symbols,
        audit_log_path=Path(args.audit_log) if args.audit_log is not None else None,
    )
    try:
        config = load_effective_config(
            config_path=Path(args.config) if args.config is not None else None,
            overrides=overrides,
        )
    except (ValueError, OSError) as exc:
        _report(f"config error: {exc}", err)
        return 1

    if isinstance(out, io.TextIOWrapper):
        # Listing bytes are decoded with surrogateescape; write them back verbatim.
        out.reconfigure(errors="surrogateescape")

    try:
        stats = fix_depfile(
            depfile=Path(args.depfile),
            target=args.target,
            out_stream=out,
            config=config,
        )
    except DepfileReadError as exc:
        _report(str(exc), err)
        _log_run(config, args, err, ok=False, error_code="READ_ERROR", stats=None)
        return 1
    except FixdepError as exc:
        _report(str(exc), err)
        _log_run(config, args, err, ok=False, error_code="INTERNAL_ERROR", stats=None)
        return 1
    except MemoryError:
        _report("malloc failure", err)
        _log_run(config, args, err, ok=False, error_code="MEMORY_ERROR", stats=None)
        return 1

    if not _log_run(config, args, err, ok=True, error_code=None, stats=stats):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
