# SPDX-License-Identifier: LGPL-3.0-or-later
#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ovf2vmware/__main__.py
from __future__ import annotations

import argparse
import sys
import traceback
from typing import Optional, Sequence

from .cli.args.parser import parse_args_with_config
from .cli.summary import print_summary
from .converters.vmware import VmwareOptions, convert_file
from .core.exceptions import Fatal, Ovf2VmwareError, format_exception_for_cli
from .core.logger import Log
from .ovf.editor import EditStats


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _safe_log(logger, level: str, msg: str) -> None:
    """
    Best-effort logging without assuming logger exists or has a given method.
    """
    if logger is None:
        _print_stderr(msg)
        return

    fn = getattr(logger, level, None)
    if callable(fn):
        fn(msg)
    else:
        _print_stderr(msg)


def options_from_args(args: argparse.Namespace) -> VmwareOptions:
    return VmwareOptions(
        system_type=args.system_type or None,
        remove_ide=args.remove_ide,
        ide_limit=args.ide_limit,
        convert_sata=args.convert_sata,
        fix_cdrom=args.fix_cdrom,
        validate_output=args.validate_output,
    )


def run(args: argparse.Namespace, logger) -> int:
    stats = EditStats()
    dst = convert_file(
        args.input,
        args.output,
        options_from_args(args),
        logger=logger,
        dry_run=args.dry_run,
        force=args.force,
        stats=stats,
    )
    if not args.quiet and not args.json_logs:
        print_summary(stats, args.input, dst, dry_run=args.dry_run)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    logger: Optional[object] = None

    # Phase 1: parse (Fatal can happen here)
    try:
        args, _conf, logger = parse_args_with_config(argv)
    except Fatal as e:
        # Already logged by the parse layer (U.die / validation).
        raise SystemExit(getattr(e, "code", 1))
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        raise SystemExit(130)

    # Phase 2: convert
    try:
        rc = run(args, logger)
    except Ovf2VmwareError as e:
        Log.fail(logger, format_exception_for_cli(e, verbose=args.verbose))
        rc = e.code
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        rc = 130
    except Exception as e:
        # Hard guardrail: unexpected exceptions should not fail silently.
        _safe_log(logger, "error", f"💥 UNHANDLED {type(e).__name__}: {e}")
        _safe_log(logger, "debug", traceback.format_exc())
        rc = 1

    raise SystemExit(rc)


if __name__ == "__main__":
    main()
