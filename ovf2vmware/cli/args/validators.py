# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# ovf2vmware/cli/args/validators.py
from __future__ import annotations

import argparse
import os
from typing import Any, Dict

from ...core.exceptions import Fatal
from ...core.file_ops import same_file
from .helpers import _merged_get, _require


def _validate_input(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    src = _merged_get(args, conf, "input")
    if not _require(src):
        raise Fatal(2, "Please specify a .ovf file to convert (-f/--input or `input:` in config)")
    if not os.path.isfile(str(src)):
        raise Fatal(2, f"Input OVF not found: {src}")
    args.input = str(src)


def _validate_output(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    dst = _merged_get(args, conf, "output")
    if not _require(dst):
        args.output = None
        return
    if same_file(args.input, dst):
        raise Fatal(2, "Output .ovf file path cannot be the same as the input file path")
    args.output = str(dst)


def _validate_policy(args: argparse.Namespace) -> None:
    try:
        args.ide_limit = int(args.ide_limit)
    except (TypeError, ValueError):
        raise Fatal(2, f"ide_limit must be an integer, got {args.ide_limit!r}") from None

    st = args.system_type
    if st is not None and not isinstance(st, str):
        raise Fatal(2, f"system_type must be a string, got {st!r}")
    if isinstance(st, str):
        args.system_type = st.strip()

    for key in ("remove_ide", "convert_sata", "fix_cdrom", "validate_output", "force", "dry_run", "json_logs"):
        v = getattr(args, key, None)
        if not isinstance(v, bool):
            raise Fatal(2, f"{key} must be true or false, got {v!r}")

    for key in ("verbose", "quiet"):
        v = getattr(args, key, 0)
        if isinstance(v, bool) or not isinstance(v, int) or v < 0:
            raise Fatal(2, f"{key} must be a non-negative integer, got {v!r}")


def validate_args(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    """
    Validate merged CLI + config values (no filesystem writes).

    Raises:
        Fatal: with exit code 2 on invalid input.
    """
    _validate_input(args, conf)
    _validate_output(args, conf)
    _validate_policy(args)
