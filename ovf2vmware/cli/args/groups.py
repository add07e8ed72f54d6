# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# ovf2vmware/cli/args/groups.py
from __future__ import annotations

import argparse

from ...converters.vmware import DEFAULT_SYSTEM_TYPE


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Global config/logging (two-phase parse relies on these)
    # ------------------------------------------------------------------
    from ... import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file or directory (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged normalized config and exit.")
    p.add_argument("--dump-args", action="store_true", help="Print final parsed args and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv, -vvv")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Less output: -q (warnings), -qq (errors)")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON.")


def _add_input_output(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------
    p.add_argument("-f", "--input", dest="input", default=None, help="The .ovf file to convert.")
    p.add_argument(
        "-o",
        "--output",
        dest="output",
        default=None,
        help="Output path for the converted file (default: <input stem>-vmware<suffix>).",
    )
    p.add_argument("--force", action="store_true", help="Overwrite the output file if it exists.")
    p.add_argument("--dry-run", dest="dry_run", action="store_true", help="Convert but do not write the output.")


def _add_conversion_policy(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # What gets changed
    # ------------------------------------------------------------------
    g = p.add_argument_group("conversion")
    g.add_argument(
        "--system-type",
        dest="system_type",
        default=DEFAULT_SYSTEM_TYPE,
        help="VMware compatibility level written to vssd:VirtualSystemType (empty string: leave as is).",
    )
    g.add_argument(
        "--keep-ide",
        dest="remove_ide",
        action="store_false",
        default=True,
        help="Do not remove IDE controllers.",
    )
    g.add_argument(
        "--ide-limit",
        dest="ide_limit",
        type=int,
        default=-1,
        help="Remove at most N IDE controllers (-1: all).",
    )
    g.add_argument(
        "--no-sata-convert",
        dest="convert_sata",
        action="store_false",
        default=True,
        help="Leave the SATA (AHCI) controller as exported.",
    )
    g.add_argument(
        "--no-cdrom-fix",
        dest="fix_cdrom",
        action="store_false",
        default=True,
        help="Leave CD/DVD drive automatic allocation as exported.",
    )
    g.add_argument(
        "--no-validate-output",
        dest="validate_output",
        action="store_false",
        default=True,
        help="Skip re-parsing the converted OVF before writing it.",
    )
