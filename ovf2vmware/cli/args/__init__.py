# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# ovf2vmware/cli/args/__init__.py
"""
Argument parsing for the ovf2vmware CLI.
"""
from __future__ import annotations

from .builder import HelpFormatter, _build_epilog
from .groups import _add_conversion_policy, _add_global_config_logging, _add_input_output
from .helpers import _merged_get, _require
from .parser import _build_preparser, _load_merged_config, build_parser, parse_args_with_config
from .validators import validate_args

__all__ = [
    "HelpFormatter",
    "build_parser",
    "parse_args_with_config",
    "validate_args",
]
