# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# ovf2vmware/config/config_loader.py
"""
YAML/JSON configuration for the command line.

Config files only ever provide argparse defaults: CLI flags always win.
Several files can be given; later ones override earlier ones key by key.
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..core.utils import U

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


def _normalize_keys(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k).replace("-", "_"): _normalize_keys(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_normalize_keys(v) for v in obj]
    return obj


def _deep_merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


class Config:
    @staticmethod
    def expand_configs(logger: logging.Logger, paths: Sequence[str]) -> List[Path]:
        """Expand directories into their config files (sorted); keep files as given."""
        out: List[Path] = []
        for raw in paths:
            p = Path(raw).expanduser()
            if p.is_dir():
                found = sorted(q for q in p.iterdir() if q.suffix.lower() in CONFIG_SUFFIXES and q.is_file())
                if not found:
                    logger.warning("Config directory has no .yaml/.yml/.json files: %s", p)
                out.extend(found)
            else:
                out.append(p)
        return out

    @staticmethod
    def load(logger: logging.Logger, path: Path) -> Dict[str, Any]:
        path = Path(path)
        if not path.is_file():
            U.die(logger, f"Config file not found: {path}", 2)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            U.die(logger, f"Cannot read config file {path}: {e}", 2)

        try:
            if path.suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            U.die(logger, f"Config file {path} is not valid {path.suffix.lstrip('.').upper() or 'YAML'}: {e}", 2)

        if data is None:
            return {}
        if not isinstance(data, dict):
            U.die(logger, f"Config file {path} must contain a mapping at top level", 2)
        logger.debug("Loaded config %s (%d keys)", path, len(data))
        return _normalize_keys(data)

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            merged = _deep_merge(merged, Config.load(logger, p))
        return merged

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Dict[str, Any]) -> None:
        """Set parser defaults from config keys that match an argument dest."""
        dests = {a.dest for a in parser._actions if a.dest and a.dest != argparse.SUPPRESS}
        known = {k: v for k, v in conf.items() if k in dests}
        unknown = sorted(k for k in conf if k not in dests)
        if unknown:
            logger.debug("Ignoring unknown config keys: %s", ", ".join(unknown))
        if known:
            parser.set_defaults(**known)
