# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# ovf2vmware/cli/summary.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..ovf.editor import EditStats


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _console() -> Optional[Console]:
    """Rich console on an interactive stdout; None when piped or redirected."""
    if not _is_tty():
        return None
    return Console(stderr=False)


def summary_table(stats: EditStats) -> Table:
    t = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    t.add_column("Elements")
    t.add_column("Count", justify="right")
    t.add_row("kept", str(stats.kept))
    t.add_row("replaced", str(stats.replaced), style="cyan" if stats.replaced else None)
    t.add_row("deleted", str(stats.deleted), style="yellow" if stats.deleted else None)
    t.add_row("lines", f"{stats.lines_in} -> {stats.lines_out}")
    return t


def print_summary(
    stats: EditStats,
    src: Path,
    dst: Path,
    *,
    dry_run: bool = False,
    console: Optional[Any] = None,
) -> bool:
    """
    Print a conversion summary panel. Returns False when there is no terminal
    to print to (logs already carry the same numbers).
    """
    con = console if console is not None else _console()
    if con is None:
        return False

    title = f"{Path(src).name} -> {Path(dst).name}"
    if dry_run:
        title += " (dry run)"
    elif not stats.changed:
        title += " (no changes)"
    con.print(Panel(summary_table(stats), title=title, title_align="left", expand=True))
    return True
