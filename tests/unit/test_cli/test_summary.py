# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from ovf2vmware.cli.summary import print_summary, summary_table
from ovf2vmware.ovf.editor import EditStats


def _console():
    buf = io.StringIO()
    return Console(file=buf, width=80, force_terminal=False, color_system=None), buf


@pytest.mark.unit
class TestSummary:
    def test_panel_contents(self):
        con, buf = _console()
        stats = EditStats(kept=5, deleted=2, replaced=3, lines_in=120, lines_out=102)

        assert print_summary(stats, Path("/vms/centos7.ovf"), Path("/vms/centos7-vmware.ovf"), console=con)

        out = buf.getvalue()
        assert "centos7.ovf -> centos7-vmware.ovf" in out
        assert "replaced" in out and "3" in out
        assert "120 -> 102" in out

    def test_dry_run_and_unchanged_titles(self):
        con, buf = _console()
        print_summary(EditStats(kept=1), Path("a.ovf"), Path("b.ovf"), dry_run=True, console=con)
        print_summary(EditStats(kept=1), Path("a.ovf"), Path("b.ovf"), console=con)

        out = buf.getvalue()
        assert "(dry run)" in out
        assert "(no changes)" in out

    def test_no_terminal(self, monkeypatch):
        monkeypatch.setattr("ovf2vmware.cli.summary._is_tty", lambda: False)
        assert print_summary(EditStats(), Path("a.ovf"), Path("b.ovf")) is False

    def test_table_rows(self):
        assert summary_table(EditStats()).row_count == 4
