# SPDX-License-Identifier: LGPL-3.0-or-later
import os
import sys
from pathlib import Path

import pytest

_THIS_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _THIS_DIR.parent
FIXTURES = _THIS_DIR / "fixtures"

if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
if str(_THIS_DIR) not in sys.path:
    sys.path.insert(0, str(_THIS_DIR))

os.environ.setdefault("PYTHONPATH", str(_REPO_ROOT))


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external tools")
    config.addinivalue_line("markers", "integration: tests that run the full conversion on files")


@pytest.fixture
def virtualbox_ovf() -> bytes:
    """The VirtualBox 'centos7' export used across the editor and converter tests."""
    return (FIXTURES / "ovf" / "virtualbox-vm.ovf").read_bytes()


@pytest.fixture
def fake_logger():
    from fakes.fake_logger import FakeLogger

    return FakeLogger()
