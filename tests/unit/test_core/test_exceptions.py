# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for the error hierarchy and CLI formatting."""
from __future__ import annotations

import errno

import pytest

from ovf2vmware.core.exceptions import (
    DecodeError,
    Fatal,
    IoError,
    MalformedDocument,
    Ovf2VmwareError,
    UnsupportedElementKind,
    format_exception_for_cli,
    wrap_io,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test exception class hierarchy and basic functionality."""

    def test_base_exception_creation(self):
        err = Ovf2VmwareError(code=1, msg="Test error")

        assert err.code == 1
        assert err.msg == "Test error"
        assert err.cause is None
        assert err.context == {}

    def test_fatal_exception(self):
        err = Fatal(2, "Fatal error")

        assert isinstance(err, Ovf2VmwareError)
        assert err.code == 2
        assert str(err) == "Fatal error"

    @pytest.mark.parametrize(
        "cls,code",
        [(MalformedDocument, 65), (DecodeError, 65), (UnsupportedElementKind, 70), (IoError, 74)],
    )
    def test_default_exit_codes(self, cls, code):
        err = cls(msg="boom")

        assert isinstance(err, Ovf2VmwareError)
        assert err.code == code

    def test_exception_with_context(self):
        err = MalformedDocument(msg="Error").with_context(line=3, element="Item")

        assert err.context == {"line": 3, "element": "Item"}

    def test_exception_with_cause(self):
        cause = ValueError("Original error")
        err = DecodeError(msg="Wrapper", cause=cause)

        assert err.cause is cause

    def test_code_is_sanitized(self):
        assert Ovf2VmwareError(code="nope").code == 1
        assert Ovf2VmwareError(code=-3).code == 1
        assert Ovf2VmwareError(code=1000).code == 255

    def test_message_is_one_line(self):
        assert Ovf2VmwareError(msg="a\n  b\r\nc").msg == "a b c"
        assert Ovf2VmwareError(msg="").msg == "Ovf2VmwareError"

    def test_can_be_raised_and_caught(self):
        with pytest.raises(Ovf2VmwareError, match="not closed"):
            raise MalformedDocument(msg="element not closed")


@pytest.mark.unit
class TestReporting:
    def test_to_dict(self):
        err = IoError(msg="Cannot read", cause=OSError("denied"), context={"path": "/x.ovf"})

        assert err.to_dict() == {
            "type": "IoError",
            "code": 74,
            "message": "Cannot read",
            "context": {"path": "/x.ovf"},
        }
        assert err.to_dict(include_cause=True)["cause"] == {"type": "OSError", "message": "denied"}

    def test_format_for_cli_verbosity(self):
        err = DecodeError(msg="bad boolean", cause=ValueError("yes"), context={"field": "AutomaticAllocation"})

        assert format_exception_for_cli(err) == "bad boolean"
        assert format_exception_for_cli(err, verbose=1) == "bad boolean [field='AutomaticAllocation']"
        assert format_exception_for_cli(err, verbose=2).endswith("(cause: ValueError: yes)")

    def test_format_foreign_exception(self):
        assert format_exception_for_cli(KeyError("k"), verbose=0) == "'k'"
        assert format_exception_for_cli(RuntimeError(""), verbose=0) == "RuntimeError"
        assert format_exception_for_cli(RuntimeError("x"), verbose=2) == "RuntimeError: x"


@pytest.mark.unit
class TestWrappers:
    def test_wrap_io(self):
        cause = PermissionError(errno.EACCES, "Permission denied", "/vm.ovf")

        err = wrap_io("Cannot write OVF /vm.ovf", cause, path="/vm.ovf")

        assert isinstance(err, IoError)
        assert err.msg == "Cannot write OVF /vm.ovf: Permission denied"
        assert err.cause is cause
        assert err.context == {"path": "/vm.ovf"}
