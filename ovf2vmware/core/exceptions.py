# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

# sysexits(3) style codes
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_IOERR = 74


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except (TypeError, ValueError):
        return default


def _clamp_exit_code(code: int) -> int:
    # Exit codes are 0..255
    if code < 0:
        return 1
    if code > 255:
        return 255
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    return ", ".join(f"{k}={ctx[k]!r}" for k in sorted(ctx.keys()))


@dataclass(eq=False)
class Ovf2VmwareError(Exception):
    """
    Base project error with:
      - stable fields for reporting/JSON
      - readable __str__ (what users see)
      - safe code handling (never crashes on int())
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        if self.context is None:
            self.context = {}
        super().__init__(self.msg)
        self.args = (self.msg,)

    def with_context(self, **ctx: Any) -> "Ovf2VmwareError":
        if self.context is None:
            self.context = {}
        self.context.update(ctx)
        return self

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        """
        Human-friendly message for CLI output/logs.
        """
        parts = [self.msg or self.__class__.__name__]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context))}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": self.context or {},
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


class Fatal(Ovf2VmwareError):
    """
    User-facing fatal error (exit code should be honored by top-level main()).
    """
    pass


@dataclass(eq=False)
class MalformedDocument(Ovf2VmwareError):
    """Input or output document is not well-formed XML, or an element never closes."""
    code: int = EX_DATAERR
    msg: str = "malformed OVF document"


@dataclass(eq=False)
class DecodeError(Ovf2VmwareError):
    """A located element could not be decoded into its record type."""
    code: int = EX_DATAERR
    msg: str = "failed to decode OVF element"


@dataclass(eq=False)
class UnsupportedElementKind(Ovf2VmwareError):
    """No codec is registered for an element kind (configuration/programming error)."""
    code: int = EX_SOFTWARE
    msg: str = "unsupported element kind"


@dataclass(eq=False)
class IoError(Ovf2VmwareError):
    """Reading or writing an OVF file failed; the OSError is kept as `cause`."""
    code: int = EX_IOERR
    msg: str = "I/O error"


def wrap_io(msg: str, exc: OSError, **context: Any) -> IoError:
    return IoError(msg=f"{msg}: {exc.strerror or exc}", cause=exc, context=context or None)


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: just message
    verbose=1: message + compact context (if any)
    verbose>=2: message + context + cause
    """
    if isinstance(e, Ovf2VmwareError):
        return e.user_message(
            include_context=(verbose >= 1),
            include_cause=(verbose >= 2),
        )

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
