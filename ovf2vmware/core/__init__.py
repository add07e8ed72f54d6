# ovf2vmware/core/__init__.py
from .exceptions import (
    DecodeError,
    Fatal,
    IoError,
    MalformedDocument,
    Ovf2VmwareError,
    UnsupportedElementKind,
)

__all__ = [
    "Ovf2VmwareError",
    "Fatal",
    "MalformedDocument",
    "DecodeError",
    "UnsupportedElementKind",
    "IoError",
]
