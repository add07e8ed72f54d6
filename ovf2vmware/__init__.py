# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/__init__.py
"""
ovf2vmware: make VirtualBox OVF exports importable by VMware.

    from ovf2vmware import basic_convert

    fixed = basic_convert(Path("centos7.ovf").read_bytes())
"""
__version__ = "0.1.0"

from .converters import VmwareOptions, basic_convert, build_vmware_registry, convert_file, default_output_path
from .core.exceptions import (
    DecodeError,
    Fatal,
    IoError,
    MalformedDocument,
    Ovf2VmwareError,
    UnsupportedElementKind,
)
from .ovf import HARDWARE_ITEM, SYSTEM_DESCRIPTOR, EditRegistry, edit, read_ovf

__all__ = [
    "__version__",
    "VmwareOptions",
    "basic_convert",
    "build_vmware_registry",
    "convert_file",
    "default_output_path",
    "EditRegistry",
    "HARDWARE_ITEM",
    "SYSTEM_DESCRIPTOR",
    "edit",
    "read_ovf",
    "Ovf2VmwareError",
    "Fatal",
    "MalformedDocument",
    "DecodeError",
    "UnsupportedElementKind",
    "IoError",
]
