# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/converters/__init__.py
from .vmware import (
    VmwareOptions,
    basic_convert,
    build_vmware_registry,
    convert_file,
    default_output_path,
)

__all__ = [
    "VmwareOptions",
    "basic_convert",
    "build_vmware_registry",
    "convert_file",
    "default_output_path",
]
