# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/__init__.py
"""
Format-preserving OVF edit engine.

    from ovf2vmware.ovf import EditRegistry, HARDWARE_ITEM, edit
    from ovf2vmware.ovf.proposals import delete_hardware_items_matching

    registry = EditRegistry().propose(HARDWARE_ITEM, delete_hardware_items_matching("ideController", 1))
    new_bytes = edit(old_bytes, registry)
"""
from .actions import ActionKind, Delete, EditAction, EditProposal, Keep, Replace, evaluate
from .codec import RecordCodec, FieldSpec, codec_for, decode_span, register_codec, render_replacement
from .editor import EditStats, detect_eol, edit
from .guard import namespace_map, validate_document
from .model import (
    HARDWARE_ITEM,
    SYSTEM_DESCRIPTOR,
    ElementKind,
    HardwareItem,
    ResourceType,
    SystemDescriptor,
)
from .reader import Envelope, VirtualHardwareSection, VirtualSystem, read_ovf
from .registry import EditRegistry
from .span import LineCursor, Span, locate_span

__all__ = [
    "ActionKind",
    "EditAction",
    "EditProposal",
    "Keep",
    "Delete",
    "Replace",
    "evaluate",
    "RecordCodec",
    "FieldSpec",
    "codec_for",
    "decode_span",
    "register_codec",
    "render_replacement",
    "EditStats",
    "detect_eol",
    "edit",
    "namespace_map",
    "validate_document",
    "ElementKind",
    "SYSTEM_DESCRIPTOR",
    "HARDWARE_ITEM",
    "SystemDescriptor",
    "HardwareItem",
    "ResourceType",
    "Envelope",
    "VirtualSystem",
    "VirtualHardwareSection",
    "read_ovf",
    "EditRegistry",
    "LineCursor",
    "Span",
    "locate_span",
]
