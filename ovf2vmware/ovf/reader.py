# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/reader.py
"""
Read-only typed view of a whole OVF descriptor.

The editor never needs this; it exists for callers that want to inspect a
descriptor (before or after conversion) without caring about its layout:

    env = read_ovf(Path("vm.ovf").read_bytes())
    [i.element_name for i in env.virtual_system.hardware.items]

System and Item records are decoded with the same codecs the editor uses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring as safe_fromstring

from ..core.exceptions import DecodeError, MalformedDocument
from ..core.xml_utils import local_name
from .codec import HARDWARE_ITEM_CODEC, SYSTEM_CODEC
from .guard import Buffer, root_namespaces
from .model import OVF_NS, HardwareItem, SystemDescriptor

XML_NS = "http://www.w3.org/XML/1998/namespace"


@dataclass(frozen=True)
class VirtualHardwareSection:
    info: str = ""
    system: Optional[SystemDescriptor] = None
    items: Tuple[HardwareItem, ...] = ()


@dataclass(frozen=True)
class VirtualSystem:
    id: str = ""
    hardware: VirtualHardwareSection = field(default_factory=VirtualHardwareSection)


@dataclass(frozen=True)
class Envelope:
    version: str = ""
    lang: str = ""
    namespaces: Dict[str, str] = field(default_factory=dict)
    virtual_system: Optional[VirtualSystem] = None


def _children(elem: Element, local: str):
    return [c for c in elem if isinstance(c.tag, str) and local_name(c.tag) == local]


def _child(elem: Element, local: str) -> Optional[Element]:
    found = _children(elem, local)
    return found[0] if found else None


def _ovf_attr(elem: Element, name: str) -> str:
    # Exporters write ovf:-qualified attributes; accept unqualified ones too.
    return elem.get(f"{{{OVF_NS}}}{name}", elem.get(name, ""))


def _hardware(section: Element) -> VirtualHardwareSection:
    info = _child(section, "Info")
    system = _child(section, "System")
    return VirtualHardwareSection(
        info="".join(info.itertext()) if info is not None else "",
        system=SYSTEM_CODEC.from_element(system) if system is not None else None,
        items=tuple(HARDWARE_ITEM_CODEC.from_element(i) for i in _children(section, "Item")),
    )


def _virtual_system(elem: Element) -> VirtualSystem:
    section = _child(elem, "VirtualHardwareSection")
    return VirtualSystem(
        id=_ovf_attr(elem, "id"),
        hardware=_hardware(section) if section is not None else VirtualHardwareSection(),
    )


def read_ovf(data: Buffer) -> Envelope:
    """
    Parse an OVF descriptor into an Envelope.

    Only a VirtualSystem directly under the Envelope is read; a descriptor
    holding a VirtualSystemCollection yields `virtual_system=None`.

    Raises:
        MalformedDocument: not well-formed, forbidden constructs, or the root is not <Envelope>.
        DecodeError: a System or Item cannot be decoded.
    """
    raw = bytes(data)
    try:
        root = safe_fromstring(raw)
    except ParseError as e:
        line, col = getattr(e, "position", (None, None))
        raise MalformedDocument(
            msg=f"OVF document is not well-formed XML: {e}",
            cause=e,
            context={"line": line, "column": col},
        ) from e
    except DefusedXmlException as e:
        raise MalformedDocument(msg=f"OVF document uses forbidden XML constructs: {e}", cause=e) from e

    if local_name(root.tag) != "Envelope":
        raise MalformedDocument(
            msg=f"OVF document root must be <Envelope>, found <{local_name(root.tag)}>",
            context={"root": local_name(root.tag)},
        )

    vs = _child(root, "VirtualSystem")
    try:
        virtual_system = _virtual_system(vs) if vs is not None else None
    except DecodeError as e:
        e.with_context(virtual_system=_ovf_attr(vs, "id"))
        raise

    return Envelope(
        version=_ovf_attr(root, "version"),
        lang=root.get(f"{{{XML_NS}}}lang", ""),
        namespaces=root_namespaces(raw),
        virtual_system=virtual_system,
    )


__all__ = ["Envelope", "VirtualSystem", "VirtualHardwareSection", "read_ovf"]
