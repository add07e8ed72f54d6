# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/codec.py
"""
Typed decoding and prefix-aware serialization of located spans.

Each element kind has a RecordCodec holding an explicit field -> tag table.
Decoding matches child elements by local name, so whatever prefix the exporter
used is accepted. Serializing writes every field as `<prefix:Tag>`, where the
prefix is one bound to the schema namespace on the root element or on the
element itself. Otherwise the conventional `rasd` / `vssd` prefix is declared
on the element.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring as safe_fromstring

from ..core.exceptions import DecodeError, UnsupportedElementKind
from ..core.xml_utils import local_name, xml_escape, xml_escape_text
from .model import (
    DEFAULT_PREFIXES,
    HARDWARE_ITEM,
    RASD_NS,
    SYSTEM_DESCRIPTOR,
    VSSD_NS,
    ElementKind,
    HardwareItem,
    SystemDescriptor,
)
from .span import Span
from .tags import Tag, first_tag

_FRAGMENT_TAG = "ovf2vmware-fragment"

_TRUE = ("true", "1")
_FALSE = ("false", "0")


@dataclass(frozen=True)
class FieldSpec:
    attr: str
    tag: str
    boolean: bool = False


@dataclass(frozen=True)
class RecordCodec:
    kind: ElementKind
    record_type: Type[Any]
    namespace: str
    default_prefix: str
    fields: Tuple[FieldSpec, ...]

    # -- decoding ------------------------------------------------------------

    def decode(self, text: str, namespaces: Optional[Mapping[str, str]] = None) -> Any:
        return self.from_element(_parse_fragment(text, namespaces, self.kind))

    def from_element(self, elem: Element) -> Any:
        """Build the record from a parsed element; children are matched by local name."""
        if local_name(elem.tag) != self.kind.tag:
            raise DecodeError(
                msg=f"expected <{self.kind.tag}> element, found <{local_name(elem.tag)}>",
                context={"kind": self.kind.name},
            )

        by_tag = {f.tag: f for f in self.fields}
        values: Dict[str, Any] = {}
        for child in elem:
            if not isinstance(child.tag, str):
                continue
            spec = by_tag.get(local_name(child.tag))
            if spec is None or spec.attr in values:
                continue
            raw = "".join(child.itertext())
            values[spec.attr] = _parse_bool(raw, spec, self.kind) if spec.boolean else raw

        return self.record_type(**values)

    # -- serialization -------------------------------------------------------

    def prefix_in(self, namespaces: Optional[Mapping[str, str]]) -> Tuple[str, bool]:
        """Return (prefix, declared) for this codec's namespace in the given document map."""
        for prefix, uri in (namespaces or {}).items():
            if prefix and uri == self.namespace:
                return prefix, True
        return self.default_prefix, False

    def body_lines(self, record: Any, prefix: str) -> List[str]:
        out: List[str] = []
        for f in self.fields:
            value = getattr(record, f.attr)
            if value is None or value == "":
                continue
            if f.boolean:
                value = "true" if value else "false"
            out.append(f"<{prefix}:{f.tag}>{xml_escape_text(str(value))}</{prefix}:{f.tag}>")
        return out

    def render(self, record: Any, span: Span, namespaces: Optional[Mapping[str, str]] = None) -> str:
        """
        Serialize `record` in place of `span`.

        The span's own start tag is reused verbatim; field lines are indented one
        relative step deeper than the element, using the span's indent character.
        `namespaces` must only hold declarations in scope at the span (the root
        element's); ones written on the start tag itself are added here.
        """
        if not isinstance(record, self.record_type):
            raise TypeError(
                f"{self.kind.name} replacement must be {self.record_type.__name__}, got {type(record).__name__}"
            )

        tag = _opening_tag(span, self.kind)
        scope = dict(namespaces or {})
        scope.update(tag.namespace_decls)
        prefix, declared = self.prefix_in(scope)
        open_tag, close_tag = _element_tags(tag)
        if not declared:
            while prefix in tag.namespace_decls:
                prefix += "_"
            open_tag = f'{open_tag[:-1]} xmlns:{prefix}="{xml_escape(self.namespace)}">'

        outer = span.outer_prefix
        body = self.body_lines(record, prefix)
        if not body:
            return f"{outer}{open_tag}{close_tag}"

        inner = outer + span.relative_body_indent
        lines = [outer + open_tag]
        lines.extend(inner + ln for ln in body)
        lines.append(outer + close_tag)
        return span.eol.join(lines)


def _parse_bool(raw: str, spec: FieldSpec, kind: ElementKind) -> Optional[bool]:
    v = raw.strip().lower()
    if v == "":
        return None
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise DecodeError(
        msg=f"{kind.tag}/{spec.tag} is not a boolean: {raw!r}",
        context={"kind": kind.name, "field": spec.tag},
    )


def _parse_fragment(text: str, namespaces: Optional[Mapping[str, str]], kind: ElementKind) -> Element:
    # Re-declare the document's prefixes around the fragment so prefixed tags resolve.
    decls: Dict[str, str] = dict(DEFAULT_PREFIXES)
    decls.update(namespaces or {})
    attrs = " ".join(
        (f'xmlns:{p}="{xml_escape(uri)}"' if p else f'xmlns="{xml_escape(uri)}"')
        for p, uri in sorted(decls.items())
    )
    wrapped = f"<{_FRAGMENT_TAG} {attrs}>{text}</{_FRAGMENT_TAG}>"

    try:
        root = safe_fromstring(wrapped.encode("utf-8"))
    except (ParseError, DefusedXmlException) as e:
        raise DecodeError(
            msg=f"cannot decode <{kind.tag}> element: {e}",
            cause=e,
            context={"kind": kind.name},
        ) from e

    children = [c for c in root if isinstance(c.tag, str)]
    if len(children) != 1:
        raise DecodeError(
            msg=f"expected exactly one <{kind.tag}> element in span, found {len(children)}",
            context={"kind": kind.name},
        )
    return children[0]


def _opening_tag(span: Span, kind: ElementKind) -> Tag:
    tag = first_tag(span.opening_line)
    if tag is None or tag.closing or tag.local != kind.tag:
        raise DecodeError(
            msg=f"span does not start with a <{kind.tag}> tag",
            context={"kind": kind.name, "line": span.start_line + 1},
        )
    return tag


def _element_tags(tag: Tag) -> Tuple[str, str]:
    open_tag = tag.text
    if tag.self_closing:
        open_tag = open_tag[:-2].rstrip() + ">"
    return open_tag, f"</{tag.qname}>"


SYSTEM_CODEC = RecordCodec(
    kind=SYSTEM_DESCRIPTOR,
    record_type=SystemDescriptor,
    namespace=VSSD_NS,
    default_prefix="vssd",
    fields=(
        FieldSpec("element_name", "ElementName"),
        FieldSpec("instance_id", "InstanceID"),
        FieldSpec("virtual_system_identifier", "VirtualSystemIdentifier"),
        FieldSpec("virtual_system_type", "VirtualSystemType"),
    ),
)

# Schema (alphabetical) order, as OVF exporters write them.
HARDWARE_ITEM_CODEC = RecordCodec(
    kind=HARDWARE_ITEM,
    record_type=HardwareItem,
    namespace=RASD_NS,
    default_prefix="rasd",
    fields=(
        FieldSpec("address", "Address"),
        FieldSpec("address_on_parent", "AddressOnParent"),
        FieldSpec("allocation_units", "AllocationUnits"),
        FieldSpec("automatic_allocation", "AutomaticAllocation", boolean=True),
        FieldSpec("caption", "Caption"),
        FieldSpec("connection", "Connection"),
        FieldSpec("description", "Description"),
        FieldSpec("element_name", "ElementName"),
        FieldSpec("host_resource", "HostResource"),
        FieldSpec("instance_id", "InstanceID"),
        FieldSpec("parent", "Parent"),
        FieldSpec("resource_sub_type", "ResourceSubType"),
        FieldSpec("resource_type", "ResourceType"),
        FieldSpec("virtual_quantity", "VirtualQuantity"),
    ),
)

_CODECS: Dict[ElementKind, RecordCodec] = {
    SYSTEM_DESCRIPTOR: SYSTEM_CODEC,
    HARDWARE_ITEM: HARDWARE_ITEM_CODEC,
}


def register_codec(codec: RecordCodec, *, replace: bool = False) -> None:
    """Make a new element kind editable. Field names must match the record's dataclass fields."""
    names = {f.name for f in dataclasses.fields(codec.record_type)}
    unknown = [f.attr for f in codec.fields if f.attr not in names]
    if unknown:
        raise ValueError(f"{codec.record_type.__name__} has no field(s): {', '.join(unknown)}")
    if codec.kind in _CODECS and not replace:
        raise ValueError(f"a codec for {codec.kind.name} is already registered")
    _CODECS[codec.kind] = codec


def codec_for(kind: ElementKind) -> RecordCodec:
    try:
        return _CODECS[kind]
    except KeyError:
        raise UnsupportedElementKind(
            msg=f"no codec registered for element kind {kind.name!r} (<{kind.tag}>)",
            context={"kind": kind.name},
        ) from None


def decode_span(span: Span, kind: ElementKind, namespaces: Optional[Mapping[str, str]] = None) -> Any:
    """Decode a located span into the record type of `kind`."""
    return codec_for(kind).decode(span.text, namespaces)


def render_replacement(
    record: Any,
    span: Span,
    kind: ElementKind,
    namespaces: Optional[Mapping[str, str]] = None,
) -> str:
    """Serialize `record` using the indentation captured in `span`."""
    return codec_for(kind).render(record, span, namespaces)
