# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/guard.py
"""
Well-formedness guard.

Every document is fully parsed before it is edited, and callers can re-check
the edited output the same way. Parsing goes through defusedxml so entity
expansion tricks in an untrusted OVF are rejected rather than expanded.
"""
from __future__ import annotations

import io
from typing import Dict, Union
from xml.etree.ElementTree import ParseError

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring as safe_fromstring
from defusedxml.ElementTree import iterparse as safe_iterparse

from ..core.exceptions import MalformedDocument

Buffer = Union[bytes, bytearray, memoryview]


def validate_document(data: Buffer, *, what: str = "OVF document") -> None:
    """
    Parse `data` completely and discard the result.

    Raises:
        MalformedDocument: the buffer is empty, not well-formed, or uses forbidden DTD features.
    """
    raw = bytes(data)
    if not raw.strip():
        raise MalformedDocument(msg=f"{what} is empty")
    try:
        safe_fromstring(raw)
    except ParseError as e:
        line, col = getattr(e, "position", (None, None))
        raise MalformedDocument(
            msg=f"{what} is not well-formed XML: {e}",
            cause=e,
            context={"line": line, "column": col},
        ) from e
    except DefusedXmlException as e:
        raise MalformedDocument(msg=f"{what} uses forbidden XML constructs: {e}", cause=e) from e


def namespace_map(data: Buffer) -> Dict[str, str]:
    """
    Return the prefix -> URI declarations found anywhere in the document.

    The default namespace is reported under the empty prefix. When a prefix is
    declared more than once the first declaration wins.
    """
    ns: Dict[str, str] = {}
    try:
        for _event, (prefix, uri) in safe_iterparse(io.BytesIO(bytes(data)), events=("start-ns",)):
            ns.setdefault(prefix or "", uri)
    except ParseError as e:
        raise MalformedDocument(msg=f"OVF document is not well-formed XML: {e}", cause=e) from e
    except DefusedXmlException as e:
        raise MalformedDocument(msg=f"OVF document uses forbidden XML constructs: {e}", cause=e) from e
    return ns


def root_namespaces(data: Buffer) -> Dict[str, str]:
    """
    Return the prefix -> URI declarations made on the root element.

    These are in scope everywhere in the document, unlike the flattened view of
    namespace_map(), so they are the only ones safe to reuse when writing new
    prefixed elements.
    """
    ns: Dict[str, str] = {}
    try:
        for event, payload in safe_iterparse(io.BytesIO(bytes(data)), events=("start-ns", "start")):
            if event == "start":
                break
            prefix, uri = payload
            ns[prefix or ""] = uri
    except ParseError as e:
        raise MalformedDocument(msg=f"OVF document is not well-formed XML: {e}", cause=e) from e
    except DefusedXmlException as e:
        raise MalformedDocument(msg=f"OVF document uses forbidden XML constructs: {e}", cause=e) from e
    return ns
