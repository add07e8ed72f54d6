# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""Shared XML escaping and naming helpers

Escaping uses xml.sax.saxutils; the name helpers work on raw tag text so the
line scanner never has to build a tree.
"""
from __future__ import annotations

from typing import Tuple
from xml.sax.saxutils import escape as _sax_escape
from xml.sax.saxutils import unescape as _sax_unescape


def xml_escape(s: object) -> str:
    """Escape string for XML text and attribute contexts.

    Example:
        >>> xml_escape("a < b & c > d")
        'a &lt; b &amp; c &gt; d'
        >>> xml_escape('say "hello"')
        'say &quot;hello&quot;'
    """
    return _sax_escape(str(s), entities={"'": "&apos;", '"': "&quot;"})


def xml_escape_text(s: str) -> str:
    """Escape string specifically for XML text content.

    Escapes &, <, > characters. Quotes are left alone since they don't need
    escaping in text content.

    Example:
        >>> xml_escape_text("a < b & c > d")
        'a &lt; b &amp; c &gt; d'
    """
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def xml_unescape(s: str) -> str:
    """Undo xml_escape() for attribute values read from raw tag text.

    Example:
        >>> xml_unescape("say &quot;hi&quot; &amp; go")
        'say "hi" & go'
    """
    return _sax_unescape(s, {"&quot;": '"', "&apos;": "'"})


def split_qname(qname: str) -> Tuple[str, str]:
    """Split a raw tag name into (prefix, local).

    Example:
        >>> split_qname("rasd:ElementName")
        ('rasd', 'ElementName')
        >>> split_qname("Item")
        ('', 'Item')
    """
    prefix, sep, local = qname.rpartition(":")
    return (prefix, local) if sep else ("", qname)


def local_name(tag: str) -> str:
    """Local part of an ElementTree tag ('{uri}Name') or a raw qname ('p:Name').

    Example:
        >>> local_name("{http://schemas.dmtf.org/ovf/envelope/1}Item")
        'Item'
        >>> local_name("vssd:InstanceID")
        'InstanceID'
    """
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return split_qname(tag)[1]


__all__ = [
    "xml_escape",
    "xml_escape_text",
    "xml_unescape",
    "split_qname",
    "local_name",
]
