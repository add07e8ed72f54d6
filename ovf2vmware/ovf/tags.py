# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/tags.py
"""
Line-level tag sniffing.

The editor never builds a tree of the whole document; it looks at one line at a
time and only needs to know which tags that line opens or closes. Comments,
CDATA sections and processing instructions are skipped, including ones that
span several lines: callers thread the `pending` terminator returned by
visible_text() from one line to the next.

A start tag must be complete on one line. An element whose start tag is split
across lines (`<Item` on one line, its attributes and `>` on the next) is not
recognised and passes through unedited.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from ..core.xml_utils import split_qname, xml_unescape

_NAME = r"[A-Za-z_][\w.\-]*(?::[A-Za-z_][\w.\-]*)?"
_ATTR = r"""\s+[^\s=/>]+\s*=\s*(?:"[^"]*"|'[^']*')"""

TAG_RE = re.compile(rf"<(?P<close>/?)(?P<name>{_NAME})(?P<attrs>(?:{_ATTR})*)\s*(?P<empty>/?)>")
_LEADING_NAME_RE = re.compile(rf"<(?P<name>{_NAME})")
_XMLNS_RE = re.compile(r"""\sxmlns(?::(?P<prefix>[A-Za-z_][\w.\-]*))?\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""")

# Markup whose content is not tags: opener -> terminator.
_SKIPPED = (("<!--", "-->"), ("<![CDATA[", "]]>"), ("<?", "?>"))


@dataclass(frozen=True)
class Tag:
    qname: str
    closing: bool
    self_closing: bool
    text: str

    @property
    def prefix(self) -> str:
        return split_qname(self.qname)[0]

    @property
    def local(self) -> str:
        return split_qname(self.qname)[1]

    @property
    def opening(self) -> bool:
        return not self.closing and not self.self_closing

    @property
    def namespace_decls(self) -> Dict[str, str]:
        """xmlns declarations written on this tag (default namespace under "")."""
        return {
            m.group("prefix") or "": xml_unescape(m.group("dq") if m.group("dq") is not None else m.group("sq"))
            for m in _XMLNS_RE.finditer(self.text)
        }


def _tag_from_match(m: "re.Match[str]") -> Tag:
    return Tag(
        qname=m.group("name"),
        closing=bool(m.group("close")),
        self_closing=bool(m.group("empty")),
        text=m.group(0),
    )


def visible_text(line: str, pending: str = "") -> Tuple[str, str]:
    """
    Drop comments, CDATA sections and PIs from `line`.

    `pending` is the terminator of a construct left open by an earlier line
    ("" when none). Returns the remaining text and the terminator still pending
    at the end of this line.
    """
    out = []
    pos = 0
    while pos < len(line):
        if pending:
            end = line.find(pending, pos)
            if end < 0:
                return "".join(out), pending
            pos = end + len(pending)
            pending = ""
            continue

        nearest = None
        for opener, closer in _SKIPPED:
            idx = line.find(opener, pos)
            if idx >= 0 and (nearest is None or idx < nearest[0]):
                nearest = (idx, opener, closer)
        if nearest is None:
            out.append(line[pos:])
            break
        idx, opener, closer = nearest
        out.append(line[pos:idx])
        pos = idx + len(opener)
        pending = closer
    return "".join(out), pending


def pending_after(lines: Iterable[str], pending: str = "") -> str:
    """Terminator still open after `lines`, starting from `pending`."""
    for line in lines:
        _, pending = visible_text(line, pending)
    return pending


def first_tag(line: str) -> Optional[Tag]:
    """Return the tag the (stripped) line starts with, or None if it starts with anything else."""
    m = TAG_RE.match(line.strip())
    if m is None or (m.group("close") and m.group("empty")):
        return None
    return _tag_from_match(m)


def start_tag(line: str) -> Optional[Tag]:
    """Return the start tag that opens the line, if the line opens one."""
    tag = first_tag(line)
    if tag is None or tag.closing:
        return None
    return tag


def leading_name(line: str) -> Optional[str]:
    """Qualified name of an element the line starts to open, even if its start tag is incomplete."""
    m = _LEADING_NAME_RE.match(line.strip())
    return m.group("name") if m else None


def iter_tags(line: str) -> Iterator[Tag]:
    """Yield every start/end/empty tag on the line, in order. Pass visible text for multi-line comments."""
    for m in TAG_RE.finditer(visible_text(line)[0]):
        if m.group("close") and m.group("empty"):
            continue
        yield _tag_from_match(m)


def depth_delta(line: str, local: str) -> int:
    """Net nesting change for elements named `local` (by local name) on one line."""
    delta = 0
    for tag in iter_tags(line):
        if tag.local != local:
            continue
        if tag.closing:
            delta -= 1
        elif not tag.self_closing:
            delta += 1
    return delta
