# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/editor.py
"""
Format-preserving OVF editor.

The document is scanned line by line. Lines that open an element kind with
registered proposals are expanded into a Span, decoded, and handed to the
proposals; everything else is copied through untouched. Lines inside comments
and CDATA sections are never treated as elements. Only elements that a
proposal deletes or replaces change in the output.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ..core.exceptions import MalformedDocument
from ..core.logging_utils import get_logger
from ..core.xml_utils import split_qname
from .actions import evaluate
from .codec import decode_span, render_replacement
from .guard import namespace_map, root_namespaces, validate_document
from .registry import EditRegistry
from .span import LineCursor, locate_span
from .tags import leading_name, pending_after, start_tag, visible_text

CRLF = "\r\n"
LF = "\n"


@dataclass
class EditStats:
    kept: int = 0
    deleted: int = 0
    replaced: int = 0
    lines_in: int = 0
    lines_out: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.deleted or self.replaced)


def detect_eol(text: str) -> str:
    """
    Line terminator used by the document: CRLF if the final newline is
    preceded by a carriage return, LF otherwise (also when there is no newline).
    """
    idx = text.rfind(LF)
    if idx > 0 and text[idx - 1] == "\r":
        return CRLF
    return LF


def split_lines(text: str) -> "tuple[List[str], bool]":
    """Split into lines without terminators; also report whether the text ended with one."""
    lines = text.split(LF)
    trailing = lines[-1] == ""
    if trailing:
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines], trailing


def _note_split_start_tag(logger: Any, line: str, index: int, plan: Any) -> None:
    name = leading_name(line)
    if name is not None and split_qname(name)[1] in plan:
        logger.debug(
            "Line %d opens <%s> but its start tag is not complete on that line; left unedited",
            index + 1,
            name,
        )


def edit(
    document: bytes,
    registry: EditRegistry,
    *,
    logger: Optional[Any] = None,
    validate_output: bool = False,
    stats: Optional[EditStats] = None,
) -> bytes:
    """
    Apply `registry` to an OVF document and return the edited bytes.

    Raises:
        MalformedDocument: input (or, with validate_output, output) is not well-formed.
        DecodeError: a matched element cannot be decoded.
        UnsupportedElementKind: the registry names a kind without a codec.
    """
    logger = get_logger(logger)
    stats = stats if stats is not None else EditStats()

    validate_document(document)
    plan = registry.snapshot()

    try:
        text = bytes(document).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDocument(msg=f"OVF document is not valid UTF-8: {e}", cause=e) from e

    if not plan:
        logger.debug("No edit proposals registered; document passes through unchanged")
        return bytes(document)

    namespaces = namespace_map(document)
    in_scope = root_namespaces(document)
    eol = detect_eol(text)
    lines, trailing_eol = split_lines(text)
    stats.lines_in = len(lines)
    logger.debug(
        "Editing OVF: %d lines, eol=%r, kinds=%s",
        len(lines),
        eol,
        ",".join(kind.name for kind, _ in plan.values()),
    )

    out: List[str] = []
    cursor = LineCursor(lines)
    pending = ""
    while cursor.advance():
        line = cursor.line
        tag = None if pending else start_tag(line)
        entry = plan.get(tag.local) if tag is not None else None
        if entry is None:
            if not pending and tag is None:
                _note_split_start_tag(logger, line, cursor.index, plan)
            _, pending = visible_text(line, pending)
            out.append(line)
            continue

        kind, proposals = entry
        span = locate_span(cursor, kind.tag, eol)
        pending = pending_after(span.lines)
        record = decode_span(span, kind, namespaces)
        action = evaluate(record, proposals)

        if action.is_keep:
            stats.kept += 1
            out.extend(span.lines)
        elif action.is_delete:
            stats.deleted += 1
            logger.debug("Deleted %s at lines %d-%d", kind.name, span.start_line + 1, span.end_line + 1)
        else:
            stats.replaced += 1
            out.extend(render_replacement(action.record, span, kind, in_scope).split(eol))
            logger.debug("Replaced %s at lines %d-%d", kind.name, span.start_line + 1, span.end_line + 1)

    stats.lines_out = len(out)
    result = eol.join(out)
    if out and trailing_eol:
        result += eol

    data = result.encode("utf-8")
    if validate_output:
        validate_document(data, what="edited OVF document")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "OVF edit done: kept=%d replaced=%d deleted=%d lines %d -> %d",
            stats.kept,
            stats.replaced,
            stats.deleted,
            stats.lines_in,
            stats.lines_out,
        )
    return data
