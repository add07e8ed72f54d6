# SPDX-License-Identifier: LGPL-3.0-or-later
# ovf2vmware/ovf/span.py
"""
Span locator.

Given a cursor sitting on the opening line of an element, capture the literal
lines of that element (through its matching end tag) together with the
indentation facts needed to render a replacement in the same style.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.exceptions import MalformedDocument
from .tags import depth_delta, visible_text

_INDENT_CHARS = (" ", "\t")


class LineCursor:
    """Forward-only cursor over the lines of a document (terminators already removed)."""

    def __init__(self, lines: Sequence[str]):
        self._lines = lines
        self._index = -1

    @property
    def index(self) -> int:
        return self._index

    @property
    def line(self) -> str:
        if self._index < 0 or self._index >= len(self._lines):
            raise IndexError("cursor is not positioned on a line")
        return self._lines[self._index]

    def advance(self) -> bool:
        """Move to the next line; False once the input is exhausted."""
        if self._index >= len(self._lines):
            return False
        self._index += 1
        return self._index < len(self._lines)


def indent_info(line: str) -> Tuple[Optional[str], int]:
    """
    Return (indent_char, count) for the leading run of one repeated character.

    Only spaces and tabs count as indentation; an unindented line gives (None, 0).
    """
    if not line or line[0] not in _INDENT_CHARS:
        return None, 0
    ch = line[0]
    n = len(line) - len(line.lstrip(ch))
    return ch, n


@dataclass(frozen=True)
class Span:
    """
    Literal text of one located element plus its indentation facts.

    `text` holds the original lines joined with the document terminator and
    without a trailing terminator.
    """
    text: str
    start_line: int
    end_line: int
    indent_char: str
    outer_indent_count: int
    body_indent_count: int
    eol: str = "\n"

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    @property
    def lines(self) -> List[str]:
        return self.text.split(self.eol)

    @property
    def opening_line(self) -> str:
        return self.lines[0]

    @property
    def outer_prefix(self) -> str:
        return self.indent_char * self.outer_indent_count

    @property
    def body_prefix(self) -> str:
        return self.indent_char * self.body_indent_count

    @property
    def relative_body_indent(self) -> str:
        return self.indent_char * max(self.body_indent_count - self.outer_indent_count, 0)


def locate_span(cursor: LineCursor, local: str, eol: str = "\n") -> Span:
    """
    Capture the element named `local` whose start tag is on the cursor's current line.

    Nesting is tracked by local name, so a child element sharing the outer
    element's name does not end the capture early. Tags inside comments and
    CDATA sections, including ones spanning lines, are not counted. On return
    the cursor sits on the span's last line.

    Raises:
        MalformedDocument: the input ends before the element is closed.
    """
    start = cursor.index
    first = cursor.line
    outer_char, outer_count = indent_info(first)

    captured = [first]
    visible, pending = visible_text(first)
    depth = depth_delta(visible, local)
    body_char: Optional[str] = None
    body_count = 0
    checked_body = False

    while depth > 0:
        if not cursor.advance():
            raise MalformedDocument(
                msg=f"element <{local}> opened on line {start + 1} is never closed",
                context={"element": local, "line": start + 1},
            )
        text = cursor.line
        if not checked_body:
            checked_body = True
            body_char, body_count = indent_info(text)
        captured.append(text)
        visible, pending = visible_text(text, pending)
        depth += depth_delta(visible, local)

    return Span(
        text=eol.join(captured),
        start_line=start,
        end_line=cursor.index,
        indent_char=outer_char or body_char or " ",
        outer_indent_count=outer_count,
        body_indent_count=body_count,
        eol=eol,
    )
