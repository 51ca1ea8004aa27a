"""Line-driven parser turning PO text into a :class:`PoFile`."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from ..log import log_event
from .escaping import extract_string
from .headers import parse_headers, parse_plural_forms, split_header_and_body
from .model import PoFile, PoItem, create_item, create_po_file

Context = Literal["msgid", "msgid_plural", "msgstr", "msgctxt"]

OBSOLETE_MARKER = "#~"

_RE_MSGSTR_INDEX = re.compile(r"^msgstr\[(\d+)\]")
_MAX_INDEX_DIGITS = 6
_RE_TRANSLATOR_COMMENT = re.compile(r"^#($|\s)")


@dataclass
class ParserState:
    """Mutable state of :func:`parse_items` between lines.

    ``obsolete_count`` counts ``#~`` lines seen for the pending item and
    ``content_count`` counts keyword and continuation lines; the item is
    obsolete when the first reaches the second.
    """

    nplurals: str | None = None
    item: PoItem = field(init=False)
    context: Context | None = None
    plural: int = 0
    obsolete_count: int = 0
    content_count: int = 0

    def __post_init__(self) -> None:
        self.item = create_item(self.nplurals)


def finish_item(state: ParserState, po: PoFile) -> None:
    """Commit the pending item to *po* if it has a msgid, then reset *state*.

    Items without a msgid are left pending so that comments preceding a
    msgid keep accumulating on the same item.
    """
    item = state.item
    if not item.msgid:
        return
    if state.obsolete_count >= state.content_count:
        item.obsolete = True
    po.items.append(item)

    state.item = create_item(state.nplurals)
    state.context = None
    state.plural = 0
    state.obsolete_count = 0
    state.content_count = 0


def _msgstr_index(line: str) -> int | None:
    match = _RE_MSGSTR_INDEX.match(line)
    if match is None:
        return 0
    digits = match.group(1)
    return int(digits) if len(digits) <= _MAX_INDEX_DIGITS else None


def _accepts_index(item: PoItem, index: int) -> bool:
    """Indices may fill the item's plural slots or add one past the last."""
    return index <= max(item.nplurals, len(item.msgstr))


def _set_msgstr(item: PoItem, index: int, value: str) -> None:
    if index >= len(item.msgstr):
        item.msgstr.extend([""] * (index + 1 - len(item.msgstr)))
    item.msgstr[index] = value


def _parse_flags(text: str, item: PoItem) -> None:
    for name in text.split(","):
        name = name.strip()
        if name:
            item.flags[name] = True


def _parse_metadata(text: str, item: PoItem) -> None:
    key, colon, value = text.partition(":")
    key = key.strip()
    if colon and key:
        item.metadata[key] = value.strip()


def _parse_comment_line(line: str, state: ParserState, po: PoFile) -> None:
    marker = line[1:2]
    if marker == ":":
        finish_item(state, po)
        state.item.references.append(line[2:].strip())
    elif marker == ",":
        finish_item(state, po)
        _parse_flags(line[2:], state.item)
    elif marker == ".":
        finish_item(state, po)
        state.item.extracted_comments.append(line[2:].strip())
    elif marker == "@":
        finish_item(state, po)
        _parse_metadata(line[2:], state.item)
    elif _RE_TRANSLATOR_COMMENT.match(line):
        finish_item(state, po)
        state.item.comments.append(line[1:].strip())
    # other markers (#| previous strings, tool-specific comments) are ignored


def _parse_keyword_line(line: str, state: ParserState, po: PoFile) -> bool:
    if line.startswith("msgid_plural"):
        state.item.msgid_plural = extract_string(line)
        state.context = "msgid_plural"
    elif line.startswith("msgid"):
        finish_item(state, po)
        state.item.msgid = extract_string(line)
        state.context = "msgid"
    elif line.startswith("msgstr"):
        index = _msgstr_index(line)
        if index is not None and _accepts_index(state.item, index):
            state.plural = index
            _set_msgstr(state.item, index, extract_string(line))
            state.context = "msgstr"
        else:
            # out-of-range plural index, drop the line and its continuations
            state.context = None
    elif line.startswith("msgctxt"):
        finish_item(state, po)
        state.item.msgctxt = extract_string(line)
        state.context = "msgctxt"
    else:
        return False
    state.content_count += 1
    return True


def _append_continuation(line: str, state: ParserState) -> None:
    state.content_count += 1
    value = extract_string(line)
    item = state.item
    match state.context:
        case "msgstr":
            if state.plural < len(item.msgstr):
                item.msgstr[state.plural] += value
            else:
                _set_msgstr(item, state.plural, value)
        case "msgid":
            item.msgid += value
        case "msgid_plural":
            item.msgid_plural = (item.msgid_plural or "") + value
        case "msgctxt":
            item.msgctxt = (item.msgctxt or "") + value


def parse_line(line: str, state: ParserState, po: PoFile) -> None:
    """Apply one trimmed, marker-free body *line* to *state*."""
    if not line:
        return
    if line.startswith("#"):
        _parse_comment_line(line, state, po)
    elif not _parse_keyword_line(line, state, po):
        _append_continuation(line, state)


def parse_items(lines: list[str], po: PoFile, nplurals: str | None = None) -> None:
    """Parse body *lines* and append the resulting items to *po*.

    Never raises: unrecognized lines are skipped and missing quotes produce
    empty values.
    """
    state = ParserState(nplurals=nplurals)
    for raw_line in lines:
        line = raw_line.strip()
        obsolete = line.startswith(OBSOLETE_MARKER)
        if obsolete:
            line = line[len(OBSOLETE_MARKER):].strip()
            if line.startswith("|"):
                # "#~|" is the obsolete form of a "#|" previous-string comment
                line = "#" + line
        parse_line(line, state, po)
        if obsolete:
            state.obsolete_count += 1
    finish_item(state, po)


def parse_po(text: str) -> PoFile:
    """Parse PO *text* into a new :class:`PoFile`.

    CRLF line endings are normalized first. Items default their ``nplurals``
    from the ``Plural-Forms`` header.
    """
    if "\r\n" in text:
        text = text.replace("\r\n", "\n")

    po = create_po_file()
    header_text, body_lines = split_header_and_body(text)
    parse_headers(header_text, po)
    nplurals = parse_plural_forms(po.headers["Plural-Forms"]).nplurals
    parse_items(body_lines, po, nplurals)
    log_event("po_parsed", {"headers": len(po.header_order), "items": len(po.items)})
    return po


__all__ = [
    "ParserState",
    "finish_item",
    "parse_items",
    "parse_line",
    "parse_po",
]
