"""Conversion between :class:`PoFile` and polib's object model."""

from __future__ import annotations

import polib

from .headers import parse_plural_forms
from .model import PoFile, PoItem, create_item, create_po_file, ordered_header_keys
from .references import parse_references

DEFAULT_WRAP_WIDTH = 78


def _lines(text: str) -> list[str]:
    return text.split("\n") if text else []


def _entry_from_item(item: PoItem) -> polib.POEntry:
    occurrences = [
        (origin.file, str(origin.line) if origin.line is not None else "")
        for reference in item.references
        for origin in parse_references(reference)
    ]
    kwargs: dict = {
        "msgid": item.msgid,
        "msgctxt": item.msgctxt,
        "comment": "\n".join(item.extracted_comments),
        "tcomment": "\n".join(item.comments),
        "occurrences": occurrences,
        "flags": item.active_flags,
        "obsolete": item.obsolete,
    }
    if item.msgid_plural is not None:
        kwargs["msgid_plural"] = item.msgid_plural
        slots = item.msgstr or [""] * item.nplurals
        kwargs["msgstr_plural"] = dict(enumerate(slots))
    else:
        kwargs["msgstr"] = "".join(item.msgstr)
    return polib.POEntry(**kwargs)


def to_polib(po: PoFile, *, wrapwidth: int = DEFAULT_WRAP_WIDTH) -> polib.POFile:
    """Return a :class:`polib.POFile` holding the contents of *po*.

    File-level translator comments become the polib header text. File-level
    extracted comments and item ``#@`` metadata have no polib counterpart and
    are not carried over.
    """
    result = polib.POFile(wrapwidth=wrapwidth)
    result.header = "\n".join(po.comments)
    result.metadata = {key: po.headers[key] for key in ordered_header_keys(po)}
    for item in po.items:
        result.append(_entry_from_item(item))
    return result


def _item_from_entry(entry: polib.POEntry, nplurals: str | None) -> PoItem:
    item = create_item(nplurals)
    item.msgid = entry.msgid
    item.msgctxt = entry.msgctxt
    if entry.msgid_plural:
        item.msgid_plural = entry.msgid_plural
        plural = {int(index): text for index, text in entry.msgstr_plural.items()}
        item.msgstr = [plural[index] for index in sorted(plural)]
    else:
        item.msgstr = [entry.msgstr]
    item.comments = _lines(entry.tcomment)
    item.extracted_comments = _lines(entry.comment)
    item.references = [
        f"{file}:{line}" if line else file for file, line in entry.occurrences
    ]
    item.flags = {name: True for name in entry.flags}
    item.obsolete = bool(entry.obsolete)
    return item


def from_polib(source: polib.POFile) -> PoFile:
    """Build a :class:`PoFile` from a polib catalog, obsolete entries included."""
    po = create_po_file()
    po.comments = _lines(source.header)
    for key, value in source.metadata.items():
        po.headers[key] = value
        po.header_order.append(key)
    nplurals = parse_plural_forms(po.headers["Plural-Forms"]).nplurals
    po.items = [_item_from_entry(entry, nplurals) for entry in source if entry.msgid]
    return po


__all__ = ["from_polib", "to_polib"]
