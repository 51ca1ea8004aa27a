"""Serialization of PO items and catalogs back to text."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..log import log_event
from ..settings import SerializeOptions, resolve_serialize_options
from .escaping import escape_string
from .model import PoFile, PoItem, ordered_header_keys

OBSOLETE_PREFIX = "#~ "
_QUOTES_WIDTH = 2

Options = SerializeOptions | Mapping[str, Any] | None


def _ends_inside_escape(segment: str) -> bool:
    """Return ``True`` when *segment* ends with an unpaired backslash."""
    trailing = len(segment) - len(segment.rstrip("\\"))
    return trailing % 2 == 1


def fold_line(text: str, max_length: int) -> list[str]:
    """Split escaped *text* into segments no longer than *max_length*.

    Each fold happens after the last interior space of the window; without a
    space the window is cut at *max_length*, one column earlier when that
    would separate a backslash from the character it escapes.
    """
    if max_length <= 0 or len(text) <= max_length:
        return [text]

    segments: list[str] = []
    rest = text
    while len(rest) > max_length:
        space = rest.rfind(" ", 1, max_length)
        if space != -1:
            cut = space + 1
        else:
            cut = max_length
            if cut > 1 and _ends_inside_escape(rest[:cut]):
                cut -= 1
        segments.append(rest[:cut])
        rest = rest[cut:]
    segments.append(rest)
    return segments


def _fold_first(text: str, first_length: int, max_length: int) -> list[str]:
    segments = fold_line(text, first_length)
    if len(segments) == 1 or first_length == max_length:
        return segments
    return [segments[0], *fold_line("".join(segments[1:]), max_length)]


def format_keyword(
    keyword: str,
    text: str,
    index: int | None = None,
    options: Options = None,
) -> list[str]:
    """Render *keyword* with value *text* as one or more PO lines.

    Embedded newlines become ``\\n`` at the end of each physical line. In
    compact mode the first segment stays on the keyword line; in traditional
    mode, or when the value starts with a newline, the keyword line carries
    ``""`` and every segment follows on its own line.

    >>> format_keyword("msgid", "Line1\\nLine2")
    ['msgid "Line1\\\\n"', '"Line2"']
    """
    opts = resolve_serialize_options(options)
    prefix = f"{keyword}[{index}] " if index is not None else f"{keyword} "

    raw_parts = text.split("\n")
    multiline = len(raw_parts) > 1
    parts = [escape_string(part) for part in raw_parts]
    if multiline:
        parts = [part + "\\n" for part in parts[:-1]] + [parts[-1]]
        if parts[-1] == "":
            parts.pop()

    fold = opts.fold_length
    width = max(fold - _QUOTES_WIDTH, 1) if fold > 0 else 0
    compact = opts.compact_multiline and raw_parts[0] != ""

    if compact:
        first_width = max(fold - len(prefix) - _QUOTES_WIDTH, 1) if fold > 0 else 0
        segments = _fold_first(parts[0], first_width, width)
        for part in parts[1:]:
            segments.extend(fold_line(part, width))
        return [f'{prefix}"{segments[0]}"', *(f'"{seg}"' for seg in segments[1:])]

    segments = []
    for part in parts:
        segments.extend(fold_line(part, width))
    if len(segments) == 1 and not multiline:
        return [f'{prefix}"{segments[0]}"']
    return [f'{prefix}""', *(f'"{seg}"' for seg in segments)]


def _append_keyword(
    lines: list[str],
    keyword: str,
    text: str,
    prefix: str,
    options: SerializeOptions,
    index: int | None = None,
) -> None:
    for line in format_keyword(keyword, text, index, options):
        lines.append(prefix + line)


def _append_msgstr(
    lines: list[str], item: PoItem, prefix: str, options: SerializeOptions
) -> None:
    has_plural = item.msgid_plural is not None
    has_translation = any(item.msgstr)

    if len(item.msgstr) > 1:
        for index, text in enumerate(item.msgstr):
            _append_keyword(lines, "msgstr", text, prefix, options, index)
    elif has_plural and not has_translation:
        for index in range(item.nplurals):
            lines.append(f'{prefix}msgstr[{index}] ""')
    else:
        index = 0 if has_plural else None
        _append_keyword(lines, "msgstr", "".join(item.msgstr), prefix, options, index)


def _comment_line(marker: str, text: str) -> str:
    return f"{marker} {text}" if text else marker


def stringify_item(item: PoItem, options: Options = None) -> str:
    """Serialize *item* to PO text without a trailing newline.

    Comment lines are written as-is even for obsolete items; every keyword
    and continuation line of an obsolete item is prefixed with ``#~ ``.
    """
    opts = resolve_serialize_options(options)
    prefix = OBSOLETE_PREFIX if item.obsolete else ""
    if item.obsolete and opts.fold_length > 0:
        # the "#~ " prefix counts against the column budget
        width = max(opts.fold_length - len(OBSOLETE_PREFIX), 1)
        opts = opts.model_copy(update={"fold_length": width})
    lines: list[str] = []

    lines.extend(_comment_line("#", comment) for comment in item.comments)
    lines.extend(_comment_line("#.", comment) for comment in item.extracted_comments)
    lines.extend(_comment_line("#:", reference) for reference in item.references)
    flags = item.active_flags
    if flags:
        lines.append("#, " + ", ".join(flags))
    lines.extend(
        _comment_line("#@", f"{key}: {value}".rstrip())
        for key, value in item.metadata.items()
    )

    if item.msgctxt is not None:
        _append_keyword(lines, "msgctxt", item.msgctxt, prefix, opts)
    _append_keyword(lines, "msgid", item.msgid, prefix, opts)
    if item.msgid_plural is not None:
        _append_keyword(lines, "msgid_plural", item.msgid_plural, prefix, opts)
    _append_msgstr(lines, item, prefix, opts)

    return "\n".join(lines)


def stringify_po(po: PoFile, options: Options = None) -> str:
    """Serialize *po* to PO text.

    The header block lists recorded headers in discovery order, then headers
    added afterwards. Every item is followed by a blank line.
    """
    opts = resolve_serialize_options(options)
    lines: list[str] = []

    lines.extend(_comment_line("#", comment) for comment in po.comments)
    lines.extend(_comment_line("#.", comment) for comment in po.extracted_comments)

    lines.append('msgid ""')
    lines.append('msgstr ""')
    for key in ordered_header_keys(po):
        lines.append(f'"{key}: {po.headers[key]}\\n"')
    lines.append("")

    for item in po.items:
        lines.append(stringify_item(item, opts))
        lines.append("")

    text = "\n".join(lines)
    log_event("po_serialized", {"items": len(po.items), "chars": len(text)})
    return text


__all__ = [
    "OBSOLETE_PREFIX",
    "fold_line",
    "format_keyword",
    "stringify_item",
    "stringify_po",
]
