"""Header block handling: splitting, parsing, Plural-Forms and defaults."""

from __future__ import annotations

import datetime
import re
from collections.abc import Mapping
from typing import NamedTuple

from ..util.time import format_po_date, local_now
from .model import PoFile
from .plurals import plural_forms_header

HEADER_MSGID_MARKER = 'msgid ""'
DEFAULT_GENERATOR = "pofile-codec"

_RE_REAL_MSGID = re.compile(r'msgid\s+"[^"]')
_RE_QUOTED_LINE = re.compile(r'^".*"$')
_RE_COMPLETE_LINE = re.compile(r'^".*\\n"$')


class PluralForms(NamedTuple):
    """Raw ``nplurals`` and ``plural`` values of a Plural-Forms header."""

    nplurals: str | None
    plural: str | None


def split_header_and_body(text: str) -> tuple[str, list[str]]:
    """Split *text* into the header block and the remaining body lines.

    Blank-line separated paragraphs are folded into the header until one holds
    the header's ``msgid ""`` or a real ``msgid "..."``. A paragraph with a real
    msgid is left for the body and a synthetic ``msgid ""`` marker closes the
    header instead.
    """
    sections = text.split("\n\n")
    header_parts: list[str] = []
    position = 0
    while position < len(sections) and sections[position]:
        section = sections[position]
        if _RE_REAL_MSGID.search(section):
            header_parts.append(HEADER_MSGID_MARKER)
            break
        header_parts.append(section)
        position += 1
        if HEADER_MSGID_MARKER in section:
            break

    body_lines: list[str] = []
    for section in sections[position:]:
        body_lines.extend(section.split("\n"))
    return "\n".join(header_parts), body_lines


def merge_multiline_headers(lines: list[str]) -> list[str]:
    """Join quoted header lines that were wrapped before their ``\\n``."""
    result: list[str] = []
    pending_merge = False
    for line in lines:
        if pending_merge and result:
            previous = result.pop()
            line = previous[:-1] + line[1:]
            pending_merge = False
        if _RE_QUOTED_LINE.match(line) and not _RE_COMPLETE_LINE.match(line):
            pending_merge = True
        result.append(line)
    return result


def _parse_header_line(line: str, po: PoFile) -> None:
    trimmed = line.strip()
    end_offset = 3 if trimmed.endswith('\\n"') else 1
    cleaned = trimmed[1 : len(trimmed) - end_offset]
    name, colon, value = cleaned.partition(":")
    if not colon:
        return
    name = name.strip()
    po.headers[name] = value.strip()
    po.header_order.append(name)


def parse_headers(header_text: str, po: PoFile) -> None:
    """Populate *po* with comments and header values from *header_text*."""
    for line in merge_multiline_headers(header_text.split("\n")):
        if line.startswith("#."):
            po.extracted_comments.append(line[2:].strip())
        elif line.startswith("#"):
            po.comments.append(line[1:].strip())
        elif line.startswith('"'):
            _parse_header_line(line, po)


def parse_plural_forms(value: str | None) -> PluralForms:
    """Return the raw parts of a ``Plural-Forms`` header value.

    >>> parse_plural_forms("nplurals=2; plural=(n != 1);")
    PluralForms(nplurals='2', plural='(n != 1)')

    The plural expression is kept as text and never evaluated.
    """
    results: dict[str, str] = {}
    for part in (value or "").split(";"):
        key, equals, raw = part.strip().partition("=")
        key = key.strip()
        if equals and key:
            results[key] = raw.strip()
    return PluralForms(results.get("nplurals"), results.get("plural"))


def create_default_headers(
    *,
    language: str = "",
    generator: str = DEFAULT_GENERATOR,
    project_id_version: str = "",
    report_bugs_to: str = "",
    last_translator: str = "",
    language_team: str = "",
    plural_forms: str | bool | None = None,
    custom: Mapping[str, str] | None = None,
    now: datetime.datetime | None = None,
) -> dict[str, str]:
    """Return a header mapping suitable for a freshly created catalog.

    ``Plural-Forms`` is taken from a string *plural_forms*, otherwise derived
    from *language* unless *plural_forms* is ``False``; without a language it
    is omitted. Entries in *custom* override or extend the defaults.
    """
    stamp = format_po_date(now or local_now())
    headers = {
        "Project-Id-Version": project_id_version,
        "Report-Msgid-Bugs-To": report_bugs_to,
        "POT-Creation-Date": stamp,
        "PO-Revision-Date": stamp,
        "Last-Translator": last_translator,
        "Language": language,
        "Language-Team": language_team,
        "MIME-Version": "1.0",
        "Content-Type": "text/plain; charset=utf-8",
        "Content-Transfer-Encoding": "8bit",
        "X-Generator": generator,
    }
    if isinstance(plural_forms, str) and plural_forms:
        headers["Plural-Forms"] = plural_forms
    elif plural_forms is not False and language:
        headers["Plural-Forms"] = plural_forms_header(language)
    if custom:
        headers.update(custom)
    return headers


__all__ = [
    "PluralForms",
    "create_default_headers",
    "merge_multiline_headers",
    "parse_headers",
    "parse_plural_forms",
    "split_header_and_body",
]
