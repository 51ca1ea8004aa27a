"""C-style escaping for quoted PO strings."""

from __future__ import annotations

import re

ESCAPE_MAP: dict[str, str] = {
    "\x07": "\\a",
    "\b": "\\b",
    "\t": "\\t",
    "\v": "\\v",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}

UNESCAPE_MAP: dict[str, str] = {
    "a": "\x07",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
}

_RE_ESCAPE = re.compile(r'[\x07\b\t\v\f\r"\\]')
_RE_UNESCAPE = re.compile(r"""\\([abtnvfr'"\\?]|([0-7]{1,3})|x([0-9a-fA-F]{2}))""")


def escape_string(text: str) -> str:
    """Escape *text* for use between double quotes in a PO file.

    Newlines are left alone; the serializer splits on them before escaping.
    NUL characters are not encoded.
    """
    if not _RE_ESCAPE.search(text):
        return text
    return _RE_ESCAPE.sub(lambda match: ESCAPE_MAP[match.group(0)], text)


def _unescape_match(match: re.Match[str]) -> str:
    escape, octal, hexadecimal = match.groups()
    if octal:
        return chr(int(octal, 8))
    if hexadecimal:
        return chr(int(hexadecimal, 16))
    return UNESCAPE_MAP.get(escape, escape)


def unescape_string(text: str) -> str:
    """Decode C-style escapes, including ``\\NNN`` octal and ``\\xNN`` hex.

    Unknown escapes are kept verbatim.
    """
    if "\\" not in text:
        return text
    return _RE_UNESCAPE.sub(_unescape_match, text)


def extract_string(line: str) -> str:
    """Return the unescaped text between the first and last quote of *line*.

    Keyword and plural-index prefixes are skipped implicitly. Lines with fewer
    than two quotes yield an empty string.
    """
    first = line.find('"')
    if first == -1:
        return ""
    last = line.rfind('"')
    if last <= first:
        return ""
    return unescape_string(line[first + 1 : last])


__all__ = ["escape_string", "extract_string", "unescape_string"]
