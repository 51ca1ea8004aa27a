"""Comment helpers for tools that feed source-code comments into catalogs."""

from __future__ import annotations

import re
from collections.abc import Iterable

_RE_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_multiline_comments(comments: Iterable[str]) -> list[str]:
    """Split each comment on line breaks, trim the lines and drop empty ones.

    PO comments hold a single line each, while extracted source comments
    often span several.

    >>> split_multiline_comments(["  Line1\\n  Line2  ", "Line3"])
    ['Line1', 'Line2', 'Line3']
    """
    lines: list[str] = []
    for comment in comments:
        for line in _RE_LINE_BREAK.split(comment):
            line = line.strip()
            if line:
                lines.append(line)
    return lines
