"""Parsing and formatting of ``#:`` source references (``file:line``)."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_RE_LINE_NUMBER = re.compile(r"[1-9][0-9]*", re.ASCII)
_RE_DRIVE_PATH = re.compile(r"^[A-Za-z]:[/\\]")


@dataclass(frozen=True)
class SourceReference:
    """A source location; ``file`` always uses forward slashes."""

    file: str
    line: int | None = None


def normalize_file_path(path: str) -> str:
    """Convert backslashes in *path* to forward slashes."""
    return path.replace("\\", "/")


def _is_absolute_path(path: str) -> bool:
    return path.startswith("/") or bool(_RE_DRIVE_PATH.match(path))


def parse_reference(text: str) -> SourceReference:
    """Parse ``"src/app.py:42"`` into a :class:`SourceReference`.

    Only a trailing positive integer after the last colon counts as a line
    number, so ``C:\\path`` and ``file:name`` stay whole file paths.
    Raises :class:`ValueError` for blank input.
    """
    trimmed = text.strip()
    if not trimmed:
        raise ValueError("reference cannot be empty")

    colon = trimmed.rfind(":")
    if colon > 0:
        suffix = trimmed[colon + 1 :]
        if _RE_LINE_NUMBER.fullmatch(suffix):
            return SourceReference(
                file=normalize_file_path(trimmed[:colon]), line=int(suffix)
            )
    return SourceReference(file=normalize_file_path(trimmed))


def format_reference(
    reference: SourceReference, *, include_line_numbers: bool = True
) -> str:
    """Return *reference* as ``file:line`` or just ``file``."""
    file = normalize_file_path(reference.file)
    if include_line_numbers and reference.line is not None and reference.line > 0:
        return f"{file}:{reference.line}"
    return file


def parse_references(text: str) -> list[SourceReference]:
    """Parse whitespace-separated references from one ``#:`` comment."""
    return [parse_reference(part) for part in text.split()]


def format_references(
    references: Iterable[SourceReference], *, include_line_numbers: bool = True
) -> str:
    """Join *references* with single spaces."""
    return " ".join(
        format_reference(ref, include_line_numbers=include_line_numbers)
        for ref in references
    )


def create_reference(file: str, line: int | None = None) -> SourceReference:
    """Build a validated reference to a relative *file*.

    Raises :class:`ValueError` for absolute paths and non-positive lines.
    """
    normalized = normalize_file_path(file)
    if _is_absolute_path(normalized):
        raise ValueError(f"reference paths must be relative, got absolute path: {file!r}")
    if line is not None and (isinstance(line, bool) or not isinstance(line, int) or line < 1):
        raise ValueError(f"line number must be a positive integer, got: {line!r}")
    return SourceReference(file=normalized, line=line)


__all__ = [
    "SourceReference",
    "create_reference",
    "format_reference",
    "format_references",
    "normalize_file_path",
    "parse_reference",
    "parse_references",
]
