"""Conversion between PO items and flat key→entry catalogs."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from .comments import split_multiline_comments
from .model import DEFAULT_NPLURALS, PoItem, create_item
from .references import (
    SourceReference,
    format_reference,
    normalize_file_path,
    parse_references,
)

Translation = str | list[str]


@dataclass
class CatalogEntry:
    """One entry of a flat catalog.

    ``translation`` is a string for singular messages and a list for plural
    ones; ``None`` means no translation exists yet. ``message`` carries the
    source text when the catalog key is not the msgid itself. Fields left as
    ``None`` are treated as absent when merging.
    """

    translation: Translation | None = None
    message: str | None = None
    plural_source: str | None = None
    context: str | None = None
    comments: list[str] | None = None
    extracted_comments: list[str] | None = None
    origins: list[SourceReference] | None = None
    obsolete: bool | None = None
    flags: dict[str, bool] | None = None

    @property
    def is_plural(self) -> bool:
        return isinstance(self.translation, list)


Catalog = dict[str, CatalogEntry]
KeyGenerator = Callable[[PoItem], str]


def _comment_lines(comments: list[str]) -> list[str]:
    if any("\n" in comment or "\r" in comment for comment in comments):
        return split_multiline_comments(comments)
    return list(comments)


def _apply_translation(item: PoItem, entry: CatalogEntry) -> None:
    if isinstance(entry.translation, str):
        item.msgstr = [entry.translation]
        return
    if entry.translation is None:
        # not translated yet
        item.msgstr = [""] * item.nplurals if entry.plural_source else [""]
    else:
        item.msgstr = list(entry.translation)
    if entry.plural_source:
        item.msgid_plural = entry.plural_source


def catalog_to_items(
    catalog: Mapping[str, CatalogEntry],
    *,
    include_origins: bool = True,
    include_line_numbers: bool = True,
    nplurals: int = DEFAULT_NPLURALS,
) -> list[PoItem]:
    """Convert *catalog* into PO items, one per key, in key order.

    The msgid is the entry's explicit ``message`` or else its key. Origins
    become ``file:line`` references, one per ``#:`` line.
    """
    items: list[PoItem] = []
    for key, entry in catalog.items():
        item = create_item(nplurals)
        item.msgid = entry.message if entry.message is not None else key
        _apply_translation(item, entry)
        if entry.context:
            item.msgctxt = entry.context
        if entry.comments:
            item.comments = _comment_lines(entry.comments)
        if entry.extracted_comments:
            item.extracted_comments = _comment_lines(entry.extracted_comments)
        if include_origins and entry.origins:
            item.references = [
                format_reference(origin, include_line_numbers=include_line_numbers)
                for origin in entry.origins
            ]
        if entry.obsolete:
            item.obsolete = True
        if entry.flags:
            item.flags = dict(entry.flags)
        items.append(item)
    return items


def items_to_catalog(
    items: Iterable[PoItem],
    *,
    use_msgid_as_key: bool = True,
    key_generator: KeyGenerator | None = None,
    include_origins: bool = True,
) -> Catalog:
    """Convert PO items into a catalog, skipping the header item.

    With ``use_msgid_as_key=False`` keys come from *key_generator* and the
    msgid is kept in ``message`` whenever it differs from the key. Later items
    overwrite earlier ones with the same key.
    """
    catalog: Catalog = {}
    for item in items:
        if not item.msgid:
            continue

        if not use_msgid_as_key and key_generator is not None:
            key = key_generator(item)
        else:
            key = item.msgid

        if item.msgid_plural:
            translation: Translation = list(item.msgstr)
        else:
            translation = item.msgstr[0] if item.msgstr else ""
        entry = CatalogEntry(translation=translation)

        if not use_msgid_as_key and item.msgid != key:
            entry.message = item.msgid
        if item.msgid_plural:
            entry.plural_source = item.msgid_plural
        if item.msgctxt:
            entry.context = item.msgctxt
        if item.comments:
            entry.comments = list(item.comments)
        if item.extracted_comments:
            entry.extracted_comments = list(item.extracted_comments)
        if include_origins and item.references:
            entry.origins = [
                origin
                for reference in item.references
                for origin in parse_references(reference)
            ]
        if item.obsolete:
            entry.obsolete = True
        if item.flags:
            entry.flags = dict(item.flags)

        catalog[key] = entry
    return catalog


def _merge_entry(existing: CatalogEntry, update: CatalogEntry) -> CatalogEntry:
    merged = copy.deepcopy(existing)
    for entry_field in fields(CatalogEntry):
        if entry_field.name == "flags":
            continue
        value = getattr(update, entry_field.name)
        if value is not None:
            setattr(merged, entry_field.name, copy.deepcopy(value))
    if existing.flags is not None or update.flags is not None:
        merged.flags = {**(existing.flags or {}), **(update.flags or {})}
    return merged


def merge_catalogs(
    base: Mapping[str, CatalogEntry], updates: Mapping[str, CatalogEntry]
) -> Catalog:
    """Merge *updates* into a copy of *base*.

    Fields set in an update win; list fields (comments, extracted comments,
    origins) keep the base value when the update leaves them unset; flags are
    combined. Neither input is modified.
    """
    merged: Catalog = {key: copy.deepcopy(entry) for key, entry in base.items()}
    for key, update in updates.items():
        existing = merged.get(key)
        if existing is None:
            merged[key] = copy.deepcopy(update)
        else:
            merged[key] = _merge_entry(existing, update)
    return merged


def _optional_text(data: Mapping[str, Any], name: str) -> str | None:
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


def _text_list(data: Mapping[str, Any], name: str) -> list[str] | None:
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"{name} must be a list of strings")
    return list(value)


def _origin_from_value(value: Any) -> SourceReference:
    if isinstance(value, Mapping):
        file = value.get("file")
        line = value.get("line")
        if not isinstance(file, str) or not file:
            raise ValueError("origin requires a non-empty file")
        if line is not None and (isinstance(line, bool) or not isinstance(line, int)):
            raise TypeError("origin line must be an integer")
        return SourceReference(file=normalize_file_path(file), line=line)
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return _origin_from_value({"file": value[0], "line": value[1]})
    raise TypeError("origins must be objects with file and line")


def entry_from_dict(data: Mapping[str, Any]) -> CatalogEntry:
    """Create a :class:`CatalogEntry` from a JSON-style mapping.

    Both ``snake_case`` and the camelCase names ``pluralSource`` and
    ``extractedComments`` are accepted. Raises :class:`TypeError` or
    :class:`ValueError` for malformed values.
    """
    if not isinstance(data, Mapping):
        raise TypeError("catalog entry must be an object")
    normalized = dict(data)
    for alias, name in (
        ("pluralSource", "plural_source"),
        ("extractedComments", "extracted_comments"),
    ):
        if alias in normalized:
            normalized.setdefault(name, normalized.pop(alias))

    translation = normalized.get("translation")
    if translation is not None and not isinstance(translation, str):
        if not isinstance(translation, list) or not all(
            isinstance(t, str) for t in translation
        ):
            raise TypeError("translation must be a string or a list of strings")
        translation = list(translation)

    raw_origins = normalized.get("origins")
    origins = None
    if raw_origins is not None:
        if not isinstance(raw_origins, list):
            raise TypeError("origins must be a list")
        origins = [_origin_from_value(value) for value in raw_origins]

    raw_flags = normalized.get("flags")
    flags = None
    if raw_flags is not None:
        if isinstance(raw_flags, list):
            flags = {str(name): True for name in raw_flags}
        elif isinstance(raw_flags, Mapping):
            flags = {str(name): bool(value) for name, value in raw_flags.items()}
        else:
            raise TypeError("flags must be a list or an object")

    obsolete = normalized.get("obsolete")
    if obsolete is not None and not isinstance(obsolete, bool):
        raise TypeError("obsolete must be a boolean")

    return CatalogEntry(
        translation=translation,
        message=_optional_text(normalized, "message"),
        plural_source=_optional_text(normalized, "plural_source"),
        context=_optional_text(normalized, "context"),
        comments=_text_list(normalized, "comments"),
        extracted_comments=_text_list(normalized, "extracted_comments"),
        origins=origins,
        obsolete=obsolete,
        flags=flags,
    )


def entry_to_dict(entry: CatalogEntry) -> dict[str, Any]:
    """Convert *entry* into a plain ``dict`` omitting unset fields."""
    data: dict[str, Any] = {}
    for entry_field in fields(CatalogEntry):
        value = getattr(entry, entry_field.name)
        if value is None:
            continue
        if entry_field.name == "origins":
            value = [
                {"file": origin.file, "line": origin.line}
                if origin.line is not None
                else {"file": origin.file}
                for origin in value
            ]
        elif isinstance(value, list):
            value = list(value)
        elif isinstance(value, dict):
            value = dict(value)
        data[entry_field.name] = value
    return data


def catalog_from_dict(data: Mapping[str, Any]) -> Catalog:
    """Create a catalog from a mapping of keys to entry mappings."""
    if not isinstance(data, Mapping):
        raise TypeError("catalog must be an object")
    return {str(key): entry_from_dict(value) for key, value in data.items()}


def catalog_to_dict(catalog: Mapping[str, CatalogEntry]) -> dict[str, dict[str, Any]]:
    """Convert *catalog* into plain dictionaries suitable for JSON."""
    return {key: entry_to_dict(entry) for key, entry in catalog.items()}


__all__ = [
    "Catalog",
    "CatalogEntry",
    "catalog_from_dict",
    "catalog_to_dict",
    "catalog_to_items",
    "entry_from_dict",
    "entry_to_dict",
    "items_to_catalog",
    "merge_catalogs",
]
