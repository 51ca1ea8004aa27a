"""Parse and write GNU gettext PO catalogs."""

from typing import TYPE_CHECKING, Any

from .core.catalog import (
    Catalog,
    CatalogEntry,
    catalog_from_dict,
    catalog_to_dict,
    catalog_to_items,
    items_to_catalog,
    merge_catalogs,
)
from .core.comments import split_multiline_comments
from .core.escaping import escape_string, extract_string, unescape_string
from .core.headers import (
    PluralForms,
    create_default_headers,
    parse_headers,
    parse_plural_forms,
    split_header_and_body,
)
from .core.model import (
    Headers,
    PoFile,
    PoItem,
    create_item,
    create_po_file,
    ordered_header_keys,
)
from .core.parser import parse_items, parse_po
from .core.plurals import (
    get_plural_categories,
    get_plural_count,
    get_plural_function,
    plural_forms_header,
)
from .core.references import (
    SourceReference,
    create_reference,
    format_reference,
    format_references,
    normalize_file_path,
    parse_reference,
    parse_references,
)
from .core.serialization import fold_line, format_keyword, stringify_item, stringify_po
from .core.store import load_catalog, load_po, save_catalog, save_po
from .settings import SerializeOptions
from .util.hashing import generate_message_id, generate_message_ids
from .util.time import format_po_date

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .core.polib_bridge import from_polib, to_polib

__all__ = [
    "Catalog",
    "CatalogEntry",
    "Headers",
    "PluralForms",
    "PoFile",
    "PoItem",
    "SerializeOptions",
    "SourceReference",
    "catalog_from_dict",
    "catalog_to_dict",
    "catalog_to_items",
    "create_default_headers",
    "create_item",
    "create_po_file",
    "create_reference",
    "escape_string",
    "extract_string",
    "fold_line",
    "format_keyword",
    "format_po_date",
    "format_reference",
    "format_references",
    "from_polib",
    "generate_message_id",
    "generate_message_ids",
    "get_plural_categories",
    "get_plural_count",
    "get_plural_function",
    "items_to_catalog",
    "load_catalog",
    "load_po",
    "merge_catalogs",
    "normalize_file_path",
    "ordered_header_keys",
    "parse_headers",
    "parse_items",
    "parse_plural_forms",
    "parse_po",
    "parse_reference",
    "parse_references",
    "plural_forms_header",
    "save_catalog",
    "save_po",
    "split_header_and_body",
    "split_multiline_comments",
    "stringify_item",
    "stringify_po",
    "to_polib",
    "unescape_string",
]


def __getattr__(name: str) -> Any:
    """Import the polib bridge only when it is first used."""
    if name in {"from_polib", "to_polib"}:
        from .core import polib_bridge

        return getattr(polib_bridge, name)
    raise AttributeError(f"module 'pofile' has no attribute {name!r}")
