"""File storage for PO catalogs and flat JSON catalogs."""
from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from pofile.log import log_event

from ..settings import SerializeOptions
from .catalog import Catalog, CatalogEntry, catalog_from_dict, catalog_to_dict
from .model import PoFile
from .parser import parse_po
from .serialization import stringify_po


def read_text(path: str | Path, *, encoding: str = "utf-8") -> str:
    """Return the full text of *path*.

    ``newline=""`` keeps CRLF endings intact for :func:`parse_po` to normalize.
    Read and decode failures propagate unchanged.
    """
    with Path(path).open("r", encoding=encoding, newline="") as fh:
        return fh.read()


def load_po(path: str | Path, *, encoding: str = "utf-8") -> PoFile:
    """Parse the PO file at *path*."""
    p = Path(path)
    po = parse_po(read_text(p, encoding=encoding))
    log_event("po_loaded", {"path": str(p), "items": len(po.items)})
    return po


def save_po(
    path: str | Path,
    po: PoFile,
    options: SerializeOptions | Mapping | None = None,
    *,
    encoding: str = "utf-8",
) -> Path:
    """Serialize *po* into *path* and return the path written."""
    p = Path(path)
    text = stringify_po(po, options)
    with p.open("w", encoding=encoding, newline="\n") as fh:
        fh.write(text)
    log_event("po_saved", {"path": str(p), "items": len(po.items)})
    return p


def load_catalog(path: str | Path) -> Catalog:
    """Load a flat catalog from the JSON file at *path*.

    Invalid JSON is reported as :class:`ValueError`.
    """
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {p}: {exc}") from exc
    return catalog_from_dict(data)


def save_catalog(path: str | Path, catalog: Mapping[str, CatalogEntry]) -> Path:
    """Write *catalog* as indented JSON to *path*."""
    p = Path(path)
    with p.open("w", encoding="utf-8") as fh:
        json.dump(catalog_to_dict(catalog), fh, ensure_ascii=False, indent=2)
        fh.write("\n")
    log_event("catalog_saved", {"path": str(p), "entries": len(catalog)})
    return p


__all__ = [
    "load_catalog",
    "load_po",
    "read_text",
    "save_catalog",
    "save_po",
]
