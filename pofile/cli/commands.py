"""Command implementations for the CLI interface."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable

from pofile.core.catalog import (
    Catalog,
    catalog_to_dict,
    catalog_to_items,
    items_to_catalog,
    merge_catalogs,
)
from pofile.core.headers import create_default_headers, parse_plural_forms
from pofile.core.model import coerce_nplurals, create_po_file
from pofile.core.serialization import stringify_po
from pofile.core.store import load_catalog, load_po
from pofile.log import log_event
from pofile.settings import AppSettings, SerializeOptions
from pofile.util.hashing import message_id_for_item


@dataclass
class Command:
    """Describe a CLI command and its argument handler."""

    func: Callable[[argparse.Namespace], None]
    help: str
    add_arguments: Callable[[argparse.ArgumentParser], None]


def _settings(args: argparse.Namespace) -> AppSettings:
    return getattr(args, "app_settings", None) or AppSettings()


def _write_output(output: str | None, text: str) -> None:
    """Write *text* to *output*, or to standard output when it is not set."""
    if not output:
        sys.stdout.write(text)
        return
    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="\n") as fh:
        fh.write(text)
    log_event("output_written", {"path": str(out_path), "chars": len(text)})


def _dump_catalog(catalog: Catalog) -> str:
    return json.dumps(catalog_to_dict(catalog), ensure_ascii=False, indent=2) + "\n"


def _catalog_from_po(
    path: str | Path,
    settings: AppSettings,
    *,
    include_origins: bool | None = None,
    hash_keys: bool = False,
) -> Catalog:
    po = load_po(path)
    use_msgid_as_key = settings.catalog.use_msgid_as_key and not hash_keys
    return items_to_catalog(
        po.items,
        use_msgid_as_key=use_msgid_as_key,
        key_generator=None if use_msgid_as_key else message_id_for_item,
        include_origins=(
            settings.catalog.include_origins
            if include_origins is None
            else include_origins
        ),
    )


def _load_any_catalog(path: str, settings: AppSettings) -> Catalog:
    if Path(path).suffix.lower() in {".po", ".pot"}:
        return _catalog_from_po(path, settings)
    return load_catalog(path)


def cmd_format(args: argparse.Namespace) -> None:
    """Reparse a PO file and write it back with the configured folding."""

    options = _settings(args).serialize.model_dump()
    if args.fold_length is not None:
        options["fold_length"] = args.fold_length
    if args.traditional:
        options["compact_multiline"] = False
    po = load_po(args.path)
    _write_output(args.output, stringify_po(po, SerializeOptions.model_validate(options)))


def add_format_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``format`` command."""

    p.add_argument("path", help="PO file to reformat")
    p.add_argument("-o", "--output", help="write result to file")
    p.add_argument(
        "--fold-length",
        type=int,
        help="column budget for quoted lines (0 disables folding)",
    )
    p.add_argument(
        "--traditional",
        action="store_true",
        help='start multi-line values with an empty "" line',
    )


def cmd_export(args: argparse.Namespace) -> None:
    """Convert a PO file into a flat JSON catalog."""

    settings = _settings(args)
    catalog = _catalog_from_po(
        args.path,
        settings,
        include_origins=settings.catalog.include_origins and not args.no_origins,
        hash_keys=args.hash_keys,
    )
    if args.no_line_numbers or not settings.catalog.include_line_numbers:
        for entry in catalog.values():
            if entry.origins:
                entry.origins = [replace(origin, line=None) for origin in entry.origins]
    _write_output(args.output, _dump_catalog(catalog))


def add_export_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``export`` command."""

    p.add_argument("path", help="PO file to export")
    p.add_argument("-o", "--output", help="write result to file")
    p.add_argument("--no-origins", action="store_true", help="omit source references")
    p.add_argument(
        "--no-line-numbers",
        action="store_true",
        help="keep only file names in source references",
    )
    p.add_argument(
        "--hash-keys",
        action="store_true",
        help="key entries by generated message IDs instead of msgid",
    )


def cmd_import(args: argparse.Namespace) -> None:
    """Build a PO file from a flat JSON catalog."""

    settings = _settings(args)
    catalog = load_catalog(args.path)
    po = create_po_file()
    po.headers.update(
        create_default_headers(
            language=args.language or "",
            plural_forms=False if args.no_plural_forms else args.plural_forms,
        )
    )
    nplurals = settings.catalog.nplurals
    if po.headers["Plural-Forms"]:
        nplurals = coerce_nplurals(parse_plural_forms(po.headers["Plural-Forms"]).nplurals)
    po.items = catalog_to_items(
        catalog,
        include_origins=settings.catalog.include_origins,
        include_line_numbers=settings.catalog.include_line_numbers,
        nplurals=nplurals,
    )
    _write_output(args.output, stringify_po(po, settings.serialize))


def add_import_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``import`` command."""

    p.add_argument("path", help="JSON catalog to import")
    p.add_argument("-o", "--output", help="write result to file")
    p.add_argument("--language", help="value of the Language header")
    p.add_argument(
        "--plural-forms",
        help=(
            'value of the Plural-Forms header, e.g. "nplurals=2; plural=(n != 1);"; '
            "derived from --language when omitted"
        ),
    )
    p.add_argument(
        "--no-plural-forms",
        action="store_true",
        help="do not write a Plural-Forms header",
    )


def cmd_merge(args: argparse.Namespace) -> None:
    """Merge two catalogs (PO or JSON) into a JSON catalog."""

    settings = _settings(args)
    base = _load_any_catalog(args.base, settings)
    updates = _load_any_catalog(args.updates, settings)
    _write_output(args.output, _dump_catalog(merge_catalogs(base, updates)))


def add_merge_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``merge`` command."""

    p.add_argument("base", help="base catalog (.po or .json)")
    p.add_argument("updates", help="catalog whose entries take precedence")
    p.add_argument("-o", "--output", help="write result to file")


def cmd_ids(args: argparse.Namespace) -> None:
    """Print the generated message ID of every item."""

    po = load_po(args.path)
    for item in po.items:
        sys.stdout.write(f"{message_id_for_item(item)}\t{item.msgid}\n")


def add_ids_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``ids`` command."""

    p.add_argument("path", help="PO file to inspect")


COMMANDS: dict[str, Command] = {
    "format": Command(cmd_format, "reformat a PO file", add_format_arguments),
    "export": Command(cmd_export, "export a PO file to JSON", add_export_arguments),
    "import": Command(cmd_import, "create a PO file from JSON", add_import_arguments),
    "merge": Command(cmd_merge, "merge two catalogs into JSON", add_merge_arguments),
    "ids": Command(cmd_ids, "print generated message IDs", add_ids_arguments),
}
