"""Domain models for PO catalogs."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_NPLURALS = 2


class Headers(dict[str, str]):
    """Header values keyed by name; missing names read as ``""``.

    Lookups through ``headers[name]`` never insert the missing key, so only
    headers that were parsed or explicitly assigned are serialized.
    """

    def __missing__(self, key: str) -> str:
        return ""


def coerce_nplurals(value: int | str | None) -> int:
    """Return *value* as a plural count, or ``2`` when absent or non-numeric."""
    if value is None or isinstance(value, bool):
        return DEFAULT_NPLURALS
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return DEFAULT_NPLURALS


@dataclass
class PoItem:
    """Represent a single translation entry.

    ``msgstr`` is indexed by plural form. ``flags`` maps flag names such as
    ``fuzzy`` to whether they are set; only true flags are written out.
    ``metadata`` holds ``#@ key: value`` comments in the order first seen.
    """

    msgid: str = ""
    msgctxt: str | None = None
    references: list[str] = field(default_factory=list)
    msgid_plural: str | None = None
    msgstr: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    flags: dict[str, bool] = field(default_factory=dict)
    metadata: dict[str, str] = field(default_factory=dict)
    obsolete: bool = False
    nplurals: int = DEFAULT_NPLURALS

    @property
    def active_flags(self) -> list[str]:
        """Names of flags that are switched on, in insertion order."""
        return [name for name, enabled in self.flags.items() if enabled]

    @property
    def is_plural(self) -> bool:
        return self.msgid_plural is not None


@dataclass
class PoFile:
    """Represent a parsed catalog: file comments, headers and items.

    ``header_order`` records header names in the order they were first seen
    while parsing. Names assigned later only live in ``headers`` and are
    written after the recorded ones, in assignment order.
    """

    comments: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    headers: Headers = field(default_factory=Headers)
    header_order: list[str] = field(default_factory=list)
    items: list[PoItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)


def create_item(nplurals: int | str | None = None) -> PoItem:
    """Create an empty :class:`PoItem` with *nplurals* coerced to an int."""
    return PoItem(nplurals=coerce_nplurals(nplurals))


def create_po_file() -> PoFile:
    """Create an empty :class:`PoFile`."""
    return PoFile()


def ordered_header_keys(po: PoFile) -> list[str]:
    """Return header names in serialization order.

    Names from ``header_order`` that are still present come first (each once),
    followed by any other names in ``headers`` in insertion order.
    """
    result: list[str] = []
    seen: set[str] = set()
    for key in po.header_order:
        if key in po.headers and key not in seen:
            result.append(key)
            seen.add(key)
    for key in po.headers:
        if key not in seen:
            result.append(key)
            seen.add(key)
    return result
