"""Locale plural rules backed by Babel's CLDR data."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

from babel import Locale
from babel.core import UnknownLocaleError
from babel.messages.plurals import get_plural
from babel.plural import PluralRule

CLDR_CATEGORY_ORDER = ("zero", "one", "two", "few", "many", "other")
DEFAULT_PLURAL_FORMS = "nplurals=2; plural=(n != 1);"

_DEFAULT_RULE = PluralRule({"one": "n is 1"})


def _normalize_locale(locale: str) -> str:
    return locale.strip().replace("-", "_")


@lru_cache(maxsize=None)
def _plural_rule(locale: str) -> PluralRule:
    try:
        return Locale.parse(_normalize_locale(locale)).plural_form
    except (ValueError, UnknownLocaleError):
        return _DEFAULT_RULE


@lru_cache(maxsize=None)
def get_plural_categories(locale: str) -> tuple[str, ...]:
    """Return the CLDR plural categories of *locale* in canonical order.

    >>> get_plural_categories("pl")
    ('one', 'few', 'many', 'other')

    ``de-DE`` and ``pt_BR`` spellings are both accepted. Unknown locales get
    the English rule, ``('one', 'other')``.
    """
    tags = set(_plural_rule(locale).tags) | {"other"}
    return tuple(tag for tag in CLDR_CATEGORY_ORDER if tag in tags)


def get_plural_count(locale: str) -> int:
    """Return the number of CLDR plural categories for *locale*."""
    return len(get_plural_categories(locale))


def get_plural_function(locale: str) -> Callable[[int | float], int]:
    """Return a selector mapping a count to its plural category index.

    The index points into :func:`get_plural_categories` for the same locale.
    """
    rule = _plural_rule(locale)
    categories = get_plural_categories(locale)

    def select(n: int | float) -> int:
        category = rule(n)
        if category in categories:
            return categories.index(category)
        return len(categories) - 1

    return select


def plural_forms_header(locale: str) -> str:
    """Return a gettext ``Plural-Forms`` value for *locale*.

    Values come from Babel's gettext plural table, so ``nplurals`` always
    matches the expression. It may differ from :func:`get_plural_count`
    where gettext and CLDR disagree (``pl`` has three gettext forms).
    """
    normalized = _normalize_locale(locale)
    if not normalized:
        return DEFAULT_PLURAL_FORMS
    try:
        plural = get_plural(normalized)
    except (ValueError, UnknownLocaleError):
        return DEFAULT_PLURAL_FORMS
    return f"nplurals={plural.num_plurals}; plural={plural.plural_expr};"


__all__ = [
    "get_plural_categories",
    "get_plural_count",
    "get_plural_function",
    "plural_forms_header",
]
