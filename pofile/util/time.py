"""Time-related helpers for pofile."""

from __future__ import annotations

import datetime


def utc_now_iso() -> str:
    """Return current UTC time in ISO format without sub-second precision."""
    return datetime.datetime.now(datetime.UTC).isoformat(timespec="seconds")


def format_po_date(value: datetime.datetime) -> str:
    """Format *value* the way PO headers expect: ``YYYY-MM-DD HH:MM+ZZZZ``.

    Naive datetimes are interpreted as local time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M%z")


def local_now() -> datetime.datetime:
    """Return the current local time as an aware datetime."""
    return datetime.datetime.now(datetime.UTC).astimezone()
