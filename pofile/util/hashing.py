"""Utilities for hashing identifiers and deriving message IDs."""
from __future__ import annotations

from collections.abc import Iterable
from hashlib import sha256
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..core.model import PoItem

MESSAGE_ID_LENGTH = 6
CONTEXT_SEPARATOR = "\x04"


def id_to_hash(identifier: int | str, length: int = 12) -> str:
    """Return the first ``length`` hex digits of SHA-256 for *identifier*.

    Parameters
    ----------
    identifier:
        Source identifier value.
    length:
        Number of hex characters to return (default 12).
    """
    if length <= 0:
        raise ValueError("length must be positive")
    digest = sha256(str(identifier).encode("utf-8")).hexdigest()
    return digest[:length]


def generate_message_id(message: str, context: str | None = None) -> str:
    """Return a stable six-character ID for *message* within *context*.

    The context is prepended to the message before hashing, so identical
    source strings used in different contexts receive different IDs.
    """
    source = f"{context}{message}" if context else message
    return id_to_hash(source, MESSAGE_ID_LENGTH)


def generate_message_ids(
    messages: Iterable[str | tuple[str, str | None]],
) -> dict[str, str]:
    """Map each message to its generated ID.

    Items of *messages* are plain strings or ``(message, context)`` pairs.
    Keys of the result are the message itself, or ``message + "\\x04" +
    context`` when a context is present.
    """
    result: dict[str, str] = {}
    for entry in messages:
        if isinstance(entry, str):
            message, context = entry, None
        else:
            message, context = entry
        key = f"{message}{CONTEXT_SEPARATOR}{context}" if context else message
        result[key] = generate_message_id(message, context)
    return result


def message_id_for_item(item: PoItem) -> str:
    """Key generator for :func:`pofile.core.catalog.items_to_catalog`."""
    return generate_message_id(item.msgid, item.msgctxt)
