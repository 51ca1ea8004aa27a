"""Tests for identifier hashing and message IDs."""

from hashlib import sha256

import pytest

from pofile.core.model import PoItem
from pofile.util.hashing import (
    generate_message_id,
    generate_message_ids,
    id_to_hash,
    message_id_for_item,
)

pytestmark = pytest.mark.unit


def test_id_to_hash_deterministic():
    assert id_to_hash("msg-1") == id_to_hash("msg-1")


def test_id_to_hash_length_and_value():
    h = id_to_hash("msg-1", length=16)
    assert len(h) == 16
    assert h == sha256(b"msg-1").hexdigest()[:16]
    assert h != id_to_hash("msg-2", length=16)


def test_id_to_hash_invalid_length():
    with pytest.raises(ValueError):
        id_to_hash("msg-1", length=0)


def test_generate_message_id():
    assert generate_message_id("Hello") == sha256(b"Hello").hexdigest()[:6]
    assert generate_message_id("Hello", "menu") == sha256(b"menuHello").hexdigest()[:6]
    assert generate_message_id("Hello", "") == generate_message_id("Hello")


def test_generate_message_id_hashes_utf8():
    assert generate_message_id("Öffnen") == sha256("Öffnen".encode()).hexdigest()[:6]


def test_generate_message_ids_keys():
    ids = generate_message_ids(["Hello", ("Open", "menu"), ("Close", None)])

    assert ids == {
        "Hello": generate_message_id("Hello"),
        "Open\x04menu": generate_message_id("Open", "menu"),
        "Close": generate_message_id("Close"),
    }


def test_message_id_for_item():
    item = PoItem(msgid="Open", msgctxt="menu")

    assert message_id_for_item(item) == generate_message_id("Open", "menu")
