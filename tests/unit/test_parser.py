"""Tests for the PO item parser."""

import pytest

from pofile.core.model import create_po_file
from pofile.core.parser import ParserState, finish_item, parse_items, parse_po

pytestmark = pytest.mark.unit


SAMPLE = r"""# Translator comment
msgid ""
msgstr ""
"Project-Id-Version: demo\n"
"Language: de\n"
"Plural-Forms: nplurals=3; plural=(n==1 ? 0 : n>=2 && n<=4 ? 1 : 2);\n"

#. extracted note
#: src/app.py:10 src/other.py:3
#, fuzzy, python-format
msgctxt "menu"
msgid "Open"
msgstr "Öffnen"

msgid "file"
msgid_plural "files"
msgstr[0] "Datei"
msgstr[1] "Dateien"
msgstr[2] "Dateien"

#~ msgid "old"
#~ msgstr "alt"
"""


def _body(text: str) -> str:
    return 'msgid ""\nmsgstr ""\n\n' + text


def test_parse_po_headers():
    po = parse_po(SAMPLE)

    assert po.comments == ["Translator comment"]
    assert po.header_order == ["Project-Id-Version", "Language", "Plural-Forms"]
    assert po.headers["Language"] == "de"


def test_parse_po_items():
    po = parse_po(SAMPLE)

    assert [item.msgid for item in po.items] == ["Open", "file", "old"]
    menu, files, old = po.items

    assert menu.msgctxt == "menu"
    assert menu.msgstr == ["Öffnen"]
    assert menu.flags == {"fuzzy": True, "python-format": True}
    assert menu.references == ["src/app.py:10 src/other.py:3"]
    assert menu.extracted_comments == ["extracted note"]
    assert menu.obsolete is False

    assert files.msgid_plural == "files"
    assert files.msgstr == ["Datei", "Dateien", "Dateien"]
    assert files.nplurals == 3

    assert old.obsolete is True
    assert old.msgstr == ["alt"]


def test_continuation_fills_initially_empty_plural():
    text = 'msgid ""\nmsgstr ""\n\nmsgid "one"\nmsgid_plural ""\n"many"\nmsgstr[0] ""\nmsgstr[1] ""\n'

    po = parse_po(text)

    assert len(po.items) == 1
    assert po.items[0].msgid_plural == "many"
    assert po.items[0].msgstr == ["", ""]


def test_continuations_append_to_current_field():
    po = parse_po(
        _body(
            'msgctxt "a "\n"context"\n'
            'msgid ""\n"Hello "\n"world\\n"\n'
            'msgstr "Hallo "\n"Welt\\n"\n'
        )
    )

    item = po.items[0]
    assert item.msgctxt == "a context"
    assert item.msgid == "Hello world\n"
    assert item.msgstr == ["Hallo Welt\n"]


def test_fully_marked_multiline_item_is_obsolete():
    po = parse_po(_body('#~ msgid ""\n#~ "long "\n#~ "text"\n#~ msgstr "x"\n'))

    assert po.items[0].msgid == "long text"
    assert po.items[0].obsolete is True


def test_partially_marked_item_is_not_obsolete():
    po = parse_po(_body('#~ msgid "half"\nmsgstr "halb"\n'))

    assert po.items[0].obsolete is False


def test_unmarked_continuation_keeps_item_active():
    po = parse_po(_body('#~ msgid "a"\n"b"\n#~ msgstr "c"\n'))

    assert po.items[0].msgid == "ab"
    assert po.items[0].obsolete is False


def test_unmarked_comments_do_not_prevent_obsolete_detection():
    # comment lines are not content, so only the marked keyword lines count
    po = parse_po(_body('# still here\n#, fuzzy\n#~ msgid "gone"\n#~ msgstr "weg"\n'))

    item = po.items[0]
    assert item.comments == ["still here"]
    assert item.flags == {"fuzzy": True}
    assert item.obsolete is True


def test_obsolete_item_does_not_leak_into_next_item():
    po = parse_po(_body('#~ msgid "old"\n#~ msgstr "alt"\n\nmsgid "new"\nmsgstr "neu"\n'))

    assert [item.obsolete for item in po.items] == [True, False]


def test_crlf_input_is_normalized():
    text = 'msgid ""\r\nmsgstr ""\r\n"Language: fr\\n"\r\n\r\nmsgid "a"\r\nmsgstr "b"\r\n'

    po = parse_po(text)

    assert po.headers["Language"] == "fr"
    assert po.items[0].msgid == "a"
    assert po.items[0].msgstr == ["b"]


def test_file_without_header_block():
    po = parse_po('msgid "a"\nmsgstr "b"\n')

    assert po.header_order == []
    assert dict(po.headers) == {}
    assert [(item.msgid, item.msgstr) for item in po.items] == [("a", ["b"])]


@pytest.mark.parametrize(
    "plural_forms, expected",
    [
        ("nplurals=3; plural=0;", 3),
        ("nplurals=x; plural=0;", 2),
        (None, 2),
    ],
)
def test_items_default_nplurals_from_header(plural_forms, expected):
    header = f'"Plural-Forms: {plural_forms}\\n"\n' if plural_forms else ""
    text = f'msgid ""\nmsgstr ""\n{header}\nmsgid "a"\nmsgstr "b"\n'

    po = parse_po(text)

    assert po.items[0].nplurals == expected


def test_malformed_lines_are_tolerated():
    po = parse_po(
        _body(
            'msgid "a"\n'
            "#| msgid \"previous\"\n"
            "garbage without quotes\n"
            "msgstr\n"
            "#@ tool-specific\n"
        )
    )

    assert len(po.items) == 1
    assert po.items[0].msgid == "a"
    assert po.items[0].msgstr == [""]


def test_msgstr_indices_out_of_order():
    po = parse_po(_body('msgid "a"\nmsgid_plural "as"\nmsgstr[2] "c"\nmsgstr[0] "x"\n'))

    assert po.items[0].msgstr == ["x", "", "c"]


@pytest.mark.parametrize(
    "index",
    ["99999999999", "1000", "9" * 5000],
    ids=["huge", "beyond-plural-slots", "too-many-digits"],
)
def test_out_of_range_msgstr_index_is_ignored(index):
    po = parse_po(_body(f'msgid "a"\nmsgstr[{index}] "x"\n"more"\nmsgstr[0] "b"\n'))

    (item,) = po.items
    assert item.msgid == "a"
    assert item.msgstr == ["b"]


def test_msgstr_indices_beyond_nplurals_extend_one_at_a_time():
    po = parse_po(
        _body(
            'msgid "a"\nmsgid_plural "as"\n'
            'msgstr[0] "0"\nmsgstr[1] "1"\nmsgstr[2] "2"\nmsgstr[3] "3"\nmsgstr[9] "9"\n'
        )
    )

    assert po.items[0].msgstr == ["0", "1", "2", "3"]


def test_metadata_comments():
    po = parse_po(
        _body(
            'msgid "a"\nmsgstr "b"\n'
            "#@ origin: LLM\n"
            "#@ note: see: docs\n"
            "#@ no separator\n"
            "#@ : empty key\n"
            'msgid "c"\nmsgstr "d"\n'
        )
    )

    first, second = po.items
    assert first.metadata == {}
    assert second.metadata == {"origin": "LLM", "note": "see: docs"}


def test_comments_before_msgid_start_a_new_item():
    po = parse_po(_body('msgid "a"\nmsgstr "b"\n# for c\nmsgid "c"\nmsgstr "d"\n'))

    assert [item.comments for item in po.items] == [[], ["for c"]]


def test_empty_translator_comment_and_flag_names():
    po = parse_po(_body('#\n#, fuzzy,, c-format\nmsgid "a"\nmsgstr ""\n'))

    assert po.items[0].comments == [""]
    assert po.items[0].flags == {"fuzzy": True, "c-format": True}


def test_items_without_msgid_are_not_committed():
    po = create_po_file()

    parse_items(["# orphan comment", 'msgstr "no msgid"'], po)

    assert po.items == []


def test_finish_item_keeps_pending_item_without_msgid():
    po = create_po_file()
    state = ParserState(nplurals="4")
    state.item.comments.append("pending")

    finish_item(state, po)

    assert po.items == []
    assert state.item.comments == ["pending"]
    assert state.item.nplurals == 4


def test_finish_item_commits_and_resets():
    po = create_po_file()
    state = ParserState()
    state.item.msgid = "a"
    state.content_count = 2
    state.context = "msgid"

    finish_item(state, po)

    assert [item.msgid for item in po.items] == ["a"]
    assert po.items[0].obsolete is False
    assert state.item.msgid == ""
    assert state.context is None
    assert state.content_count == 0
