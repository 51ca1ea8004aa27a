"""Integration-test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

CANONICAL_PO = r"""# German translation
msgid ""
msgstr ""
"Project-Id-Version: demo 1.0\n"
"Language: de\n"
"Plural-Forms: nplurals=2; plural=(n != 1);\n"

#. Shown in the toolbar
#: src/ui/toolbar.py:12 src/ui/menu.py:40
#, fuzzy
msgctxt "toolbar"
msgid "Open"
msgstr "Öffnen"

msgid "%d file"
msgid_plural "%d files"
msgstr[0] "%d Datei"
msgstr[1] "%d Dateien"

msgid "First line\n"
"Second line"
msgstr "Erste Zeile\n"
"Zweite Zeile"

# kept for reference
#~ msgid "Old"
#~ msgstr "Alt"
"""


@pytest.fixture
def canonical_text() -> str:
    """PO text exactly as the serializer writes it with default options."""

    return CANONICAL_PO


@pytest.fixture
def sample_po(tmp_path: Path, canonical_text: str) -> Path:
    """Write the canonical catalog to a temporary ``de.po``."""

    path = tmp_path / "de.po"
    path.write_text(canonical_text, encoding="utf-8")
    return path
