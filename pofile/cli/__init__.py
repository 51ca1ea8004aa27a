"""Command-line interface package for pofile.

The function :func:`main` is exposed via attribute access
(``from pofile.cli import main``). The implementation lives in
:mod:`pofile.cli.main` and is imported lazily to avoid shadowing that module
when importing ``pofile.cli.main`` directly.
"""

from importlib import import_module
from typing import Any


def __getattr__(name: str) -> Any:
    if name == "main":
        return import_module(".main", __name__).main
    raise AttributeError(f"module {__name__!r} has no attribute {name}")


__all__ = ["main"]
